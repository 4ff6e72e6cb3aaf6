"""
MCP server for exports-cleanup.

Exposes unused-export analysis to LLMs via the Model Context Protocol.

Tools:
    - exports_scan: Full usage report for a project
    - exports_unused: Unused export names grouped by file
    - exports_usage: Which files import a given export

Usage:
    Run: exports-cleanup-mcp
"""

import asyncio

from exports_cleanup.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]
