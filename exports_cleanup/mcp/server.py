"""MCP server implementation for exports-cleanup."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from exports_cleanup.core.aggregator import find_records
from exports_cleanup.core.analyzer import analyze
from exports_cleanup.core.config import ScanOptions
from exports_cleanup.core.exceptions import ExportsCleanupError
from exports_cleanup.core.models import ScanReport
from exports_cleanup.logging_config import get_logger
from exports_cleanup.output import record_to_dict, report_to_dict, unused_by_file

logger = get_logger(__name__)

server = Server("exports-cleanup")

_SCAN_PROPERTIES: dict[str, Any] = {
    "path": {
        "type": "string",
        "description": "Directory to scan (default: current directory)",
    },
    "include_types": {
        "type": "boolean",
        "description": "Include type and interface exports (default: false)",
        "default": False,
    },
    "exclude": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Additional glob patterns to exclude",
    },
}


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="exports_scan",
            description=(
                "Scan a JavaScript/TypeScript project for exports that are never imported. "
                "Returns every export per file with its consumer files and estimated size."
            ),
            inputSchema={"type": "object", "properties": _SCAN_PROPERTIES},
        ),
        Tool(
            name="exports_unused",
            description=(
                "List the names of unused exports grouped by file, plus the estimated "
                "bundle savings from removing them."
            ),
            inputSchema={"type": "object", "properties": _SCAN_PROPERTIES},
        ),
        Tool(
            name="exports_usage",
            description=(
                "Find which files import a given export. "
                "Returns the declaring location and all consumer files."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "name": {
                        "type": "string",
                        "description": "Name of the exported symbol",
                    },
                    **_SCAN_PROPERTIES,
                },
                "required": ["name"],
            },
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "exports_scan":
            result = _handle_scan(arguments)
        elif name == "exports_unused":
            result = _handle_unused(arguments)
        elif name == "exports_usage":
            result = _handle_usage(arguments["name"], arguments)
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except ExportsCleanupError as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]
    except Exception as e:
        logger.exception(f"Tool {name} failed")
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]


def _scan(arguments: dict[str, Any]) -> tuple[Path, ScanReport]:
    """Run a scan from tool arguments."""
    root = Path(arguments.get("path") or Path.cwd()).resolve()
    options = ScanOptions(
        include_types=bool(arguments.get("include_types", False)),
        exclude=list(arguments.get("exclude") or []),
    )
    return root, analyze(root, options)


def _handle_scan(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle exports_scan tool."""
    root, report = _scan(arguments)
    return report_to_dict(report, root)


def _handle_unused(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle exports_unused tool."""
    root, report = _scan(arguments)
    return {
        "unused": unused_by_file(report, root),
        "unused_exports": report.unused_exports,
        "estimated_savings_bytes": report.estimated_savings_bytes,
    }


def _handle_usage(name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle exports_usage tool."""
    root, report = _scan(arguments)
    try:
        records = find_records(report, name)
    except ExportsCleanupError as e:
        return {"error": str(e), "results": []}
    return {"results": [record_to_dict(r, root) for r in records]}


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
