"""Data models for language parser results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from exports_cleanup.core.models import ExportedSymbol, ImportReference


@dataclass
class ParseResult:
    """Result of parsing a file."""

    file: Path
    exports: list[ExportedSymbol] = field(default_factory=list)
    imports: list[ImportReference] = field(default_factory=list)
