"""Data models for exports-cleanup."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

DEFAULT_MARKER = "default"
NAMESPACE_MARKER = "*"


class ExportKind(Enum):
    """Kinds of exported declarations."""

    FUNCTION = "function"
    CLASS = "class"
    CONST = "const"
    VARIABLE = "variable"
    TYPE = "type"
    INTERFACE = "interface"
    ENUM = "enum"
    DEFAULT = "default"

    @property
    def is_type_only(self) -> bool:
        """True for declarations that vanish from compiled output."""
        return self in (ExportKind.TYPE, ExportKind.INTERFACE)


@dataclass(frozen=True)
class ExportedSymbol:
    """One exported declaration found in one file."""

    name: str
    kind: ExportKind
    source_file: Path
    line: int
    is_default: bool
    estimated_size_bytes: int


@dataclass(frozen=True)
class ImportReference:
    """One binding introduced by an import statement."""

    local_name: str
    source_specifier: str
    resolved_source_file: Path
    importing_file: Path
    line: int
    is_default: bool = False
    is_namespace: bool = False


@dataclass(frozen=True)
class UsageRecord:
    """An export paired with the files that import it."""

    export: ExportedSymbol
    consumer_files: tuple[Path, ...] = ()

    @property
    def usage_count(self) -> int:
        return len(self.consumer_files)

    @property
    def is_unused(self) -> bool:
        return not self.consumer_files


@dataclass
class FileReport:
    """Usage records for the exports declared in a single file."""

    file: Path
    records: list[UsageRecord] = field(default_factory=list)

    @property
    def unused_count(self) -> int:
        return sum(1 for r in self.records if r.is_unused)

    @property
    def used_count(self) -> int:
        return len(self.records) - self.unused_count

    @property
    def unused_records(self) -> list[UsageRecord]:
        return [r for r in self.records if r.is_unused]

    @property
    def estimated_savings_bytes(self) -> int:
        return sum(r.export.estimated_size_bytes for r in self.unused_records)


class ScanStats:
    """Statistics from a scan operation."""

    def __init__(self) -> None:
        self.files: int = 0
        self.exports: int = 0
        self.imports: int = 0
        self.skipped: int = 0
        self.errors: list[str] = []

    def __repr__(self) -> str:
        return (
            f"ScanStats(files={self.files}, exports={self.exports}, "
            f"imports={self.imports}, skipped={self.skipped}, errors={len(self.errors)})"
        )


@dataclass
class ScanReport:
    """Totals and per-file reports for one scan."""

    files: list[FileReport]
    total_exports: int
    unused_exports: int
    used_exports: int
    estimated_savings_bytes: int
    stats: ScanStats = field(default_factory=ScanStats)
