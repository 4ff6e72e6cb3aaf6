"""
Core module: data models, exceptions, options, and the scan pipeline.

Models (models.py):
    - ExportedSymbol: A declaration exported from a file
    - ImportReference: A binding imported from a relative module
    - UsageRecord: An export paired with the files that import it
    - FileReport/ScanReport: Per-file and global totals

Exceptions (exceptions.py):
    - ExportsCleanupError: Base exception for all exports-cleanup errors
    - RootNotFoundError: Scan root is missing
    - SourceReadError: A source file could not be read
    - ExportNotFoundError: No export with the requested name

Pipeline:
    - discovery.find_source_files(): Source files under the root
    - resolver.resolve_import(): Import specifier -> module file
    - matcher.match(): Exports -> UsageRecords
    - aggregator.aggregate(): UsageRecords -> ScanReport
    - analyzer.analyze(): The whole scan, with parallel extraction
"""

from exports_cleanup.core.config import DEFAULT_EXCLUDES, ScanOptions, estimate_size
from exports_cleanup.core.exceptions import (
    ExportNotFoundError,
    ExportsCleanupError,
    RootNotFoundError,
    SourceReadError,
)
from exports_cleanup.core.models import (
    ExportedSymbol,
    ExportKind,
    FileReport,
    ImportReference,
    ScanReport,
    ScanStats,
    UsageRecord,
)

__all__ = [
    # Models
    "ExportedSymbol",
    "ExportKind",
    "ImportReference",
    "UsageRecord",
    "FileReport",
    "ScanReport",
    "ScanStats",
    # Options
    "DEFAULT_EXCLUDES",
    "ScanOptions",
    "estimate_size",
    # Exceptions
    "ExportsCleanupError",
    "RootNotFoundError",
    "SourceReadError",
    "ExportNotFoundError",
]
