"""Group usage records into per-file and global totals."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from exports_cleanup.core.exceptions import ExportNotFoundError
from exports_cleanup.core.models import FileReport, ScanReport, UsageRecord


def aggregate(records: Iterable[UsageRecord]) -> ScanReport:
    """Build a ScanReport from usage records.

    Files keep the order in which their first export was seen, then are
    stable-sorted by unused count, highest first. Files without exports are
    dropped.
    """
    by_file: dict[Path, FileReport] = {}
    for record in records:
        file = record.export.source_file
        if file not in by_file:
            by_file[file] = FileReport(file=file)
        by_file[file].records.append(record)

    files = [report for report in by_file.values() if report.records]
    files.sort(key=lambda report: report.unused_count, reverse=True)

    total_exports = sum(len(report.records) for report in files)
    unused_exports = sum(report.unused_count for report in files)
    savings = sum(report.estimated_savings_bytes for report in files)

    return ScanReport(
        files=files,
        total_exports=total_exports,
        unused_exports=unused_exports,
        used_exports=total_exports - unused_exports,
        estimated_savings_bytes=savings,
    )


def find_records(report: ScanReport, name: str) -> list[UsageRecord]:
    """Get the usage records of every export called name.

    Raises:
        ExportNotFoundError: If no export in the report has that name
    """
    records = [
        record
        for file_report in report.files
        for record in file_report.records
        if record.export.name == name
    ]
    if not records:
        raise ExportNotFoundError(f"No export named '{name}'")
    return records
