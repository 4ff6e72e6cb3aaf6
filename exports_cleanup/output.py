"""Report rendering: full report, compact name list, and JSON-ready dicts."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from exports_cleanup.core.models import ExportedSymbol, ExportKind, ScanReport, UsageRecord

_RULE_WIDTH = 50

KIND_STYLES = {
    ExportKind.FUNCTION: "blue",
    ExportKind.CLASS: "magenta",
    ExportKind.CONST: "cyan",
    ExportKind.VARIABLE: "cyan",
    ExportKind.TYPE: "bright_black",
    ExportKind.INTERFACE: "bright_black",
    ExportKind.ENUM: "yellow",
    ExportKind.DEFAULT: "green",
}


def format_bytes(size: int) -> str:
    """Format a byte count for humans."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def relative_path(file: Path, root: Path) -> str:
    try:
        return file.relative_to(root).as_posix()
    except ValueError:
        return str(file)


def kind_label(kind: ExportKind) -> str:
    style = KIND_STYLES.get(kind, "white")
    return f"[{style}]\\[{kind.value}][/]"


def print_scan_result(
    console: Console, report: ScanReport, root: Path, show_used: bool = False
) -> None:
    """Print the full report: summary, then each file's unused exports."""
    console.print()

    if report.unused_exports == 0:
        console.print("[green]No unused exports found![/]")
        console.print(
            f"[dim]   Scanned {report.total_exports} exports across "
            f"{len(report.files)} files.[/]"
        )
        console.print()
        return

    console.print(f"[bold yellow]Unused Exports ({report.unused_exports} found):[/]")
    console.print()

    console.print("[dim]Summary:[/]")
    console.print(f"  Total exports:  {report.total_exports}")
    console.print(f"  [red]Unused:[/]         {report.unused_exports}")
    console.print(f"  [green]Used:[/]           {report.used_exports}")
    console.print(
        f"  Potential savings: [cyan]{format_bytes(report.estimated_savings_bytes)}[/]"
    )
    console.print()

    for file_report in report.files:
        if file_report.unused_count == 0 and not show_used:
            continue

        console.print(f"[bold]{escape(relative_path(file_report.file, root))}[/]")

        for record in file_report.records:
            export = record.export
            label = kind_label(export.kind)
            if record.is_unused:
                console.print(f"  [red]x[/] {escape(export.name)} {label}")
                console.print(f"[dim]     Line {export.line} - exported but never imported[/]")
            elif show_used:
                console.print(f"  [green]✓[/] {escape(export.name)} {label}")
                console.print(f"[dim]     Used in {record.usage_count} file(s)[/]")
        console.print()

    console.print(f"[dim]{'─' * _RULE_WIDTH}[/]")
    console.print(
        "[bold]Potential bundle reduction:[/] "
        f"[cyan]{format_bytes(report.estimated_savings_bytes)}[/]"
    )
    console.print()
    console.print("[dim]Tips:[/]")
    console.print("[dim]  • Remove unused exports to reduce bundle size[/]")
    console.print("[dim]  • Some exports may be used dynamically (check manually)[/]")
    console.print('[dim]  • Entry points and public APIs may show as "unused"[/]')
    console.print()


def print_compact_result(console: Console, report: ScanReport, root: Path) -> None:
    """Print only the names of unused exports, grouped by file."""
    console.print()

    if report.unused_exports == 0:
        console.print("[green]No unused exports found![/]")
        return

    console.print(f"[bold yellow]Found {report.unused_exports} unused exports:[/]")
    console.print()

    for file_report in report.files:
        if file_report.unused_count == 0:
            continue
        names = ", ".join(r.export.name for r in file_report.unused_records)
        console.print(f"  [dim]{escape(relative_path(file_report.file, root))}[/]")
        console.print(f"    [red]{escape(names)}[/]")

    console.print()
    console.print(f"[dim]Potential savings: {format_bytes(report.estimated_savings_bytes)}[/]")
    console.print()


def export_to_dict(export: ExportedSymbol, root: Path) -> dict[str, Any]:
    """Convert an ExportedSymbol to a JSON-serializable dict."""
    return {
        "name": export.name,
        "kind": export.kind.value,
        "file": relative_path(export.source_file, root),
        "line": export.line,
        "is_default": export.is_default,
        "estimated_size_bytes": export.estimated_size_bytes,
    }


def record_to_dict(record: UsageRecord, root: Path) -> dict[str, Any]:
    """Convert a UsageRecord to a JSON-serializable dict."""
    return {
        "export": export_to_dict(record.export, root),
        "usage_count": record.usage_count,
        "used_in": [relative_path(f, root) for f in record.consumer_files],
        "is_unused": record.is_unused,
    }


def report_to_dict(report: ScanReport, root: Path) -> dict[str, Any]:
    """Convert a ScanReport to a JSON-serializable dict with root-relative paths."""
    return {
        "files": [
            {
                "file": relative_path(file_report.file, root),
                "exports": [record_to_dict(r, root) for r in file_report.records],
                "unused_count": file_report.unused_count,
                "used_count": file_report.used_count,
            }
            for file_report in report.files
        ],
        "total_exports": report.total_exports,
        "unused_exports": report.unused_exports,
        "used_exports": report.used_exports,
        "estimated_savings_bytes": report.estimated_savings_bytes,
    }


def unused_by_file(report: ScanReport, root: Path) -> dict[str, list[str]]:
    """Map each file with unused exports to the names of those exports."""
    return {
        relative_path(file_report.file, root): [r.export.name for r in file_report.unused_records]
        for file_report in report.files
        if file_report.unused_count
    }
