"""CLI entry point for exports-cleanup."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from exports_cleanup.core.aggregator import find_records
from exports_cleanup.core.analyzer import ExportAnalyzer
from exports_cleanup.core.config import ScanOptions
from exports_cleanup.core.exceptions import ExportsCleanupError
from exports_cleanup.core.models import ScanReport
from exports_cleanup.logging_config import setup_logging
from exports_cleanup.output import (
    kind_label,
    print_compact_result,
    print_scan_result,
    record_to_dict,
    relative_path,
    report_to_dict,
)

app = typer.Typer(
    name="exports-cleanup",
    help="Find unused exports in JavaScript and TypeScript codebases.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def parse_ignore(values: list[str] | None) -> list[str]:
    """Split comma-separated ignore patterns."""
    patterns = []
    for value in values or []:
        patterns.extend(p.strip() for p in value.split(",") if p.strip())
    return patterns


def run_scan(path: Path, options: ScanOptions, show_progress: bool) -> ScanReport:
    """Run a scan, with a progress bar when show_progress is set."""
    analyzer = ExportAnalyzer(options)
    if not show_progress:
        return analyzer.analyze(path)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=err_console,
        transient=True,
    ) as progress:
        task = progress.add_task("Scanning for exports...", total=None)

        def on_progress(file: Path, current: int, total: int) -> None:
            progress.update(task, total=total, completed=current)
            progress.update(task, description=f"[cyan]{escape(relative_path(file, path))}[/]")

        return analyzer.analyze(path, on_progress=on_progress)


@app.command()
def scan(
    path: Annotated[Path, typer.Argument(help="Directory to scan")] = Path("."),
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    compact: Annotated[bool, typer.Option("--compact", "-c", help="Compact output")] = False,
    include_types: Annotated[
        bool, typer.Option("--include-types", help="Include type and interface exports")
    ] = False,
    show_used: Annotated[bool, typer.Option("--show-used", help="Also show used exports")] = False,
    ignore: Annotated[
        list[str] | None,
        typer.Option("--ignore", "-i", help="Additional patterns to ignore (comma-separated)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log errors")] = False,
) -> None:
    """Scan a directory for exports that are never imported."""
    setup_logging(verbose=verbose, quiet=quiet)
    path = path.resolve()
    options = ScanOptions(include_types=include_types, exclude=parse_ignore(ignore))

    try:
        report = run_scan(path, options, show_progress=not output_json and not quiet)
    except ExportsCleanupError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if output_json:
        print(json.dumps(report_to_dict(report, path), indent=2))
        return

    if compact:
        print_compact_result(console, report, path)
    else:
        print_scan_result(console, report, path, show_used=show_used)

    if report.stats.skipped:
        console.print(f"[dim]Skipped {report.stats.skipped} unreadable file(s)[/]")

    # Non-zero exit lets CI fail on dead exports.
    if report.unused_exports > 0:
        raise typer.Exit(code=1)


@app.command()
def usage(
    name: Annotated[str, typer.Argument(help="Export name to look up")],
    path: Annotated[Path, typer.Argument(help="Directory to scan")] = Path("."),
    include_types: Annotated[
        bool, typer.Option("--include-types", help="Include type and interface exports")
    ] = False,
    ignore: Annotated[
        list[str] | None,
        typer.Option("--ignore", "-i", help="Additional patterns to ignore (comma-separated)"),
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show which files import an export (who uses this?)."""
    setup_logging()
    path = path.resolve()
    options = ScanOptions(include_types=include_types, exclude=parse_ignore(ignore))

    try:
        report = ExportAnalyzer(options).analyze(path)
        records = find_records(report, name)
    except ExportsCleanupError as e:
        if output_json:
            print(json.dumps({"error": str(e), "results": []}))
        else:
            err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if output_json:
        print(json.dumps({"results": [record_to_dict(r, path) for r in records]}))
        return

    for record in records:
        export = record.export
        location = f"{relative_path(export.source_file, path)}:{export.line}"
        console.print(f"\n[bold cyan]{escape(export.name)}[/] {kind_label(export.kind)}")
        console.print(f"  [dim]{escape(location)}[/]")
        if record.is_unused:
            console.print("  [red]Never imported[/]")
        else:
            console.print("  [green]Imported by:[/]")
            for consumer in record.consumer_files:
                console.print(f"    [cyan]{escape(relative_path(consumer, path))}[/]")


if __name__ == "__main__":
    app()
