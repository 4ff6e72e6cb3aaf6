"""Analyzer that coordinates extraction, matching and aggregation."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from exports_cleanup.core.aggregator import aggregate
from exports_cleanup.core.config import ScanOptions, default_workers
from exports_cleanup.core.discovery import find_source_files
from exports_cleanup.core.exceptions import RootNotFoundError, SourceReadError
from exports_cleanup.core.matcher import match
from exports_cleanup.core.models import ExportedSymbol, ImportReference, ScanReport, ScanStats
from exports_cleanup.languages import JavaScriptParser, ModuleParser, ParseResult
from exports_cleanup.logging_config import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[Path, int, int], None]


class ExportAnalyzer:
    """Finds exports that nothing in the scanned tree imports."""

    def __init__(self, options: ScanOptions | None = None) -> None:
        """Initialize with scan options (defaults if omitted)."""
        self._options = options or ScanOptions()
        self._parser: ModuleParser = JavaScriptParser(
            size_estimator=self._options.size_estimator
        )

    def analyze(
        self,
        root_dir: Path | str,
        on_progress: ProgressCallback | None = None,
    ) -> ScanReport:
        """Scan a directory and report usage of every export.

        Runs in two phases:
        1. Extraction: every file is parsed independently on a thread pool
        2. Matching: once all files are done, exports are matched against the
           combined imports and aggregated per file

        Args:
            root_dir: Directory to scan
            on_progress: Optional callback for progress updates (file, current, total)

        Returns:
            ScanReport with per-file usage and totals

        Raises:
            RootNotFoundError: If root_dir is missing or not a directory
        """
        root = Path(root_dir).resolve()
        if not root.is_dir():
            raise RootNotFoundError(f"Directory not found: {root}")

        files = find_source_files(root, self._options.exclude)
        stats = ScanStats()

        results = self._extract_all(root, files, stats, on_progress)

        all_exports: list[ExportedSymbol] = []
        all_imports: list[ImportReference] = []
        for result in results:
            all_exports.extend(result.exports)
            all_imports.extend(result.imports)

        stats.exports = len(all_exports)
        stats.imports = len(all_imports)

        if not self._options.include_types:
            all_exports = [e for e in all_exports if not e.kind.is_type_only]

        report = aggregate(match(all_exports, all_imports))
        report.stats = stats

        logger.debug(
            f"Scanned {stats.files} files: {report.total_exports} exports, "
            f"{report.unused_exports} unused"
        )
        return report

    def _extract_all(
        self,
        root: Path,
        files: list[Path],
        stats: ScanStats,
        on_progress: ProgressCallback | None,
    ) -> list[ParseResult]:
        """Parse files in parallel and return results in discovery order."""
        total_files = len(files)
        collected: dict[int, ParseResult] = {}
        max_workers = self._options.max_workers or default_workers()

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(self._parser.parse, file, root): i for i, file in enumerate(files)
            }
            for completed, future in enumerate(as_completed(futures), start=1):
                i = futures[future]
                file = files[i]
                try:
                    collected[i] = future.result()
                    stats.files += 1
                except SourceReadError as e:
                    logger.warning(f"Skipping {file}: {e}")
                    stats.skipped += 1
                    stats.errors.append(str(e))

                if on_progress:
                    on_progress(file, completed, total_files)

        return [collected[i] for i in sorted(collected)]


def analyze(
    root_dir: Path | str,
    options: ScanOptions | None = None,
    on_progress: ProgressCallback | None = None,
) -> ScanReport:
    """Scan root_dir for unused exports. See ExportAnalyzer.analyze."""
    return ExportAnalyzer(options).analyze(root_dir, on_progress=on_progress)
