"""Scan options and defaults."""

from __future__ import annotations

import math
import os
from collections.abc import Callable
from dataclasses import dataclass, field

SizeEstimator = Callable[[str], int]

DEFAULT_INCLUDE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs")

DEFAULT_EXCLUDES = [
    "node_modules",
    "dist",
    "build",
    ".next",
    "coverage",
    "__tests__",
    "*.d.ts",
    "*.test.*",
    "*.spec.*",
]

# Minified output is roughly 60% of the source text.
MINIFIED_RATIO = 0.6

# Entries of an `export { ... }` list have no body to measure.
REEXPORT_SIZE_BYTES = 100

_MAX_DEFAULT_WORKERS = 8


def estimate_size(code: str) -> int:
    """Estimate the minified byte size of a block of source text."""
    return max(0, math.floor(len(code) * MINIFIED_RATIO + 0.5))


def default_workers() -> int:
    return min(_MAX_DEFAULT_WORKERS, os.cpu_count() or 1)


@dataclass
class ScanOptions:
    """Options for a single scan.

    Attributes:
        include_types: Keep `type` and `interface` exports in the results
        exclude: Extra glob patterns to exclude, on top of DEFAULT_EXCLUDES
        max_workers: Parallel extraction workers (None = CPU count, max 8)
        size_estimator: Maps a declaration's text to an estimated byte count
    """

    include_types: bool = False
    exclude: list[str] = field(default_factory=list)
    max_workers: int | None = None
    size_estimator: SizeEstimator = estimate_size
