"""Source file discovery."""

from __future__ import annotations

import fnmatch
from pathlib import Path

from exports_cleanup.core.config import DEFAULT_EXCLUDES, DEFAULT_INCLUDE_EXTENSIONS
from exports_cleanup.logging_config import get_logger

logger = get_logger(__name__)


def find_source_files(
    root_dir: Path,
    exclude_patterns: list[str] | None = None,
    extensions: tuple[str, ...] = DEFAULT_INCLUDE_EXTENSIONS,
) -> list[Path]:
    """List source files under a directory, sorted by path.

    Args:
        root_dir: Absolute directory to search
        exclude_patterns: Additional glob patterns to exclude (e.g., "legacy", "src/gen/*")
        extensions: File suffixes to include

    Returns:
        Absolute file paths in lexicographic order
    """
    extra = [p.rstrip("/") for p in exclude_patterns or [] if p.strip()]
    all_excludes = DEFAULT_EXCLUDES + extra

    files = []
    for file in sorted(root_dir.rglob("*")):
        if file.suffix not in extensions or not file.is_file():
            continue
        relative_path = file.relative_to(root_dir).as_posix()
        if should_exclude(relative_path, all_excludes):
            continue
        files.append(file)

    logger.debug(f"Discovered {len(files)} source files under {root_dir}")
    return files


def should_exclude(path: str, patterns: list[str]) -> bool:
    """Check if a relative path matches any exclusion pattern.

    Excludes:
    - Any path component starting with '.' (hidden files/directories)
    - Any path component matching an exclusion pattern
    - The whole relative path matching an exclusion pattern
    """
    parts = Path(path).parts
    for part in parts:
        if part.startswith("."):
            return True
        for pattern in patterns:
            if fnmatch.fnmatch(part, pattern):
                return True
    return any(fnmatch.fnmatch(path, pattern) for pattern in patterns)
