"""Resolve relative import specifiers to module file paths."""

from __future__ import annotations

import os
from pathlib import Path

# Probe order is fixed so resolution is reproducible for a given filesystem.
RESOLVE_SUFFIXES = (
    "",
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".mjs",
    "/index.ts",
    "/index.tsx",
    "/index.js",
)


def is_relative_specifier(specifier: str) -> bool:
    """True for specifiers that point into the project rather than a package."""
    return specifier.startswith((".", "/"))


def resolve_import(specifier: str, importing_file: Path, root_dir: Path) -> Path:
    """Resolve an import specifier to the file it most likely refers to.

    The specifier is joined onto the importing file's directory and each of
    RESOLVE_SUFFIXES is probed in order; the first existing file wins. A
    candidate the filesystem refuses to stat (e.g. a name that is too long)
    counts as missing.

    Returns:
        The first existing candidate, or the joined base path when none exists
    """
    base = _join(importing_file.parent, specifier)

    for suffix in RESOLVE_SUFFIXES:
        candidate = Path(f"{base}{suffix}")
        if _exists(candidate):
            return candidate

    return base


def _join(directory: Path, specifier: str) -> Path:
    return Path(os.path.normpath(os.path.join(directory, specifier)))


def _exists(candidate: Path) -> bool:
    try:
        return candidate.is_file()
    except OSError:
        return False
