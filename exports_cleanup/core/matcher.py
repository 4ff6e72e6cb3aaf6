"""Match exports against the imports that consume them."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from exports_cleanup.core.models import ExportedSymbol, ImportReference, UsageRecord

_SOURCE_EXTENSION = re.compile(r"\.(ts|tsx|js|jsx|mjs)$")


def module_key(path: Path) -> str:
    """Identify a module independently of its source extension.

    An import resolved to `./x.js` and an export declared in `./x.ts` share
    the key `./x`.
    """
    return _SOURCE_EXTENSION.sub("", str(path))


class ImportIndex:
    """Imports grouped by the module they target.

    Uses a dict keyed by module_key() for O(1) lookup per export.
    """

    __slots__ = ("_by_module", "_count")

    def __init__(self, imports: Iterable[ImportReference] = ()) -> None:
        self._by_module: dict[str, list[ImportReference]] = {}
        self._count = 0
        for ref in imports:
            self.add(ref)

    def add(self, ref: ImportReference) -> None:
        """Add an import reference. O(1)."""
        self._by_module.setdefault(module_key(ref.resolved_source_file), []).append(ref)
        self._count += 1

    def imports_of(self, file: Path) -> list[ImportReference]:
        """All imports that target the module declared in file."""
        return self._by_module.get(module_key(file), [])

    def consumers_of(self, export: ExportedSymbol) -> tuple[Path, ...]:
        """Distinct importing files whose imports bind this export, in first-seen order."""
        consumers = dict.fromkeys(
            ref.importing_file
            for ref in self.imports_of(export.source_file)
            if binds(ref, export)
        )
        return tuple(consumers)

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return f"ImportIndex(modules={len(self._by_module)}, imports={self._count})"


def binds(ref: ImportReference, export: ExportedSymbol) -> bool:
    """Check whether an import reference consumes an export of its target module.

    Namespace imports are opaque and conservatively consume every export.
    Default exports match default imports regardless of names; named exports
    match on name.
    """
    if ref.is_namespace:
        return True
    if export.is_default:
        return ref.is_default
    return ref.local_name == export.name


def match(
    exports: Iterable[ExportedSymbol],
    imports: Iterable[ImportReference],
) -> list[UsageRecord]:
    """Pair every export with the files that import it.

    Returns:
        One UsageRecord per export, in export order
    """
    index = ImportIndex(imports)
    return [
        UsageRecord(export=export, consumer_files=index.consumers_of(export))
        for export in exports
    ]
