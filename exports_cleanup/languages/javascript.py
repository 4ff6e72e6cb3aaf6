"""Lexical export/import extraction for JavaScript and TypeScript sources.

Extraction is pattern based, not a parser: declarations are recognized by a
small set of line-anchored regular expressions. Constructs that match no
pattern are invisible, and exports inside comments or strings are not
excluded.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import NamedTuple

from exports_cleanup.core.config import (
    DEFAULT_INCLUDE_EXTENSIONS,
    REEXPORT_SIZE_BYTES,
    SizeEstimator,
    estimate_size,
)
from exports_cleanup.core.exceptions import SourceReadError
from exports_cleanup.core.models import (
    DEFAULT_MARKER,
    NAMESPACE_MARKER,
    ExportedSymbol,
    ExportKind,
    ImportReference,
)
from exports_cleanup.core.resolver import is_relative_specifier, resolve_import
from exports_cleanup.languages.models import ParseResult

_NAME = r"[\w$]+"
_SPECIFIER = r"""['"]([^'"]+)['"]"""

# Most specific first: when two patterns match at the same offset, the
# earlier one wins.
_EXPORT_PATTERNS: list[tuple[re.Pattern[str], ExportKind]] = [
    (
        re.compile(
            rf"^export\s+default\s+(?:async\s+)?(?:function\b[ \t]*\*?|class\b)"
            rf"[ \t]*(?!extends\b)({_NAME})?",
            re.MULTILINE,
        ),
        ExportKind.DEFAULT,
    ),
    (
        re.compile(
            rf"^export\s+default\s+(?!(?:async|function|class)\b)({_NAME})\s*;?[ \t]*$",
            re.MULTILINE,
        ),
        ExportKind.DEFAULT,
    ),
    (
        re.compile(rf"^export\s+async\s+function\b\s*\*?\s*({_NAME})", re.MULTILINE),
        ExportKind.FUNCTION,
    ),
    (
        re.compile(rf"^export\s+function\b\s*\*?\s*({_NAME})", re.MULTILINE),
        ExportKind.FUNCTION,
    ),
    (
        re.compile(rf"^export\s+(?:abstract\s+)?class\s+({_NAME})", re.MULTILINE),
        ExportKind.CLASS,
    ),
    (
        re.compile(rf"^export\s+const\s+({_NAME})\s*[=:]", re.MULTILINE),
        ExportKind.CONST,
    ),
    (
        re.compile(rf"^export\s+(?:let|var)\s+({_NAME})\s*[=:]", re.MULTILINE),
        ExportKind.VARIABLE,
    ),
    (
        re.compile(rf"^export\s+type\s+({_NAME})", re.MULTILINE),
        ExportKind.TYPE,
    ),
    (
        re.compile(rf"^export\s+interface\s+({_NAME})", re.MULTILINE),
        ExportKind.INTERFACE,
    ),
    (
        re.compile(rf"^export\s+(?:const\s+)?enum\s+({_NAME})", re.MULTILINE),
        ExportKind.ENUM,
    ),
]

_EXPORT_LIST = re.compile(r"^export\s*\{([^}]*)\}", re.MULTILINE)

_NAMED_IMPORT = re.compile(
    rf"\bimport\s*(?:type\s+)?(?:{_NAME}\s*,\s*)?\{{([^}}]*)\}}\s*from\s*{_SPECIFIER}"
)
_DEFAULT_IMPORT = re.compile(
    rf"\bimport\s+(?:type\s+)?({_NAME})"
    rf"(?:\s*,\s*(?:\{{[^}}]*\}}|\*\s*as\s+{_NAME}))?\s+from\s*{_SPECIFIER}"
)
_NAMESPACE_IMPORT = re.compile(
    rf"\bimport\s*(?:{_NAME}\s*,\s*)?\*\s*as\s+({_NAME})\s+from\s*{_SPECIFIER}"
)

_COMMENT = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)
_ALIAS_SPLIT = re.compile(r"\s+as\s+")
_TYPE_MODIFIER = re.compile(r"^type\s+(?!as\s)")
_IDENTIFIER = re.compile(rf"^{_NAME}$")


class _Binding(NamedTuple):
    imported: str
    exported: str
    is_type: bool


class _Candidate(NamedTuple):
    start: int
    priority: int
    order: int
    name: str
    kind: ExportKind
    from_list: bool


class JavaScriptParser:
    """Parser for JavaScript and TypeScript module sources."""

    def __init__(self, size_estimator: SizeEstimator = estimate_size) -> None:
        self._size_estimator = size_estimator

    def supports(self, file: Path) -> bool:
        """Check if this parser supports the given file."""
        return file.suffix in DEFAULT_INCLUDE_EXTENSIONS

    def parse(self, file: Path, root_dir: Path) -> ParseResult:
        """Read a file and extract its exports and imports."""
        try:
            source = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Cannot read {file}: {e}") from e

        return ParseResult(
            file=file,
            exports=extract_exports(source, file, self._size_estimator),
            imports=extract_imports(source, file, root_dir),
        )


def extract_exports(
    text: str,
    file: Path,
    size_estimator: SizeEstimator = estimate_size,
) -> list[ExportedSymbol]:
    """Extract exported declarations in source order.

    Overlapping matches at the same offset keep the most specific pattern, and
    a named export that appears twice keeps its first occurrence.
    """
    candidates = _find_candidates(text)
    candidates.sort(key=lambda c: (c.start, c.priority, c.order))

    exports: list[ExportedSymbol] = []
    claimed: set[int] = set()
    seen_names: set[str] = set()

    for candidate in candidates:
        if not candidate.from_list:
            if candidate.start in claimed:
                continue
            claimed.add(candidate.start)

        is_default = candidate.kind is ExportKind.DEFAULT
        if not is_default:
            if candidate.name in seen_names:
                continue
            seen_names.add(candidate.name)

        if candidate.from_list:
            size = REEXPORT_SIZE_BYTES
        else:
            size = _estimate_declaration_size(text, candidate.start, size_estimator)

        exports.append(
            ExportedSymbol(
                name=candidate.name,
                kind=candidate.kind,
                source_file=file,
                line=_line_number(text, candidate.start),
                is_default=is_default,
                estimated_size_bytes=size,
            )
        )

    return exports


def extract_imports(text: str, file: Path, root_dir: Path) -> list[ImportReference]:
    """Extract relative import bindings.

    Named imports yield one reference per listed name, keyed by the imported
    (pre-`as`) name. Bare package specifiers are dropped.
    """
    imports: list[ImportReference] = []

    for match in _NAMED_IMPORT.finditer(text):
        specifier = match.group(2)
        if not is_relative_specifier(specifier):
            continue
        resolved = resolve_import(specifier, file, root_dir)
        line = _line_number(text, match.start())
        for binding in _parse_bindings(match.group(1)):
            name = binding.imported
            if not _IDENTIFIER.match(name):
                continue
            imports.append(
                ImportReference(
                    local_name=name,
                    source_specifier=specifier,
                    resolved_source_file=resolved,
                    importing_file=file,
                    line=line,
                    is_default=name == DEFAULT_MARKER,
                )
            )

    for match in _DEFAULT_IMPORT.finditer(text):
        specifier = match.group(2)
        if not is_relative_specifier(specifier):
            continue
        imports.append(
            ImportReference(
                local_name=DEFAULT_MARKER,
                source_specifier=specifier,
                resolved_source_file=resolve_import(specifier, file, root_dir),
                importing_file=file,
                line=_line_number(text, match.start()),
                is_default=True,
            )
        )

    for match in _NAMESPACE_IMPORT.finditer(text):
        specifier = match.group(2)
        if not is_relative_specifier(specifier):
            continue
        imports.append(
            ImportReference(
                local_name=NAMESPACE_MARKER,
                source_specifier=specifier,
                resolved_source_file=resolve_import(specifier, file, root_dir),
                importing_file=file,
                line=_line_number(text, match.start()),
                is_namespace=True,
            )
        )

    return imports


def _find_candidates(text: str) -> list[_Candidate]:
    candidates = []
    for priority, (pattern, kind) in enumerate(_EXPORT_PATTERNS):
        for match in pattern.finditer(text):
            name = match.group(1) or DEFAULT_MARKER
            candidates.append(_Candidate(match.start(), priority, 0, name, kind, False))

    list_priority = len(_EXPORT_PATTERNS)
    for match in _EXPORT_LIST.finditer(text):
        for order, binding in enumerate(_parse_bindings(match.group(1))):
            if not _IDENTIFIER.match(binding.exported):
                continue
            kind = ExportKind.TYPE if binding.is_type else ExportKind.CONST
            candidates.append(
                _Candidate(match.start(), list_priority, order, binding.exported, kind, True)
            )

    return candidates


def _parse_bindings(body: str) -> list[_Binding]:
    """Split the body of a `{ a, type b, c as d }` binding list."""
    bindings = []
    for entry in _COMMENT.sub("", body).split(","):
        entry = entry.strip()
        if not entry:
            continue
        is_type = bool(_TYPE_MODIFIER.match(entry))
        parts = _ALIAS_SPLIT.split(_TYPE_MODIFIER.sub("", entry))
        bindings.append(_Binding(parts[0].strip(), parts[-1].strip(), is_type))
    return bindings


def _estimate_declaration_size(text: str, start: int, size_estimator: SizeEstimator) -> int:
    """Estimate the size of the declaration from start up to the next blank line."""
    end = text.find("\n\n", start)
    if end == -1:
        end = len(text)
    return max(0, int(size_estimator(text[start:end])))


def _line_number(text: str, index: int) -> int:
    return text.count("\n", 0, index) + 1
