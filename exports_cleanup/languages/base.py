"""Protocol for language parsers."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from exports_cleanup.languages.models import ParseResult


class ModuleParser(Protocol):
    """Protocol for module parsers."""

    def parse(self, file: Path, root_dir: Path) -> ParseResult:
        """Parse a file and extract its exports and imports."""
        ...

    def supports(self, file: Path) -> bool:
        """Check if this parser supports the given file."""
        ...
