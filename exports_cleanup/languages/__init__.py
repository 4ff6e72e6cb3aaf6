"""
Language parsers: Extract exports and imports from module sources.

This module provides the extraction layer that converts source files into
ExportedSymbol and ImportReference lists for usage matching.

Components:
    - ModuleParser: Protocol defining the parser interface
    - JavaScriptParser: Pattern-based parser for .ts/.tsx/.js/.jsx/.mjs files
    - ParseResult: Container for extracted exports and imports

The parser extracts:
    - Exports: Declarations (function, class, const, ...), default exports,
      and `export { ... }` lists
    - Imports: Named, default and namespace imports of relative modules,
      with their specifiers resolved to files

Adding a new language:
    1. Create a new parser class implementing ModuleParser protocol
    2. Implement parse() to return ParseResult
    3. Implement supports() to check file extensions
"""

from exports_cleanup.languages.base import ModuleParser
from exports_cleanup.languages.javascript import (
    JavaScriptParser,
    extract_exports,
    extract_imports,
)
from exports_cleanup.languages.models import ParseResult

__all__ = [
    "ModuleParser",
    "JavaScriptParser",
    "ParseResult",
    "extract_exports",
    "extract_imports",
]
