"""Parsing utilities for declaration surfaces."""

from parse.treesitter_declarations import (
    extract_declarations,
    extract_declarations_from_text,
)
from parse.treesitter_document import (
    DocumentParseError,
    ParsedDocument,
    parse_document,
)

__all__ = [
    "DocumentParseError",
    "ParsedDocument",
    "extract_declarations",
    "extract_declarations_from_text",
    "parse_document",
]
