"""Tree-sitter parsing of declaration (``.d.ts``) documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tree_sitter import Language, Parser
from tree_sitter_typescript import language_typescript as get_typescript_language

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

_PARSER: Parser | None = None


class DocumentParseError(Exception):
    """Raised when a document cannot be parsed into a clean syntax tree."""

    def __init__(self, document_name: str, message: str, line: int = 0, column: int = 0):
        self.document_name = document_name
        self.line = line
        self.column = column
        super().__init__(f"{document_name}:{line}:{column}: {message}")


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with TypeScript language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_typescript_language())
        _PARSER = Parser(lang)

    return _PARSER


@dataclass(frozen=True)
class ParsedDocument:
    name: str
    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode(
            "utf8", errors="replace"
        )


def _first_error(node: Node) -> Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def parse_document(document_name: str, content: str) -> ParsedDocument:
    """Parse declaration text into a syntax tree.

    Args:
        document_name: Name used in diagnostics and error messages
        content: Full text of the document

    Returns:
        ParsedDocument holding the source bytes and the tree.

    Raises:
        DocumentParseError: If the content is not text or contains syntax
            errors. A partially parsed surface would produce a misleading diff,
            so any error node is fatal.
    """
    if not isinstance(content, str):
        msg = f"expected text content, got {type(content).__name__}"
        raise DocumentParseError(document_name, msg)

    source = content.encode("utf8")
    tree = _get_parser().parse(source)
    root = tree.root_node

    if root.has_error:
        error_node = _first_error(root) or root
        line = error_node.start_point[0] + 1
        column = error_node.start_point[1] + 1
        reason = "missing token" if error_node.is_missing else "syntax error"
        raise DocumentParseError(document_name, reason, line, column)

    return ParsedDocument(name=document_name, source=source, tree=tree)
