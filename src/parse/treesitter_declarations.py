"""Tree-sitter based declaration extraction for ``.d.ts`` surfaces.

The extractor walks the statements of a parsed document and records one
``DeclarationNode`` per distinct ``(kind, full_path)``. Declarations that
appear more than once (function overloads, namespaces merged across
several blocks) fold into the node created on first sight. The result is
the flattened set of every node at every nesting level, sorted by path.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from models.declarations import (
    PATH_SEPARATOR,
    DeclarationKind,
    DeclarationNode,
    ExtractionDiagnostic,
)
from parse.treesitter_document import parse_document
from utils import normalize_signature

if TYPE_CHECKING:
    from collections.abc import Callable

    from tree_sitter import Node

    from parse.treesitter_document import ParsedDocument

logger = logging.getLogger(__name__)

DEPRECATED_MARKER = b"@deprecated"

# Statements that declare nothing and are not worth a diagnostic.
_IGNORED_TYPES = frozenset({"comment", "import_statement", "empty_statement"})

_UNNAMED_MEMBER_KINDS: dict[str, DeclarationKind] = {
    "call_signature": "call_signature",
    "construct_signature": "construct_signature",
    "index_signature": "index_signature",
}

_ACCESSOR_KINDS: dict[str, DeclarationKind] = {
    "get": "get_accessor",
    "set": "set_accessor",
}


def _strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text


def _leading_comments(anchor: Node) -> list[Node]:
    """Return the comment run attached directly above ``anchor``."""
    comments: list[Node] = []
    sibling = anchor.prev_sibling
    while sibling is not None and sibling.type == "comment":
        comments.append(sibling)
        sibling = sibling.prev_sibling

    # A comment on the same row as the previous declaration trails that one.
    if comments and sibling is not None:
        if comments[-1].start_point[0] == sibling.end_point[0]:
            comments.pop()

    return comments


def _is_deprecated(anchor: Node) -> bool:
    return any(
        DEPRECATED_MARKER in (comment.text or b"")
        for comment in _leading_comments(anchor)
    )


class _Extraction:
    """State for one extraction pass over one document."""

    def __init__(
        self, document: ParsedDocument, diagnostics: list[ExtractionDiagnostic]
    ) -> None:
        self.document = document
        self.diagnostics = diagnostics
        self.nodes: dict[tuple[str, str], DeclarationNode] = {}

        self.statement_handlers: dict[
            str, Callable[[Node, DeclarationNode | None, Node], None]
        ] = {
            "export_statement": self._handle_export,
            "ambient_declaration": self._handle_ambient,
            "expression_statement": self._handle_expression_statement,
            "module": self._handle_module,
            "internal_module": self._handle_module,
            "interface_declaration": self._handle_interface,
            "class_declaration": self._handle_class,
            "abstract_class_declaration": self._handle_class,
            "enum_declaration": self._handle_enum,
            "type_alias_declaration": self._handle_type_alias,
            "function_declaration": self._handle_function,
            "function_signature": self._handle_function,
            "lexical_declaration": self._handle_variables,
            "variable_declaration": self._handle_variables,
        }
        self.member_handlers: dict[str, Callable[[Node, DeclarationNode], None]] = {
            "property_signature": self._handle_property,
            "public_field_definition": self._handle_property,
            "method_signature": self._handle_method,
            "abstract_method_signature": self._handle_method,
            "method_definition": self._handle_method,
            "call_signature": self._handle_unnamed_member,
            "construct_signature": self._handle_unnamed_member,
            "index_signature": self._handle_unnamed_member,
        }

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def declare(
        self,
        node: Node,
        kind: DeclarationKind,
        name: str,
        parent: DeclarationNode | None,
        anchor: Node,
        signature_text: str | None = None,
        *,
        deprecated: bool | None = None,
    ) -> DeclarationNode:
        """Find or create the node for ``(kind, full_path)``."""
        full_path = f"{parent.full_path}{PATH_SEPARATOR}{name}" if parent else name
        if deprecated is None:
            deprecated = _is_deprecated(anchor)

        existing = self.nodes.get((kind, full_path))
        if existing is not None:
            if deprecated:
                existing.deprecated = True
            return existing

        declaration = DeclarationNode(
            kind=kind,
            signature_text=signature_text if signature_text is not None else name,
            local_name=name,
            full_path=full_path,
            deprecated=deprecated,
            start_line=node.start_point[0] + 1,
        )
        self.nodes[declaration.key] = declaration
        if parent is not None:
            parent.children.append(declaration)
        return declaration

    def gap(self, node: Node, parent: DeclarationNode | None) -> None:
        """Record a construct that has no place in the declaration model."""
        diagnostic = ExtractionDiagnostic(
            document=self.document.name,
            node_type=node.type,
            scope=parent.full_path if parent else "",
            line=node.start_point[0] + 1,
            column=node.start_point[1] + 1,
            message=f"skipped unrecognized construct '{node.type}'",
        )
        self.diagnostics.append(diagnostic)
        logger.warning(
            "%s: %s (scope: %s)",
            diagnostic.location(),
            diagnostic.message,
            diagnostic.scope or "<top level>",
        )

    def name_of(self, node: Node, field: str = "name") -> str | None:
        name_node = node.child_by_field_name(field)
        if name_node is None:
            return None
        name = self.document.text(name_node).strip()
        if name_node.type == "string":
            name = _strip_quotes(name)
        return name or None

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def visit_statements(self, container: Node, parent: DeclarationNode | None) -> None:
        for child in container.named_children:
            if child.type in _IGNORED_TYPES:
                continue
            self.visit_statement(child, parent, child)

    def visit_statement(
        self, node: Node, parent: DeclarationNode | None, anchor: Node
    ) -> None:
        handler = self.statement_handlers.get(node.type)
        if handler is None:
            self.gap(node, parent)
            return
        handler(node, parent, anchor)

    def _handle_export(
        self, node: Node, parent: DeclarationNode | None, anchor: Node
    ) -> None:
        declaration = node.child_by_field_name("declaration")
        if declaration is None:
            # export clauses, `export =`, `export default <expr>`
            self.gap(node, parent)
            return
        self.visit_statement(declaration, parent, anchor)

    def _handle_ambient(
        self, node: Node, parent: DeclarationNode | None, anchor: Node
    ) -> None:
        if any(child.type == "global" for child in node.children):
            module = self.declare(node, "module", "global", parent, anchor)
            for child in node.named_children:
                if child.type == "statement_block":
                    self.visit_statements(child, module)
            return

        for child in node.named_children:
            if child.type in self.statement_handlers:
                self.visit_statement(child, parent, anchor)
                return
        self.gap(node, parent)

    def _handle_expression_statement(
        self, node: Node, parent: DeclarationNode | None, anchor: Node
    ) -> None:
        # A bare `namespace X {}` parses as an expression statement.
        inner = node.named_children
        if len(inner) == 1 and inner[0].type == "internal_module":
            self._handle_module(inner[0], parent, anchor)
            return
        self.gap(node, parent)

    def _handle_module(
        self, node: Node, parent: DeclarationNode | None, anchor: Node
    ) -> None:
        name = self.name_of(node)
        if name is None:
            self.gap(node, parent)
            return

        # `namespace A.B {}` declares A, then B inside it.
        name_node = node.child_by_field_name("name")
        segments = [name]
        if name_node is not None and name_node.type == "nested_identifier":
            segments = [s.strip() for s in name.split(PATH_SEPARATOR) if s.strip()]

        module = parent
        for segment in segments[:-1]:
            module = self.declare(
                node, "module", segment, module, anchor, deprecated=False
            )
        module = self.declare(node, "module", segments[-1], module, anchor)
        body = node.child_by_field_name("body")
        if body is not None:
            self.visit_statements(body, module)

    def _handle_interface(
        self, node: Node, parent: DeclarationNode | None, anchor: Node
    ) -> None:
        name = self.name_of(node)
        if name is None:
            self.gap(node, parent)
            return
        interface = self.declare(node, "interface", name, parent, anchor)
        self.visit_members(node.child_by_field_name("body"), interface)

    def _handle_class(
        self, node: Node, parent: DeclarationNode | None, anchor: Node
    ) -> None:
        name = self.name_of(node)
        if name is None:
            self.gap(node, parent)
            return
        cls = self.declare(node, "class", name, parent, anchor)
        self.visit_members(node.child_by_field_name("body"), cls)

    def _handle_enum(
        self, node: Node, parent: DeclarationNode | None, anchor: Node
    ) -> None:
        name = self.name_of(node)
        if name is None:
            self.gap(node, parent)
            return
        enum = self.declare(node, "enum", name, parent, anchor)
        body = node.child_by_field_name("body")
        if body is None:
            return

        for member in body.named_children:
            if member.type == "comment":
                continue
            if member.type == "enum_assignment":
                name_node = member.child_by_field_name("name") or member.named_children[0]
            elif member.type in ("property_identifier", "string", "number"):
                name_node = member
            else:
                self.gap(member, enum)
                continue
            member_name = self.document.text(name_node).strip()
            if name_node.type == "string":
                member_name = _strip_quotes(member_name)
            self.declare(member, "enum_member", member_name, enum, member)

    def _handle_type_alias(
        self, node: Node, parent: DeclarationNode | None, anchor: Node
    ) -> None:
        name = self.name_of(node)
        if name is None:
            self.gap(node, parent)
            return
        self.declare(node, "type_alias", name, parent, anchor)

    def _handle_function(
        self, node: Node, parent: DeclarationNode | None, anchor: Node
    ) -> None:
        name = self.name_of(node)
        if name is None:
            self.gap(node, parent)
            return
        self.declare(node, "function", name, parent, anchor)

    def _handle_variables(
        self, node: Node, parent: DeclarationNode | None, anchor: Node
    ) -> None:
        for declarator in node.named_children:
            if declarator.type != "variable_declarator":
                continue
            name_node = declarator.child_by_field_name("name")
            if name_node is None or name_node.type != "identifier":
                # destructuring patterns
                self.gap(declarator, parent)
                continue
            name = self.document.text(name_node).strip()
            self.declare(declarator, "variable", name, parent, anchor)

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def visit_members(self, body: Node | None, owner: DeclarationNode) -> None:
        if body is None:
            return
        for member in body.named_children:
            if member.type in _IGNORED_TYPES or member.type == "decorator":
                continue
            handler = self.member_handlers.get(member.type)
            if handler is None:
                self.gap(member, owner)
                continue
            handler(member, owner)

    def _handle_property(self, node: Node, owner: DeclarationNode) -> None:
        name = self.name_of(node)
        if name is None:
            self.gap(node, owner)
            return
        self.declare(node, "property", name, owner, node)

    def _handle_method(self, node: Node, owner: DeclarationNode) -> None:
        name = self.name_of(node)
        if name is None:
            self.gap(node, owner)
            return

        if name == "constructor":
            text = normalize_signature(self.document.text(node))
            self.declare(node, "constructor", text, owner, node, signature_text=text)
            return

        kind: DeclarationKind = "method"
        for child in node.children:
            if not child.is_named and child.type in _ACCESSOR_KINDS:
                kind = _ACCESSOR_KINDS[child.type]
                break
        self.declare(node, kind, name, owner, node)

    def _handle_unnamed_member(self, node: Node, owner: DeclarationNode) -> None:
        text = normalize_signature(self.document.text(node))
        kind = _UNNAMED_MEMBER_KINDS[node.type]
        self.declare(node, kind, text, owner, node, signature_text=text)


def extract_declarations(
    document: ParsedDocument,
    *,
    diagnostics: list[ExtractionDiagnostic] | None = None,
) -> list[DeclarationNode]:
    """Extract every declaration of a parsed document.

    Args:
        document: Parsed ``.d.ts`` document
        diagnostics: Optional list receiving one entry per skipped construct

    Returns:
        Flattened declarations of all nesting levels, sorted by ``full_path``.
        Nested members stay reachable through ``children`` as well.
    """
    extraction = _Extraction(document, diagnostics if diagnostics is not None else [])
    extraction.visit_statements(document.root, None)

    declarations = list(extraction.nodes.values())
    declarations.sort(key=lambda d: d.full_path)
    return declarations


def extract_declarations_from_text(
    document_name: str,
    content: str,
    *,
    diagnostics: list[ExtractionDiagnostic] | None = None,
) -> list[DeclarationNode]:
    """Parse ``content`` and extract its declarations in one step."""
    document = parse_document(document_name, content)
    return extract_declarations(document, diagnostics=diagnostics)
