"""Declaration models for a parsed declaration surface.

This module contains the record for one named declaration (module,
interface, class, enum, member, ...) together with the diagnostics raised
for constructs the extractor does not recognize.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

DeclarationKind = Literal[
    "module",
    "interface",
    "class",
    "enum",
    "enum_member",
    "type_alias",
    "function",
    "variable",
    "property",
    "method",
    "get_accessor",
    "set_accessor",
    "constructor",
    "call_signature",
    "construct_signature",
    "index_signature",
]

PATH_SEPARATOR = "."


class DeclarationNode(BaseModel):
    """A named declaration extracted from one version of a surface."""

    kind: DeclarationKind
    signature_text: str
    local_name: str
    full_path: str
    deprecated: bool = False
    start_line: int = Field(default=0, description="First occurrence (1-based)")
    children: list[DeclarationNode] = Field(default_factory=list)

    @property
    def key(self) -> tuple[str, str]:
        return (self.kind, self.full_path)


class ExtractionDiagnostic(BaseModel):
    """An unrecognized construct skipped during extraction."""

    document: str
    node_type: str
    scope: str
    line: int
    column: int
    message: str

    def location(self) -> str:
        return f"{self.document}:{self.line}:{self.column}"


__all__ = [
    "PATH_SEPARATOR",
    "DeclarationKind",
    "DeclarationNode",
    "ExtractionDiagnostic",
]
