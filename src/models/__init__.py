"""Model namespace for dtsdiff records."""

from models.declarations import (
    PATH_SEPARATOR,
    DeclarationKind,
    DeclarationNode,
    ExtractionDiagnostic,
)
from models.diff import (
    SCHEMA_VERSION,
    DiffItem,
    DiffItemKind,
    DiffOptions,
    DiffResult,
    DiffSource,
    TimelineChange,
    TimelineEntry,
)

__all__ = [
    "PATH_SEPARATOR",
    "SCHEMA_VERSION",
    "DeclarationKind",
    "DeclarationNode",
    "DiffItem",
    "DiffItemKind",
    "DiffOptions",
    "DiffResult",
    "DiffSource",
    "ExtractionDiagnostic",
    "TimelineChange",
    "TimelineEntry",
]
