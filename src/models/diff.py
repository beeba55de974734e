"""Diff and timeline models.

These are the records handed back by a diff session. All of them are
frozen; a finished ``DiffResult`` is never mutated.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from models.declarations import ExtractionDiagnostic

# Schema version constant
SCHEMA_VERSION = 1


class DiffItemKind(str, Enum):
    """Kinds of events observed between two versions."""

    ADDED = "added"
    # Reserved: signature comparison is not performed, so nothing emits it.
    CHANGED = "changed"
    REMOVED = "removed"
    DEPRECATED = "deprecated"


class DiffSource(BaseModel):
    """One version of a declaration surface to compare."""

    model_config = ConfigDict(frozen=True)

    tag: str | None = Field(
        default=None, description="Replaces document_name as the version label"
    )
    document_name: str
    content: str

    @property
    def label(self) -> str:
        return self.tag or self.document_name


class DiffOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    treat_first_version_as_baseline: bool = Field(
        default=False,
        description="Seed timelines with every declaration of the first version",
    )


class DiffItem(BaseModel):
    """A single transition between two consecutive versions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_label: str = Field(alias="from")
    to_label: str = Field(alias="to")
    kind: DiffItemKind
    path: str


class TimelineChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    at: str
    kind: DiffItemKind


class TimelineEntry(BaseModel):
    """History of one declaration path across all versions."""

    model_config = ConfigDict(frozen=True)

    path: str
    changes: tuple[TimelineChange, ...] = ()


class DiffResult(BaseModel):
    """Outcome of a complete diff session."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = Field(default=SCHEMA_VERSION)
    versions: tuple[str, ...] = ()
    items: tuple[DiffItem, ...] = ()
    timelines: tuple[TimelineEntry, ...] = ()
    diagnostics: tuple[ExtractionDiagnostic, ...] = ()

    def timeline_for(self, path: str) -> TimelineEntry | None:
        for entry in self.timelines:
            if entry.path == path:
                return entry
        return None


__all__ = [
    "SCHEMA_VERSION",
    "DiffItem",
    "DiffItemKind",
    "DiffOptions",
    "DiffResult",
    "DiffSource",
    "TimelineChange",
    "TimelineEntry",
]
