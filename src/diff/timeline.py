"""Folding of pairwise diffs into items and per-path timelines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from models.diff import (
    DiffItem,
    DiffItemKind,
    DiffResult,
    TimelineChange,
    TimelineEntry,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from diff.pairwise import PairDiff
    from models.declarations import DeclarationNode, ExtractionDiagnostic


class TimelineAggregator:
    """Accumulates events in the order versions are processed.

    Timelines keep first-seen order of paths and append changes as they
    arrive; nothing is re-sorted when the result is built.
    """

    def __init__(self) -> None:
        self._versions: list[str] = []
        self._items: list[DiffItem] = []
        self._timelines: dict[str, list[TimelineChange]] = {}

    def _record(self, path: str, at: str, kind: DiffItemKind) -> None:
        self._timelines.setdefault(path, []).append(TimelineChange(at=at, kind=kind))

    def _note_version(self, label: str) -> None:
        if not self._versions or self._versions[-1] != label:
            self._versions.append(label)

    def seed_baseline(self, label: str, declarations: Sequence[DeclarationNode]) -> None:
        """Treat every path of the first version as introduced there."""
        self._note_version(label)

        deprecated_paths: dict[str, bool] = {}
        for declaration in declarations:
            seen = deprecated_paths.get(declaration.full_path, False)
            deprecated_paths[declaration.full_path] = seen or declaration.deprecated

        for path, deprecated in deprecated_paths.items():
            kind = DiffItemKind.DEPRECATED if deprecated else DiffItemKind.ADDED
            self._record(path, label, kind)

    def fold(self, from_label: str, to_label: str, pair: PairDiff) -> None:
        """Append the events of one consecutive version pair."""
        self._note_version(from_label)
        self._note_version(to_label)

        for kind, paths in (
            (DiffItemKind.ADDED, pair.added),
            (DiffItemKind.DEPRECATED, pair.newly_deprecated),
            (DiffItemKind.REMOVED, pair.removed),
        ):
            for path in paths:
                self._items.append(
                    DiffItem(from_label=from_label, to_label=to_label, kind=kind, path=path)
                )
                self._record(path, to_label, kind)

    def build(
        self, diagnostics: Sequence[ExtractionDiagnostic] = ()
    ) -> DiffResult:
        return DiffResult(
            versions=tuple(self._versions),
            items=tuple(self._items),
            timelines=tuple(
                TimelineEntry(path=path, changes=tuple(changes))
                for path, changes in self._timelines.items()
            ),
            diagnostics=tuple(diagnostics),
        )
