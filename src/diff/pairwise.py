"""Pairwise comparison of two sorted declaration lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from models.declarations import DeclarationNode


@dataclass(frozen=True)
class PairDiff:
    added: tuple[str, ...] = field(default_factory=tuple)
    removed: tuple[str, ...] = field(default_factory=tuple)
    newly_deprecated: tuple[str, ...] = field(default_factory=tuple)

    @property
    def empty(self) -> bool:
        return not self.added and not self.removed and not self.newly_deprecated


def diff_pair(
    earlier: Sequence[DeclarationNode],
    later: Sequence[DeclarationNode],
) -> PairDiff:
    """Merge-join two declaration lists sorted by ``full_path``.

    Only path presence and the deprecation marker are compared. A path in
    both lists emits nothing unless it turned deprecated in ``later``; the
    reverse transition is not reported.

    Args:
        earlier: Declarations of the older version, sorted by full_path
        later: Declarations of the newer version, sorted by full_path

    Returns:
        PairDiff with added, removed and newly deprecated paths, each in
        discovery order.
    """
    added: list[str] = []
    removed: list[str] = []
    deprecated: list[str] = []

    i = 0
    j = 0
    while i < len(earlier) and j < len(later):
        old = earlier[i]
        new = later[j]
        if old.full_path == new.full_path:
            if new.deprecated and not old.deprecated:
                deprecated.append(new.full_path)
            i += 1
            j += 1
        elif old.full_path < new.full_path:
            removed.append(old.full_path)
            i += 1
        else:
            added.append(new.full_path)
            j += 1

    removed.extend(d.full_path for d in earlier[i:])
    added.extend(d.full_path for d in later[j:])

    return PairDiff(
        added=tuple(added),
        removed=tuple(removed),
        newly_deprecated=tuple(deprecated),
    )
