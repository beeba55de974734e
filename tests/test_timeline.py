from __future__ import annotations

import pytest
from pydantic import ValidationError

from diff.pairwise import PairDiff
from diff.timeline import TimelineAggregator
from models.declarations import DeclarationNode
from models.diff import DiffItemKind, TimelineChange


def _node(path: str, *, deprecated: bool = False) -> DeclarationNode:
    return DeclarationNode(
        kind="function",
        signature_text=path,
        local_name=path,
        full_path=path,
        deprecated=deprecated,
    )


def test_fold_emits_items_grouped_by_kind() -> None:
    aggregator = TimelineAggregator()
    aggregator.fold(
        "v1",
        "v2",
        PairDiff(added=("x",), removed=("a",), newly_deprecated=("m",)),
    )

    result = aggregator.build()

    assert [(i.kind, i.path) for i in result.items] == [
        (DiffItemKind.ADDED, "x"),
        (DiffItemKind.DEPRECATED, "m"),
        (DiffItemKind.REMOVED, "a"),
    ]
    assert all(i.from_label == "v1" and i.to_label == "v2" for i in result.items)
    assert result.versions == ("v1", "v2")


def test_timeline_changes_follow_processing_order() -> None:
    aggregator = TimelineAggregator()
    aggregator.fold("z", "m", PairDiff(removed=("p",)))
    aggregator.fold("m", "a", PairDiff(added=("p",)))
    aggregator.fold("a", "b", PairDiff(newly_deprecated=("p",)))

    entry = aggregator.build().timeline_for("p")

    assert entry is not None
    assert entry.changes == (
        TimelineChange(at="m", kind=DiffItemKind.REMOVED),
        TimelineChange(at="a", kind=DiffItemKind.ADDED),
        TimelineChange(at="b", kind=DiffItemKind.DEPRECATED),
    )


def test_timelines_keep_first_seen_order() -> None:
    aggregator = TimelineAggregator()
    aggregator.fold("v1", "v2", PairDiff(added=("b",), removed=("a",)))
    aggregator.fold("v2", "v3", PairDiff(added=("a", "c")))

    assert [t.path for t in aggregator.build().timelines] == ["b", "a", "c"]


def test_baseline_seeds_added_and_deprecated() -> None:
    aggregator = TimelineAggregator()
    aggregator.seed_baseline("v1", [_node("a"), _node("b", deprecated=True)])

    result = aggregator.build()

    assert result.items == ()
    assert result.timeline_for("a").changes == (  # type: ignore[union-attr]
        TimelineChange(at="v1", kind=DiffItemKind.ADDED),
    )
    assert result.timeline_for("b").changes == (  # type: ignore[union-attr]
        TimelineChange(at="v1", kind=DiffItemKind.DEPRECATED),
    )


def test_baseline_collapses_shared_paths() -> None:
    aggregator = TimelineAggregator()
    aggregator.seed_baseline("v1", [_node("a"), _node("a", deprecated=True)])

    timelines = aggregator.build().timelines

    assert len(timelines) == 1
    assert timelines[0].changes[0].kind == DiffItemKind.DEPRECATED


def test_result_is_frozen() -> None:
    aggregator = TimelineAggregator()
    aggregator.fold("v1", "v2", PairDiff(added=("x",)))
    result = aggregator.build()

    with pytest.raises(ValidationError):
        result.items[0].path = "y"  # type: ignore[misc]
    assert result.items[0].path == "x"
