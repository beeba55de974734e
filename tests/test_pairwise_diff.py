from __future__ import annotations

from diff.pairwise import PairDiff, diff_pair
from models.declarations import DeclarationNode


def _node(path: str, *, deprecated: bool = False, kind: str = "function") -> DeclarationNode:
    return DeclarationNode(
        kind=kind,  # type: ignore[arg-type]
        signature_text=path.rsplit(".", 1)[-1],
        local_name=path.rsplit(".", 1)[-1],
        full_path=path,
        deprecated=deprecated,
    )


def _nodes(*paths: str) -> list[DeclarationNode]:
    return [_node(p) for p in sorted(paths)]


def test_identical_lists_produce_no_events() -> None:
    snapshot = _nodes("a", "a.b", "c")

    assert diff_pair(snapshot, snapshot) == PairDiff()
    assert diff_pair(snapshot, snapshot).empty


def test_added_and_removed_are_set_differences() -> None:
    earlier = _nodes("alpha", "beta", "delta")
    later = _nodes("beta", "gamma", "omega")

    result = diff_pair(earlier, later)

    assert result.added == ("gamma", "omega")
    assert result.removed == ("alpha", "delta")
    assert result.newly_deprecated == ()


def test_disjoint_lists() -> None:
    result = diff_pair(_nodes("a", "b"), _nodes("c", "d"))

    assert result.added == ("c", "d")
    assert result.removed == ("a", "b")


def test_tails_are_drained() -> None:
    assert diff_pair(_nodes("a"), _nodes("a", "x", "y")).added == ("x", "y")
    assert diff_pair(_nodes("a", "x", "y"), _nodes("a")).removed == ("x", "y")
    assert diff_pair([], _nodes("a")).added == ("a",)
    assert diff_pair(_nodes("a"), []).removed == ("a",)


def test_newly_deprecated_reported_once() -> None:
    earlier = [_node("a"), _node("b"), _node("c")]
    later = [_node("a", deprecated=True), _node("b"), _node("c")]

    result = diff_pair(earlier, later)

    assert result.newly_deprecated == ("a",)
    assert result.added == ()
    assert result.removed == ()


def test_still_deprecated_and_undeprecated_are_silent() -> None:
    earlier = [_node("a", deprecated=True), _node("b", deprecated=True)]
    later = [_node("a", deprecated=True), _node("b")]

    assert diff_pair(earlier, later) == PairDiff()


def test_nested_paths_sort_after_parent() -> None:
    earlier = _nodes("Doc", "Doc.save")
    later = _nodes("Doc", "Doc.save", "Doc.saveAs", "Document")

    result = diff_pair(earlier, later)

    assert result.added == ("Doc.saveAs", "Document")
    assert result.removed == ()
