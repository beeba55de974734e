"""Diff engine for declaration surfaces."""

from diff.pairwise import PairDiff, diff_pair
from diff.session import DiffSession, run_diff, validate_sources
from diff.timeline import TimelineAggregator

__all__ = [
    "DiffSession",
    "PairDiff",
    "TimelineAggregator",
    "diff_pair",
    "run_diff",
    "validate_sources",
]
