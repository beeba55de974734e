"""Shared utilities for dtsdiff."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

_WHITESPACE_RUN = re.compile(r"\s+")
_DIGITS = re.compile(r"\d+")


def normalize_signature(raw_text: str) -> str:
    """Normalize rendered member text used as a name segment.

    Rules:
    - Strip leading/trailing whitespace.
    - Collapse internal whitespace runs (including newlines) to one space.

    Examples:
        >>> normalize_signature("(value: string):\\n    void")
        '(value: string): void'
    """
    return _WHITESPACE_RUN.sub(" ", raw_text.strip())


def _version_key(tag: str) -> tuple[tuple[int, ...], str]:
    parts: list[int] = []
    for segment in tag.split("."):
        match = _DIGITS.match(segment)
        parts.append(int(match.group()) if match else 0)
    return (tuple(parts), tag)


def sort_version_tags(tags: Iterable[str]) -> list[str]:
    """Sort dotted version tags numerically.

    Segments compare as integers; when one tag is a prefix of another the
    shorter one sorts first, and identical numeric keys fall back to plain
    string order.

    Examples:
        >>> sort_version_tags(["1.10.0", "1.9.0", "1.9"])
        ['1.9', '1.9.0', '1.10.0']
    """
    return sorted(tags, key=_version_key)
