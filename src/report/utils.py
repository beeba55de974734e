"""Utility functions for report serialization."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


def _to_dict(obj: object) -> object:
    """Convert object to dict for JSON serialization."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json", by_alias=True)
    return obj


def _write_json(path: Path, obj: object) -> None:
    payload = _to_dict(obj)
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    path.write_bytes(orjson.dumps(payload, option=opts) + b"\n")


def _write_jsonl_lines(records: Sequence[object]) -> bytes:
    return b"".join(
        orjson.dumps(_to_dict(rec), option=orjson.OPT_SORT_KEYS) + b"\n"
        for rec in records
    )
