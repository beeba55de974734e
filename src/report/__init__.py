"""Report generation entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from config.loader import DtsDiffConfig


def generate_report(
    *,
    root: Path,
    out_path: Path | None = None,
    config: DtsDiffConfig | None = None,
) -> dict[str, object]:
    """Generate a report via lazy import to avoid package import cycles."""
    from report.write import generate_report as _generate_report

    return _generate_report(root=root, out_path=out_path, config=config)


__all__ = ["generate_report"]
