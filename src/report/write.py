from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from config.loader import load_config, resolve_output_path
from diff.session import DiffSession
from models.diff import DiffOptions
from report.utils import _write_json
from sources.local import load_configured_sources

if TYPE_CHECKING:
    from config.loader import DtsDiffConfig
    from models.diff import DiffResult

logger = logging.getLogger(__name__)


def write_report(path: Path, result: DiffResult) -> Path:
    """Write a diff result as sorted-key, indented JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    _write_json(path, result)
    return path


def summarize(result: DiffResult) -> dict[str, object]:
    counts: dict[str, int] = {}
    for item in result.items:
        counts[item.kind.value] = counts.get(item.kind.value, 0) + 1
    return {
        "version_count": len(result.versions),
        "item_count": len(result.items),
        "timeline_count": len(result.timelines),
        "diagnostic_count": len(result.diagnostics),
        "kinds": counts,
    }


def generate_report(
    *,
    root: Path,
    out_path: Path | None = None,
    config: DtsDiffConfig | None = None,
) -> dict[str, object]:
    """Diff the versions named by the config and write the report.

    Args:
        root: Directory holding dtsdiff.toml and the configured sources
        out_path: Optional report path overriding the configured output
        config: Optional configuration; loaded from root when omitted

    Returns:
        Dictionary with counts and the written report path.
    """
    if config is None:
        config = load_config(root)

    if out_path is None:
        out_path = resolve_output_path(root, config.output)

    sources = load_configured_sources(Path(root), config)
    options = DiffOptions(
        treat_first_version_as_baseline=config.treat_first_version_as_baseline
    )
    result = DiffSession(options).run(sources)

    write_report(out_path, result)
    logger.debug("wrote report to %s", out_path)

    summary = summarize(result)
    summary["report"] = str(out_path)
    return summary
