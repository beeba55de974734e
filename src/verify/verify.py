"""Determinism verification for dtsdiff reports."""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from report import generate_report


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    report: str
    mismatches: tuple[str, ...] = field(default_factory=tuple)


def verify_report(*, root: Path, report_path: Path) -> DeterminismResult:
    """Verify that a written report matches a fresh regeneration.

    Regenerates the report from the configuration under ``root`` into a
    temporary directory and compares it byte-for-byte against
    ``report_path``.

    Args:
        root: Directory holding dtsdiff.toml and the configured sources.
        report_path: Existing report to verify.

    Returns:
        DeterminismResult with ok status and the mismatching report name.

    Raises:
        FileNotFoundError: If report_path does not exist.
        IsADirectoryError: If report_path is a directory.
    """
    if not report_path.exists():
        msg = f"Report file does not exist: {report_path}"
        raise FileNotFoundError(msg)
    if report_path.is_dir():
        msg = f"Report path is a directory: {report_path}"
        raise IsADirectoryError(msg)

    with tempfile.TemporaryDirectory() as temp_dir:
        regenerated = Path(temp_dir) / report_path.name
        generate_report(root=root, out_path=regenerated)
        matches = filecmp.cmp(report_path, regenerated, shallow=False)

    mismatches = () if matches else (report_path.name,)
    return DeterminismResult(
        ok=matches,
        report=str(report_path),
        mismatches=mismatches,
    )
