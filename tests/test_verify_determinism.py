from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from report.write import generate_report
from verify.verify import DeterminismResult, verify_report

FIXTURES = Path(__file__).parent / "fixtures" / "surface"


def _write_project(root: Path) -> None:
    root.mkdir(parents=True, exist_ok=True)
    for name in ("v1.d.ts", "v2.d.ts", "v3.d.ts"):
        shutil.copy(FIXTURES / name, root / name)
    (root / "dtsdiff.toml").write_text(
        """
treat_first_version_as_baseline = true

[[sources]]
path = "v1.d.ts"
tag = "1.0"

[[sources]]
path = "v2.d.ts"
tag = "1.1"

[[sources]]
path = "v3.d.ts"
tag = "1.2"
""".strip(),
        encoding="utf-8",
    )


def test_verify_report_requires_report(tmp_path: Path) -> None:
    _write_project(tmp_path / "proj")

    with pytest.raises(FileNotFoundError, match="Report file does not exist"):
        verify_report(root=tmp_path / "proj", report_path=tmp_path / "missing.json")


def test_generated_report_verifies(tmp_path: Path) -> None:
    root = tmp_path / "proj"
    _write_project(root)

    summary = generate_report(root=root)
    report = Path(str(summary["report"]))

    assert report == (root / "api-diff.json").resolve()
    assert summary["version_count"] == 3
    assert verify_report(root=root, report_path=report) == DeterminismResult(
        ok=True, report=str(report)
    )


def test_modified_report_mismatches(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    report = tmp_path / "api-diff.json"
    report.write_text("original", encoding="utf-8")

    def _fake_generate_report(*, root: Path, out_path: Path) -> dict[str, object]:
        out_path.write_text("regenerated", encoding="utf-8")
        return {"report": str(out_path)}

    monkeypatch.setattr("verify.verify.generate_report", _fake_generate_report)

    result = verify_report(root=tmp_path, report_path=report)

    assert result == DeterminismResult(
        ok=False,
        report=str(report),
        mismatches=("api-diff.json",),
    )
