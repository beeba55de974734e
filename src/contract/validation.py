"""Validation helpers for written diff reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from contract.report import REPORT_KEYS, REPORT_SCHEMA_VERSION
from models.diff import DiffItemKind, DiffResult

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ValidationMessage:
    path: Path
    message: str
    pointer: str | None = None

    def location(self) -> str:
        if self.pointer is None:
            return str(self.path)
        return f"{self.path}:{self.pointer}"


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_report(
    report_path: Path, *, strict_schema_version: bool = False
) -> ValidationResult:
    result = ValidationResult()

    if not report_path.exists():
        result.errors.append(
            ValidationMessage(path=report_path, message="Report file does not exist.")
        )
        return result

    if not report_path.is_file():
        result.errors.append(
            ValidationMessage(path=report_path, message="Report path is not a file.")
        )
        return result

    try:
        raw = orjson.loads(report_path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.errors.append(
            ValidationMessage(path=report_path, message=f"Invalid JSON: {exc}.")
        )
        return result

    if not isinstance(raw, dict):
        result.errors.append(
            ValidationMessage(path=report_path, message="Expected a JSON object.")
        )
        return result

    for key in REPORT_KEYS:
        if key not in raw and key != "schema_version":
            result.warnings.append(
                ValidationMessage(
                    path=report_path,
                    pointer=key,
                    message=f"Missing '{key}'; treated as empty.",
                )
            )

    schema_present = "schema_version" in raw
    try:
        report = DiffResult.model_validate(raw)
    except ValidationError as exc:
        result.errors.append(
            ValidationMessage(
                path=report_path, message=f"Schema validation failed: {exc}."
            )
        )
        return result

    _check_schema_version(
        report_path,
        schema_present,
        report.schema_version,
        result,
        strict_schema_version=strict_schema_version,
    )
    _check_labels(report_path, report, result)
    _check_timelines(report_path, report, result)
    return result


def _check_labels(path: Path, report: DiffResult, result: ValidationResult) -> None:
    versions = set(report.versions)

    for index, item in enumerate(report.items):
        for label in (item.from_label, item.to_label):
            if label not in versions:
                result.errors.append(
                    ValidationMessage(
                        path=path,
                        pointer=f"items[{index}]",
                        message=f"Unknown version label '{label}'.",
                    )
                )
        if item.kind is DiffItemKind.CHANGED:
            result.warnings.append(
                ValidationMessage(
                    path=path,
                    pointer=f"items[{index}]",
                    message="Reserved kind 'changed' is not produced by dtsdiff.",
                )
            )

    for index, entry in enumerate(report.timelines):
        for change in entry.changes:
            if change.at not in versions:
                result.errors.append(
                    ValidationMessage(
                        path=path,
                        pointer=f"timelines[{index}]",
                        message=f"Unknown version label '{change.at}'.",
                    )
                )


def _check_timelines(path: Path, report: DiffResult, result: ValidationResult) -> None:
    seen: set[str] = set()
    order = {label: position for position, label in enumerate(report.versions)}

    for index, entry in enumerate(report.timelines):
        if entry.path in seen:
            result.errors.append(
                ValidationMessage(
                    path=path,
                    pointer=f"timelines[{index}]",
                    message=f"Duplicate timeline for path '{entry.path}'.",
                )
            )
        seen.add(entry.path)

        if not entry.changes:
            result.errors.append(
                ValidationMessage(
                    path=path,
                    pointer=f"timelines[{index}]",
                    message=f"Timeline for '{entry.path}' has no changes.",
                )
            )
            continue

        positions = [order[c.at] for c in entry.changes if c.at in order]
        if positions != sorted(positions):
            result.errors.append(
                ValidationMessage(
                    path=path,
                    pointer=f"timelines[{index}]",
                    message=f"Changes for '{entry.path}' are out of version order.",
                )
            )


def _check_schema_version(
    path: Path,
    schema_present: bool,
    schema_version: int,
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> None:
    if schema_present and schema_version != REPORT_SCHEMA_VERSION:
        result.errors.append(
            ValidationMessage(
                path=path,
                pointer="schema_version",
                message=(
                    "Schema version mismatch: "
                    f"expected {REPORT_SCHEMA_VERSION}, got {schema_version}."
                ),
            )
        )
        return

    if not schema_present:
        message = f"Missing schema_version; defaulted to {REPORT_SCHEMA_VERSION}."
        target = result.errors if strict_schema_version else result.warnings
        target.append(
            ValidationMessage(path=path, pointer="schema_version", message=message)
        )


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_report",
]
