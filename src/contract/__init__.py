"""Stable contract surface for dtsdiff reports.

Consumers that read written reports should depend on these exports only.
"""

from contract.report import REPORT_JSON, REPORT_KEYS, REPORT_SCHEMA_VERSION


def __getattr__(name: str) -> object:
    if name in {"ValidationMessage", "ValidationResult", "validate_report"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_report,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_report": validate_report,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "REPORT_JSON",
    "REPORT_KEYS",
    "REPORT_SCHEMA_VERSION",
    "ValidationMessage",
    "ValidationResult",
    "validate_report",
]
