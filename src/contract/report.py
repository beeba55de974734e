"""Report contract definitions.

The report is a single JSON object; these constants are the stable surface
that consumers of a written report rely on.
"""

from __future__ import annotations

from models.diff import SCHEMA_VERSION

# Report schema version (report-v1).
REPORT_SCHEMA_VERSION = SCHEMA_VERSION

REPORT_JSON = "api-diff.json"

# Top-level keys every report carries.
REPORT_KEYS = ("schema_version", "versions", "items", "timelines", "diagnostics")
