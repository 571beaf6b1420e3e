"""Constants for the JSON findings provider."""

from __future__ import annotations

FINDINGS_ARRAY_KEY: str = "findings"
FINDING_KEY_FIELDS: tuple[str, ...] = ("key", "id", "fingerprint")
FINDING_LOCATION_FIELDS: tuple[str, ...] = ("location", "path", "file")
FINDING_TITLE_FIELDS: tuple[str, ...] = ("title", "message", "name")
FINDING_SEVERITY_FIELDS: tuple[str, ...] = ("severity", "priority")
