"""Findings provider for a neutral JSON findings document.

Accepted shapes are a JSON array of finding objects or an object with a
``findings`` array. Each finding needs a ``severity`` and a location;
records without a stable key get a structural hash as their key.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from buildgate.constants.providers import (
    FINDING_KEY_FIELDS,
    FINDING_LOCATION_FIELDS,
    FINDING_SEVERITY_FIELDS,
    FINDING_TITLE_FIELDS,
    FINDINGS_ARRAY_KEY,
)
from buildgate.constants.thresholds import SEVERITY_ALIASES, SEVERITY_RANK
from buildgate.exceptions import FindingsParseError
from buildgate.io import load_json_file
from buildgate.model import Finding
from buildgate.types import Severity

logger = logging.getLogger(__name__)


def load_findings_file(path: Path) -> list[Finding]:
    """Read and parse a findings document from *path*."""
    try:
        payload = load_json_file(path)
    except OSError as exc:
        raise FindingsParseError(f"Cannot read findings file {path}: {exc}") from exc
    except ValueError as exc:
        raise FindingsParseError(f"Invalid JSON in findings file {path}: {exc}") from exc

    findings = parse_findings(payload, source=str(path))
    logger.debug("Loaded %d findings from %s", len(findings), path)
    return findings


def parse_findings(payload: object, *, source: str = "<input>") -> list[Finding]:
    """Convert a decoded findings document into :class:`Finding` values."""
    if isinstance(payload, dict):
        payload = payload.get(FINDINGS_ARRAY_KEY)
    if not isinstance(payload, list):
        raise FindingsParseError(f"{source}: expected a list of findings or an object with a `findings` list")

    findings: list[Finding] = []
    for index, record in enumerate(payload):
        if not isinstance(record, dict):
            raise FindingsParseError(f"{source}: finding #{index} must be an object")
        findings.append(_finding_from_record(record, source=source, index=index))
    return findings


def normalize_severity(raw: str) -> Severity:
    """Map a scanner severity label onto ``low``/``normal``/``high``."""
    label = raw.strip().lower()
    label = SEVERITY_ALIASES.get(label, label)
    if label not in SEVERITY_RANK:
        raise ValueError(f"unknown severity {raw!r}")
    return label  # type: ignore[return-value]


def structural_key(severity: Severity, location: str, title: str) -> str:
    """Derive a stable identity for findings that carry no key upstream."""
    blob = "\x1f".join((severity, location, title)).encode("utf-8")
    return hashlib.sha256(blob).hexdigest()


def _first_string(record: Mapping[str, Any], fields: tuple[str, ...]) -> str | None:
    for name in fields:
        value = record.get(name)
        if isinstance(value, (str, int)) and not isinstance(value, bool) and str(value).strip():
            return str(value).strip()
    return None


def _finding_from_record(record: Mapping[str, Any], *, source: str, index: int) -> Finding:
    raw_severity = _first_string(record, FINDING_SEVERITY_FIELDS)
    if raw_severity is None:
        raise FindingsParseError(f"{source}: finding #{index} has no severity")
    try:
        severity = normalize_severity(raw_severity)
    except ValueError as exc:
        raise FindingsParseError(f"{source}: finding #{index} has {exc}") from exc

    location = _first_string(record, FINDING_LOCATION_FIELDS) or ""
    title = _first_string(record, FINDING_TITLE_FIELDS) or ""
    if not location and not title:
        raise FindingsParseError(f"{source}: finding #{index} needs a location or a title")

    key = _first_string(record, FINDING_KEY_FIELDS) or structural_key(severity, location, title)
    return Finding(key=key, severity=severity, location=location, title=title)
