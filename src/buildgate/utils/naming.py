"""String normalization helpers for pipeline and run identifiers."""

from __future__ import annotations

from buildgate.constants.history import PIPELINE_NAME_FALLBACK
from buildgate.constants.naming import COLLAPSE_DASH_PATTERN, NON_OUTPUT_NAME_PATTERN


def sanitize_output_name(raw_name: str) -> str:
    """Normalize names for stable on-disk file names."""
    normalized = raw_name.strip().lower()
    normalized = NON_OUTPUT_NAME_PATTERN.sub("-", normalized)
    normalized = COLLAPSE_DASH_PATTERN.sub("-", normalized)
    normalized = normalized.strip("-._")
    return normalized or PIPELINE_NAME_FALLBACK
