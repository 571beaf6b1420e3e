"""Severity, classification, and threshold bucket constants."""

from __future__ import annotations

SEVERITIES: tuple[str, ...] = ("high", "normal", "low")
SEVERITY_RANK: dict[str, int] = {"low": 0, "normal": 1, "high": 2}

SEVERITY_ALIASES: dict[str, str] = {
    "critical": "high",
    "error": "high",
    "medium": "normal",
    "moderate": "normal",
    "warning": "normal",
    "info": "low",
    "informational": "low",
    "note": "low",
}

CLASSIFICATION_RANK: dict[str, int] = {"stable": 0, "unstable": 1, "failed": 2}

DELTA_MODE_SET_DIFFERENCE: str = "set_difference"
DELTA_MODE_ABSOLUTE: str = "absolute"

# Bucket names are ``<scope>_<severity|all>``.
TOTAL_BUCKETS: tuple[str, ...] = ("total_all", "total_high", "total_normal", "total_low")
NEW_BUCKETS: tuple[str, ...] = ("new_all", "new_high", "new_normal", "new_low")
BUCKETS: tuple[str, ...] = TOTAL_BUCKETS + NEW_BUCKETS
VALID_BUCKETS: frozenset[str] = frozenset(BUCKETS)

DEFAULT_THRESHOLD_LIMIT: str = "low"
VALID_THRESHOLD_LIMITS: frozenset[str] = frozenset(SEVERITIES)

HEALTH_MAX: int = 100
HEALTH_MIN: int = 0
