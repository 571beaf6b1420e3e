"""Stable validation error codes and allowed-key sets for config validation."""

from __future__ import annotations

from buildgate.constants.thresholds import VALID_BUCKETS

CFG001: str = "CFG001"  # config file not found (explicit --config)
CFG002: str = "CFG002"  # invalid YAML parse
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown key
CFG005: str = "CFG005"  # invalid value type
CFG006: str = "CFG006"  # invalid enum value
CFG007: str = "CFG007"  # value out of range
CFG008: str = "CFG008"  # contradictory threshold config
CFG009: str = "CFG009"  # invalid nested mapping
CFG010: str = "CFG010"  # root directory not found

ALL_CFG_CODES: tuple[str, ...] = (
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
    CFG009,
    CFG010,
)

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "threshold_limit",
        "use_delta_values",
        "can_compute_new",
        "use_stable_build_as_reference",
        "can_run_on_failed",
        "require_health",
        "health",
        "unstable",
        "failed",
    }
)

ALLOWED_HEALTH_KEYS: frozenset[str] = frozenset({"healthy", "unhealthy"})
ALLOWED_LIMIT_KEYS: frozenset[str] = VALID_BUCKETS

BOOLEAN_KEYS: tuple[str, ...] = (
    "use_delta_values",
    "can_compute_new",
    "use_stable_build_as_reference",
    "can_run_on_failed",
    "require_health",
)
