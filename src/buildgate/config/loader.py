"""Config loading and normalization for Buildgate evaluations."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from buildgate.config.model import GateConfig, ThresholdConfig
from buildgate.constants.config import (
    CONFIG_FILENAME,
    DEFAULT_CAN_COMPUTE_NEW,
    DEFAULT_CAN_RUN_ON_FAILED,
    DEFAULT_REQUIRE_HEALTH,
    DEFAULT_USE_DELTA_VALUES,
    DEFAULT_USE_STABLE_BUILD_AS_REFERENCE,
)
from buildgate.constants.thresholds import (
    DEFAULT_THRESHOLD_LIMIT,
    VALID_BUCKETS,
    VALID_THRESHOLD_LIMITS,
)
from buildgate.exceptions import ConfigError
from buildgate.types import Bucket

logger = logging.getLogger(__name__)


def load_config(root: Path, config_path: Path | None = None) -> GateConfig:
    """Load and validate gate config from ``buildgate.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("No config file at %s; using defaults", path)
        return GateConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    return config_from_mapping(raw)


def config_from_mapping(raw: dict[str, Any]) -> GateConfig:
    """Build a :class:`GateConfig` from an already-parsed YAML mapping."""
    health_raw = raw.get("health", {})
    if health_raw is None:
        health_raw = {}
    if not isinstance(health_raw, dict):
        raise ConfigError("health must be a mapping")

    require_health = _ensure_bool(raw.get("require_health", DEFAULT_REQUIRE_HEALTH), "require_health")
    thresholds = build_threshold_config(
        unstable=_ensure_limits(raw.get("unstable"), "unstable"),
        failed=_ensure_limits(raw.get("failed"), "failed"),
        healthy=_ensure_optional_count(health_raw.get("healthy"), "health.healthy"),
        unhealthy=_ensure_optional_count(health_raw.get("unhealthy"), "health.unhealthy"),
        threshold_limit=raw.get("threshold_limit", DEFAULT_THRESHOLD_LIMIT),
        require_health=require_health,
    )

    return GateConfig(
        thresholds=thresholds,
        use_delta_values=_ensure_bool(raw.get("use_delta_values", DEFAULT_USE_DELTA_VALUES), "use_delta_values"),
        can_compute_new=_ensure_bool(raw.get("can_compute_new", DEFAULT_CAN_COMPUTE_NEW), "can_compute_new"),
        use_stable_build_as_reference=_ensure_bool(
            raw.get("use_stable_build_as_reference", DEFAULT_USE_STABLE_BUILD_AS_REFERENCE),
            "use_stable_build_as_reference",
        ),
        can_run_on_failed=_ensure_bool(raw.get("can_run_on_failed", DEFAULT_CAN_RUN_ON_FAILED), "can_run_on_failed"),
        require_health=require_health,
    )


def build_threshold_config(
    *,
    unstable: dict[Bucket, int],
    failed: dict[Bucket, int],
    healthy: int | None,
    unhealthy: int | None,
    threshold_limit: Any,
    require_health: bool,
) -> ThresholdConfig:
    """Check cross-field rules and return an immutable threshold config."""
    if not isinstance(threshold_limit, str) or threshold_limit.lower() not in VALID_THRESHOLD_LIMITS:
        raise ConfigError(
            f"threshold_limit must be one of {sorted(VALID_THRESHOLD_LIMITS)}, got {threshold_limit!r}"
        )

    config = ThresholdConfig(
        unstable=unstable,
        failed=failed,
        healthy=healthy,
        unhealthy=unhealthy,
        threshold_limit=threshold_limit.lower(),  # type: ignore[arg-type]
    )
    if require_health and not config.health_enabled:
        raise ConfigError(
            "require_health is set but health bounds are unusable: "
            f"unhealthy ({unhealthy}) must be greater than healthy ({healthy})"
        )
    if not config.health_enabled and (healthy is not None or unhealthy is not None):
        logger.info("Health reporting disabled: healthy=%s unhealthy=%s", healthy, unhealthy)

    for bucket in sorted(set(unstable) & set(failed)):
        if unstable[bucket] >= failed[bucket]:
            logger.warning(
                "Unstable limit for %s (%d) is not below its failed limit (%d) and can never apply",
                bucket,
                unstable[bucket],
                failed[bucket],
            )

    return config


def _ensure_bool(value: Any, key_name: str) -> bool:
    """Return *value* if it is a real boolean, raising ConfigError otherwise."""
    if not isinstance(value, bool):
        raise ConfigError(f"{key_name} must be a boolean")
    return value


def _ensure_optional_count(value: Any, key_name: str) -> int | None:
    """Accept ``None`` or a non-negative integer."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key_name} must be a non-negative integer")
    if value < 0:
        raise ConfigError(f"{key_name} must be a non-negative integer, got {value}")
    return value


def _ensure_limits(value: Any, key_name: str) -> dict[Bucket, int]:
    """Coerce a bucket-to-limit mapping, dropping ``null`` entries as absent."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key_name} must be a mapping of bucket to limit")

    limits: dict[Bucket, int] = {}
    for bucket, limit in value.items():
        if bucket not in VALID_BUCKETS:
            raise ConfigError(f"{key_name}.{bucket} is not a known bucket; expected one of {sorted(VALID_BUCKETS)}")
        count = _ensure_optional_count(limit, f"{key_name}.{bucket}")
        if count is not None:
            limits[bucket] = count
    return limits
