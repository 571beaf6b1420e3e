"""Flat, language-agnostic options map support.

CI front-ends often hand over configuration as a flat map of string
values (``{"unstableNewHigh": "1", "failedTotalAll": "", ...}``). Blank
strings and ``None`` mean "no limit".
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from buildgate.config.loader import build_threshold_config
from buildgate.config.model import GateConfig
from buildgate.constants.config import (
    FAILED_OPTION_BUCKETS,
    OPTION_BOOL_KEYS,
    OPTION_HEALTHY,
    OPTION_THRESHOLD_LIMIT,
    OPTION_UNHEALTHY_KEYS,
    UNSTABLE_OPTION_BUCKETS,
)
from buildgate.constants.thresholds import DEFAULT_THRESHOLD_LIMIT
from buildgate.exceptions import ConfigError
from buildgate.types import Bucket


def config_from_options(options: Mapping[str, Any]) -> GateConfig:
    """Build a :class:`GateConfig` from a flat options map."""
    flags: dict[str, bool] = {}
    for option_name, field_name in OPTION_BOOL_KEYS.items():
        if option_name in options and options[option_name] is not None:
            flags[field_name] = _parse_bool(options[option_name], option_name)

    unhealthy_raw = next((options[key] for key in OPTION_UNHEALTHY_KEYS if key in options), None)
    threshold_limit = options.get(OPTION_THRESHOLD_LIMIT) or DEFAULT_THRESHOLD_LIMIT

    thresholds = build_threshold_config(
        unstable=_collect_limits(options, UNSTABLE_OPTION_BUCKETS),
        failed=_collect_limits(options, FAILED_OPTION_BUCKETS),
        healthy=parse_optional_int(options.get(OPTION_HEALTHY), OPTION_HEALTHY),
        unhealthy=parse_optional_int(unhealthy_raw, OPTION_UNHEALTHY_KEYS[0]),
        threshold_limit=threshold_limit,
        require_health=flags.get("require_health", False),
    )
    return GateConfig(thresholds=thresholds, **flags)


def parse_optional_int(value: Any, option_name: str) -> int | None:
    """Parse a limit that may be blank, numeric, or a numeric string."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigError(f"{option_name} must be a non-negative integer")
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            value = int(stripped)
        except ValueError as exc:
            raise ConfigError(f"{option_name} must be a non-negative integer, got {stripped!r}") from exc
    if not isinstance(value, int):
        raise ConfigError(f"{option_name} must be a non-negative integer")
    if value < 0:
        raise ConfigError(f"{option_name} must be a non-negative integer, got {value}")
    return value


def _collect_limits(options: Mapping[str, Any], names: dict[str, str]) -> dict[Bucket, int]:
    limits: dict[Bucket, int] = {}
    for option_name, bucket in names.items():
        limit = parse_optional_int(options.get(option_name), option_name)
        if limit is not None:
            limits[bucket] = limit  # type: ignore[index]
    return limits


def _parse_bool(value: Any, option_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise ConfigError(f"{option_name} must be a boolean")
