"""Config file validation for Buildgate evaluations."""

from __future__ import annotations

import difflib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from buildgate.constants.config import CONFIG_FILENAME
from buildgate.constants.thresholds import VALID_THRESHOLD_LIMITS
from buildgate.constants.validation import (
    ALLOWED_CONFIG_KEYS,
    ALLOWED_HEALTH_KEYS,
    ALLOWED_LIMIT_KEYS,
    BOOLEAN_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
    CFG009,
)
from buildgate.exceptions.validation import ValidationError


def validate_config_file(
    root: Path,
    config_path: Path | None = None,
    *,
    config_explicit: bool = False,
) -> list[ValidationError]:
    """Validate a buildgate.yaml file and return all validation errors.

    This is the collect-all entry point used by both ``buildgate
    validate-config`` and the ``evaluate``/``matrix`` preflight.  It never
    raises; all problems are returned as :class:`ValidationError` instances.
    """
    errors: list[ValidationError] = []
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    path_str = str(path)

    if not path.exists():
        if config_explicit:
            errors.append(
                ValidationError(
                    code=CFG001,
                    path=path_str,
                    field="",
                    message=f"config file not found: {path}",
                )
            )
        return errors

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        errors.append(
            ValidationError(
                code=CFG002,
                path=path_str,
                field="",
                message=f"invalid YAML: {exc}",
            )
        )
        return errors

    if raw is None:
        return errors

    if not isinstance(raw, dict):
        errors.append(
            ValidationError(
                code=CFG003,
                path=path_str,
                field="",
                message=f"config must be a YAML mapping, got {type(raw).__name__}",
            )
        )
        return errors

    _check_unknown_keys(raw, ALLOWED_CONFIG_KEYS, path_str, "", errors)

    if "threshold_limit" in raw:
        val = raw["threshold_limit"]
        if not isinstance(val, str) or val.lower() not in VALID_THRESHOLD_LIMITS:
            errors.append(
                ValidationError(
                    code=CFG006,
                    path=path_str,
                    field="threshold_limit",
                    message="invalid value for `threshold_limit`",
                    hint=f"expected one of: {', '.join(sorted(VALID_THRESHOLD_LIMITS))}; got: {val!r}",
                )
            )

    for key in BOOLEAN_KEYS:
        if key in raw and not isinstance(raw[key], bool):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field=key,
                    message=f"invalid type for `{key}`",
                    hint="expected a boolean",
                )
            )

    _validate_limits_block(raw, "unstable", path_str, errors)
    _validate_limits_block(raw, "failed", path_str, errors)
    _validate_health_block(raw, path_str, errors)

    return errors


def _validate_limits_block(
    raw: dict[str, Any],
    block: str,
    path_str: str,
    errors: list[ValidationError],
) -> None:
    """Validate an ``unstable`` or ``failed`` bucket-limit mapping."""
    limits = raw.get(block)
    if limits is None:
        return
    if not isinstance(limits, dict):
        errors.append(
            ValidationError(
                code=CFG009,
                path=path_str,
                field=block,
                message=f"`{block}` must be a mapping of bucket to limit",
            )
        )
        return

    _check_unknown_keys(limits, ALLOWED_LIMIT_KEYS, path_str, f"{block}.", errors)
    for bucket in sorted(limits):
        if bucket in ALLOWED_LIMIT_KEYS:
            _check_count(limits[bucket], f"{block}.{bucket}", path_str, errors)


def _validate_health_block(
    raw: dict[str, Any],
    path_str: str,
    errors: list[ValidationError],
) -> None:
    """Validate ``health`` bounds and the ``require_health`` cross-check."""
    health = raw.get("health")
    if health is None:
        health = {}
    if not isinstance(health, dict):
        errors.append(
            ValidationError(
                code=CFG009,
                path=path_str,
                field="health",
                message="`health` must be a mapping",
            )
        )
        return

    _check_unknown_keys(health, ALLOWED_HEALTH_KEYS, path_str, "health.", errors)
    healthy_ok = _check_count(health.get("healthy"), "health.healthy", path_str, errors)
    unhealthy_ok = _check_count(health.get("unhealthy"), "health.unhealthy", path_str, errors)

    if raw.get("require_health") is not True or not (healthy_ok and unhealthy_ok):
        return
    healthy = health.get("healthy")
    unhealthy = health.get("unhealthy")
    if healthy is None or unhealthy is None or unhealthy <= healthy:
        errors.append(
            ValidationError(
                code=CFG008,
                path=path_str,
                field="health",
                message="`require_health` is set but health bounds are unusable",
                hint=f"unhealthy ({unhealthy}) must be greater than healthy ({healthy})",
            )
        )


def _check_count(value: Any, field: str, path_str: str, errors: list[ValidationError]) -> bool:
    """Record an error unless *value* is ``None`` or a non-negative int."""
    if value is None:
        return True
    if isinstance(value, bool) or not isinstance(value, int):
        errors.append(
            ValidationError(
                code=CFG005,
                path=path_str,
                field=field,
                message=f"invalid type for `{field}`",
                hint="expected a non-negative integer",
            )
        )
        return False
    if value < 0:
        errors.append(
            ValidationError(
                code=CFG007,
                path=path_str,
                field=field,
                message=f"`{field}` must be a non-negative integer, got {value}",
            )
        )
        return False
    return True


def _check_unknown_keys(
    mapping: dict[Any, Any],
    allowed: frozenset[str],
    path_str: str,
    prefix: str,
    errors: list[ValidationError],
) -> None:
    for key in sorted(mapping, key=str):
        if key not in allowed:
            errors.append(
                ValidationError(
                    code=CFG004,
                    path=path_str,
                    field=f"{prefix}{key}",
                    message=f"unknown key `{prefix}{key}`",
                    hint=_suggest_key(str(key), allowed),
                )
            )


def _suggest_key(key: str, allowed: Iterable[str]) -> str:
    """Return a "did you mean" hint for a mistyped key, or an empty string."""
    matches = difflib.get_close_matches(key, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""
