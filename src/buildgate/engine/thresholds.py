"""Threshold classification and health scoring."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from buildgate.config.model import ThresholdConfig
from buildgate.constants.thresholds import HEALTH_MAX, HEALTH_MIN, SEVERITIES, SEVERITY_RANK
from buildgate.model import DeltaResult, ThresholdBreach
from buildgate.types import Bucket, Classification, Severity


@dataclass(frozen=True)
class ThresholdVerdict:
    """Classification, health score, and the limits that caused them."""

    classification: Classification
    health_percent: int | None
    breaches: tuple[ThresholdBreach, ...] = ()


def included_severities(threshold_limit: Severity) -> tuple[Severity, ...]:
    """Severities at or above the configured priority floor."""
    floor = SEVERITY_RANK[threshold_limit]
    return tuple(severity for severity in SEVERITIES if SEVERITY_RANK[severity] >= floor)  # type: ignore[misc]


def bucket_counts(
    counts: Mapping[Severity, int],
    delta: DeltaResult,
    *,
    threshold_limit: Severity = "low",
    can_compute_new: bool = True,
) -> dict[Bucket, int]:
    """Observed value for every bucket that can take part in evaluation.

    Severities below *threshold_limit* have no bucket and are left out of
    the ``*_all`` sums. ``new_*`` buckets are omitted when new findings
    are not computed.
    """
    severities = included_severities(threshold_limit)
    observed: dict[str, int] = {"total_all": sum(counts.get(severity, 0) for severity in severities)}
    for severity in severities:
        observed[f"total_{severity}"] = counts.get(severity, 0)
    if can_compute_new:
        observed["new_all"] = sum(delta.new_counts.get(severity, 0) for severity in severities)
        for severity in severities:
            observed[f"new_{severity}"] = delta.new_counts.get(severity, 0)
    return observed  # type: ignore[return-value]


def evaluate_thresholds(
    counts: Mapping[Severity, int],
    delta: DeltaResult,
    config: ThresholdConfig,
    *,
    can_compute_new: bool = True,
) -> ThresholdVerdict:
    """Classify a run and score its health.

    Any configured ``failed`` limit that is reached fails the run and
    short-circuits the ``unstable`` limits. A limit is reached when the
    observed count is greater than or equal to it.
    """
    observed = bucket_counts(
        counts,
        delta,
        threshold_limit=config.threshold_limit,
        can_compute_new=can_compute_new,
    )
    health = health_percent(observed["total_all"], config.healthy, config.unhealthy)

    failed = _breaches(observed, config.failed, "failed")
    if failed:
        return ThresholdVerdict(classification="failed", health_percent=health, breaches=failed)

    unstable = _breaches(observed, config.unstable, "unstable")
    if unstable:
        return ThresholdVerdict(classification="unstable", health_percent=health, breaches=unstable)

    return ThresholdVerdict(classification="stable", health_percent=health)


def health_percent(count: int, healthy: int | None, unhealthy: int | None) -> int | None:
    """Interpolate *count* linearly from 100 at *healthy* to 0 at *unhealthy*.

    Returns ``None`` when a bound is missing or ``unhealthy <= healthy``.
    """
    if healthy is None or unhealthy is None or unhealthy <= healthy:
        return None
    if count <= healthy:
        return HEALTH_MAX
    if count >= unhealthy:
        return HEALTH_MIN
    return HEALTH_MAX - ((count - healthy) * HEALTH_MAX) // (unhealthy - healthy)


def _breaches(
    observed: Mapping[Bucket, int],
    limits: Mapping[Bucket, int],
    classification: Classification,
) -> tuple[ThresholdBreach, ...]:
    breaches = [
        ThresholdBreach(bucket=bucket, limit=limit, actual=observed[bucket], classification=classification)
        for bucket, limit in limits.items()
        if bucket in observed and observed[bucket] >= limit
    ]
    return tuple(sorted(breaches, key=lambda breach: breach.bucket))
