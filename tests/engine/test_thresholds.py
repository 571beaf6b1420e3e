"""Tests for threshold classification and health scoring."""

from __future__ import annotations

import pytest

from buildgate.config import ThresholdConfig
from buildgate.engine import bucket_counts, evaluate_thresholds, health_percent
from buildgate.model import DeltaResult
from buildgate.types import Severity


def _counts(high: int = 0, normal: int = 0, low: int = 0) -> dict[Severity, int]:
    return {"high": high, "normal": normal, "low": low}


def _delta(high: int = 0, normal: int = 0, low: int = 0) -> DeltaResult:
    return DeltaResult(new_counts=_counts(high, normal, low))


def test_no_limits_is_always_stable() -> None:
    verdict = evaluate_thresholds(_counts(40, 40, 40), _delta(10), ThresholdConfig())

    assert verdict.classification == "stable"
    assert verdict.breaches == ()


def test_no_limits_clean_run_is_fully_healthy() -> None:
    verdict = evaluate_thresholds(_counts(), _delta(), ThresholdConfig(healthy=0, unhealthy=10))

    assert verdict.classification == "stable"
    assert verdict.health_percent == 100


def test_failed_limit_is_inclusive() -> None:
    config = ThresholdConfig(failed={"total_high": 3})

    assert evaluate_thresholds(_counts(high=2), _delta(), config).classification == "stable"
    assert evaluate_thresholds(_counts(high=3), _delta(), config).classification == "failed"


def test_failed_short_circuits_unstable() -> None:
    config = ThresholdConfig(unstable={"total_all": 1}, failed={"new_high": 1})

    verdict = evaluate_thresholds(_counts(high=1), _delta(high=1), config)

    assert verdict.classification == "failed"
    assert [breach.bucket for breach in verdict.breaches] == ["new_high"]
    assert verdict.breaches[0].classification == "failed"


def test_unstable_when_no_failed_limit_reached() -> None:
    config = ThresholdConfig(unstable={"total_normal": 2}, failed={"total_high": 1})

    verdict = evaluate_thresholds(_counts(normal=5), _delta(), config)

    assert verdict.classification == "unstable"
    assert verdict.breaches[0].actual == 5
    assert verdict.breaches[0].limit == 2


def test_zero_limit_differs_from_absent_limit() -> None:
    zero = ThresholdConfig(unstable={"new_low": 0})

    assert evaluate_thresholds(_counts(), _delta(), zero).classification == "unstable"
    assert evaluate_thresholds(_counts(), _delta(), ThresholdConfig()).classification == "stable"


def test_multiple_breaches_are_reported_sorted() -> None:
    config = ThresholdConfig(unstable={"total_low": 1, "new_all": 1, "total_all": 1})

    verdict = evaluate_thresholds(_counts(low=2), _delta(low=2), config)

    assert [breach.bucket for breach in verdict.breaches] == ["new_all", "total_all", "total_low"]


def test_new_buckets_skipped_when_new_not_computed() -> None:
    config = ThresholdConfig(failed={"new_all": 1}, unstable={"total_all": 10})

    verdict = evaluate_thresholds(_counts(high=2), _delta(high=2), config, can_compute_new=False)

    assert verdict.classification == "stable"


def test_threshold_limit_high_ignores_lower_priorities() -> None:
    config = ThresholdConfig(unstable={"total_all": 1, "total_low": 1}, threshold_limit="high")

    verdict = evaluate_thresholds(_counts(normal=4, low=9), _delta(), config)

    assert verdict.classification == "stable"


def test_threshold_limit_normal_counts_high_and_normal() -> None:
    observed = bucket_counts(_counts(high=1, normal=2, low=4), _delta(normal=1, low=3), threshold_limit="normal")

    assert observed == {
        "total_all": 3,
        "total_high": 1,
        "total_normal": 2,
        "new_all": 1,
        "new_high": 0,
        "new_normal": 1,
    }


def test_threshold_limit_restricts_health_count() -> None:
    config = ThresholdConfig(healthy=0, unhealthy=10, threshold_limit="high")

    verdict = evaluate_thresholds(_counts(high=5, low=100), _delta(), config)

    assert verdict.health_percent == 50


@pytest.mark.parametrize(
    ("count", "expected"),
    [(0, 100), (5, 50), (10, 0), (15, 0), (1, 90), (9, 10)],
    ids=["clean", "midpoint", "at_unhealthy", "clamped", "one", "nine"],
)
def test_health_interpolation(count: int, expected: int) -> None:
    assert health_percent(count, 0, 10) == expected


def test_health_at_or_below_healthy_bound_is_full() -> None:
    assert health_percent(3, 5, 15) == 100
    assert health_percent(5, 5, 15) == 100
    assert health_percent(10, 5, 15) == 50


@pytest.mark.parametrize(
    ("healthy", "unhealthy"),
    [(None, 10), (0, None), (10, 10), (10, 5)],
    ids=["no_healthy", "no_unhealthy", "equal", "inverted"],
)
def test_health_unavailable_for_unusable_bounds(healthy: int | None, unhealthy: int | None) -> None:
    assert health_percent(3, healthy, unhealthy) is None


def test_health_stays_in_range() -> None:
    for count in range(0, 40):
        value = health_percent(count, 4, 23)
        assert value is not None
        assert 0 <= value <= 100


_RANK = {"stable": 0, "unstable": 1, "failed": 2}


@pytest.mark.parametrize("bucket_severity", ["high", "normal", "low"])
def test_classification_is_monotonic_in_counts(bucket_severity: Severity) -> None:
    config = ThresholdConfig(
        unstable={"total_all": 4, "new_normal": 2},
        failed={"total_high": 3, "new_all": 6},
    )
    previous = -1
    for amount in range(0, 12):
        counts = _counts()
        counts[bucket_severity] = amount
        delta = DeltaResult(new_counts=dict(counts))
        rank = _RANK[evaluate_thresholds(counts, delta, config).classification]
        assert rank >= previous
        previous = rank
