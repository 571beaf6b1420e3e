"""Tests for new/fixed finding computation."""

from __future__ import annotations

import random

import pytest

from buildgate.engine import compute_delta
from buildgate.model import Finding, FindingSet
from buildgate.types import DeltaMode, Severity


def _set(*specs: tuple[str, Severity]) -> FindingSet:
    return FindingSet.from_findings(Finding(key=key, severity=severity, location="x.py") for key, severity in specs)


@pytest.mark.parametrize("mode", ["set_difference", "absolute"])
def test_identical_sets_have_no_delta(mode: DeltaMode) -> None:
    current = _set(("a", "high"), ("b", "normal"), ("c", "low"))

    delta = compute_delta(current, current, mode)

    assert delta.new_count_all == 0
    assert delta.fixed_count_all == 0


@pytest.mark.parametrize("mode", ["set_difference", "absolute"])
def test_empty_inputs_yield_zero_delta(mode: DeltaMode) -> None:
    delta = compute_delta(FindingSet.empty(), FindingSet.empty(), mode)

    assert delta.new_counts == {"high": 0, "normal": 0, "low": 0}
    assert delta.fixed_counts == {"high": 0, "normal": 0, "low": 0}


@pytest.mark.parametrize("mode", ["set_difference", "absolute"])
def test_empty_baseline_makes_everything_new(mode: DeltaMode) -> None:
    current = _set(("a", "high"), ("b", "high"), ("c", "low"))

    delta = compute_delta(current, FindingSet.empty(), mode)

    assert delta.new_counts == {"high": 2, "normal": 0, "low": 1}
    assert delta.new_count_all == current.count_all
    assert delta.fixed_count_all == 0


def test_set_difference_counts_replaced_findings() -> None:
    baseline = _set(("a", "high"), ("b", "high"), ("c", "high"))
    current = _set(("x", "high"), ("y", "high"), ("z", "high"))

    delta = compute_delta(current, baseline, "set_difference")

    assert delta.new_counts["high"] == 3
    assert delta.fixed_counts["high"] == 3


def test_absolute_mode_treats_equal_counts_as_unchanged() -> None:
    baseline = _set(("a", "high"), ("b", "high"), ("c", "high"))
    current = _set(("x", "high"), ("y", "high"), ("z", "high"))

    delta = compute_delta(current, baseline, "absolute")

    assert delta.new_count_all == 0
    assert delta.fixed_count_all == 0


def test_set_difference_mixed_changes() -> None:
    baseline = _set(("keep", "high"), ("gone", "normal"), ("old-low", "low"))
    current = _set(("keep", "high"), ("fresh", "normal"), ("old-low", "low"), ("fresh-low", "low"))

    delta = compute_delta(current, baseline, "set_difference")

    assert delta.new_counts == {"high": 0, "normal": 1, "low": 1}
    assert delta.fixed_counts == {"high": 0, "normal": 1, "low": 0}
    assert delta.new_count_all <= current.count_all
    assert delta.fixed_count_all <= baseline.count_all


def test_set_difference_ignores_finding_order() -> None:
    specs = [(f"k{i}", ("high", "normal", "low")[i % 3]) for i in range(12)]
    baseline = _set(*specs[:8])
    shuffled = list(specs[4:])
    random.Random(7).shuffle(shuffled)

    ordered = compute_delta(_set(*specs[4:]), baseline, "set_difference")
    reordered = compute_delta(_set(*shuffled), baseline, "set_difference")

    assert ordered == reordered


@pytest.mark.parametrize(
    ("current_size", "baseline_size"),
    [(0, 50), (50, 0), (3, 1000), (1000, 3)],
)
def test_absolute_mode_never_negative(current_size: int, baseline_size: int) -> None:
    current = _set(*[(f"c{i}", "normal") for i in range(current_size)])
    baseline = _set(*[(f"b{i}", "normal") for i in range(baseline_size)])

    delta = compute_delta(current, baseline, "absolute")

    assert all(value >= 0 for value in delta.new_counts.values())
    assert all(value >= 0 for value in delta.fixed_counts.values())
    assert delta.new_count_all == max(0, current_size - baseline_size)
    assert delta.fixed_count_all == max(0, baseline_size - current_size)


def test_unknown_mode_is_rejected() -> None:
    with pytest.raises(ValueError, match="delta mode"):
        compute_delta(FindingSet.empty(), FindingSet.empty(), "fuzzy")  # type: ignore[arg-type]
