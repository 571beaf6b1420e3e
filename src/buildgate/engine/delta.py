"""New and fixed finding counts against a baseline."""

from __future__ import annotations

from buildgate.constants.thresholds import DELTA_MODE_ABSOLUTE, DELTA_MODE_SET_DIFFERENCE, SEVERITIES
from buildgate.model import DeltaResult, FindingSet, zero_counts
from buildgate.types import DeltaMode


def compute_delta(current: FindingSet, baseline: FindingSet, mode: DeltaMode) -> DeltaResult:
    """Compute per-severity new and fixed counts.

    ``set_difference`` compares identity keys, so a finding that vanishes
    and reappears unchanged is not new. ``absolute`` only compares counts
    and is an approximation: three findings replaced by three different
    ones report no change. It is kept because existing configurations
    depend on its pass/fail outcomes.
    """
    if mode == DELTA_MODE_SET_DIFFERENCE:
        return _set_difference(current, baseline)
    if mode == DELTA_MODE_ABSOLUTE:
        return _absolute(current, baseline)
    raise ValueError(f"Unknown delta mode: {mode!r}")


def _set_difference(current: FindingSet, baseline: FindingSet) -> DeltaResult:
    new_counts = zero_counts()
    fixed_counts = zero_counts()
    for severity in SEVERITIES:
        current_keys = current.keys(severity)
        baseline_keys = baseline.keys(severity)
        new_counts[severity] = len(current_keys - baseline_keys)
        fixed_counts[severity] = len(baseline_keys - current_keys)
    return DeltaResult(new_counts=new_counts, fixed_counts=fixed_counts)


def _absolute(current: FindingSet, baseline: FindingSet) -> DeltaResult:
    current_counts = current.counts_by_severity
    baseline_counts = baseline.counts_by_severity
    new_counts = zero_counts()
    fixed_counts = zero_counts()
    for severity in SEVERITIES:
        difference = current_counts[severity] - baseline_counts[severity]
        new_counts[severity] = max(0, difference)
        fixed_counts[severity] = max(0, -difference)
    return DeltaResult(new_counts=new_counts, fixed_counts=fixed_counts)
