"""Fold the results of parallel branch runs into one parent result."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from buildgate.constants.thresholds import CLASSIFICATION_RANK, DEFAULT_THRESHOLD_LIMIT, SEVERITIES
from buildgate.engine.thresholds import included_severities
from buildgate.exceptions import EmptyAggregationError
from buildgate.model import DeltaResult, RunResult, zero_counts
from buildgate.types import Classification, Severity

logger = logging.getLogger(__name__)


def worst_classification(classifications: Iterable[Classification]) -> Classification:
    """Return the strictest classification (failed > unstable > stable)."""
    return max(classifications, key=lambda value: CLASSIFICATION_RANK[value], default="stable")


def aggregate_results(
    results: Sequence[RunResult],
    *,
    run_id: str | None = None,
    pipeline: str | None = None,
    threshold_limit: Severity = DEFAULT_THRESHOLD_LIMIT,  # type: ignore[assignment]
) -> RunResult:
    """Combine branch results into a single parent result.

    Counts and delta maps are summed per severity, the classification is
    the worst branch classification, and health is the finding-count
    weighted mean of the branches that report health, counting only
    severities at or above *threshold_limit*. The input results
    are kept, not copied, in ``contributing``.
    """
    if not results:
        raise EmptyAggregationError("Cannot aggregate results from zero branches")

    counts = zero_counts()
    new_counts = zero_counts()
    fixed_counts = zero_counts()
    for result in results:
        for severity in SEVERITIES:
            counts[severity] += result.counts.get(severity, 0)
            new_counts[severity] += result.delta.new_counts.get(severity, 0)
            fixed_counts[severity] += result.delta.fixed_counts.get(severity, 0)

    classification = worst_classification(result.classification for result in results)
    logger.debug("Aggregated %d branch results as %s", len(results), classification)

    return RunResult(
        run_id=run_id if run_id is not None else results[0].run_id,
        classification=classification,
        health_percent=aggregate_health(results, threshold_limit=threshold_limit),
        counts=counts,
        delta=DeltaResult(new_counts=new_counts, fixed_counts=fixed_counts),
        pipeline=pipeline if pipeline is not None else results[0].pipeline,
        contributing=tuple(results),
    )


def aggregate_health(
    results: Sequence[RunResult],
    *,
    threshold_limit: Severity = DEFAULT_THRESHOLD_LIMIT,  # type: ignore[assignment]
) -> int | None:
    """Finding-count weighted mean of the available branch health scores.

    Weights count the same severities as branch health, those at or above
    *threshold_limit*. Branches without health are excluded. When every
    remaining branch has zero weight the plain mean is used.
    """
    scored = [result for result in results if result.health_percent is not None]
    if not scored:
        return None

    severities = included_severities(threshold_limit)
    weights = [sum(result.counts.get(severity, 0) for severity in severities) for result in scored]
    total_weight = sum(weights)
    if total_weight == 0:
        return round(sum(result.health_percent for result in scored) / len(scored))  # type: ignore[misc]
    weighted = sum(
        result.health_percent * weight  # type: ignore[operator]
        for result, weight in zip(scored, weights, strict=True)
    )
    return round(weighted / total_weight)
