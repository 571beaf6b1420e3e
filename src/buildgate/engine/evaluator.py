"""Evaluation passes for single runs and fanned-out matrix runs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from buildgate.config.model import GateConfig
from buildgate.constants.history import BRANCH_PIPELINE_SEPARATOR
from buildgate.engine.aggregate import aggregate_results
from buildgate.engine.baseline import resolve_baseline
from buildgate.engine.delta import compute_delta
from buildgate.engine.thresholds import evaluate_thresholds
from buildgate.exceptions import EmptyAggregationError
from buildgate.history.sink import ResultSink
from buildgate.model import DeltaResult, Finding, FindingSet, HistoryEntry, RunResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Branch:
    """One axis of a fanned-out run with its own history snapshot."""

    name: str
    findings: FindingSet
    history: tuple[HistoryEntry, ...] = ()


def branch_pipeline(pipeline: str, branch_name: str) -> str:
    """Pipeline identity under which a branch keeps its own history."""
    return f"{pipeline}{BRANCH_PIPELINE_SEPARATOR}{branch_name}"


def evaluate_findings(
    findings: FindingSet | Iterable[Finding],
    history: Iterable[HistoryEntry],
    config: GateConfig,
    *,
    run_id: str,
    pipeline: str = "",
) -> RunResult:
    """Evaluate one run without publishing it.

    Reads only its arguments, so branch evaluations can run concurrently.
    """
    current = findings if isinstance(findings, FindingSet) else FindingSet.from_findings(findings)
    baseline = resolve_baseline(history, use_stable_only=config.use_stable_build_as_reference)

    if config.can_compute_new:
        if baseline.is_empty_reference:
            logger.info("Run %s has no reference run; all of its findings count as new", run_id)
        delta = compute_delta(current, baseline.findings, config.delta_mode)
    else:
        delta = DeltaResult.zero()

    verdict = evaluate_thresholds(
        current.counts_by_severity,
        delta,
        config.thresholds,
        can_compute_new=config.can_compute_new,
    )
    logger.info(
        "Run %s of %s: %s (%d findings, %d new, %d fixed, health %s)",
        run_id,
        pipeline or "<unnamed>",
        verdict.classification,
        current.count_all,
        delta.new_count_all,
        delta.fixed_count_all,
        "n/a" if verdict.health_percent is None else f"{verdict.health_percent}%",
    )

    return RunResult(
        run_id=run_id,
        classification=verdict.classification,
        health_percent=verdict.health_percent,
        counts=current.counts_by_severity,
        delta=delta,
        pipeline=pipeline,
        findings=current,
        reference_run_id=baseline.run_id,
        breaches=verdict.breaches,
    )


def evaluate_run(
    findings: FindingSet | Iterable[Finding],
    history: Iterable[HistoryEntry],
    config: GateConfig,
    *,
    run_id: str,
    pipeline: str = "",
    sink: ResultSink | None = None,
    upstream_failed: bool = False,
) -> RunResult | None:
    """Evaluate one run and publish the result to *sink* exactly once.

    Returns ``None`` without publishing when the upstream build already
    failed and ``can_run_on_failed`` is off.
    """
    if upstream_failed and not config.can_run_on_failed:
        logger.info("Skipping evaluation of run %s: upstream build failed", run_id)
        return None

    result = evaluate_findings(findings, history, config, run_id=run_id, pipeline=pipeline)
    if sink is not None:
        sink.publish(result)
    return result


def evaluate_matrix(
    branches: Sequence[Branch],
    config: GateConfig,
    *,
    run_id: str,
    pipeline: str = "",
    sink: ResultSink | None = None,
    upstream_failed: bool = False,
    max_workers: int | None = None,
) -> RunResult | None:
    """Evaluate every branch concurrently and aggregate them into one result.

    Publishing happens after all branches have finished: each branch
    result in input order, then the parent result.
    """
    if not branches:
        raise EmptyAggregationError("A matrix run needs at least one branch")
    if upstream_failed and not config.can_run_on_failed:
        logger.info("Skipping matrix evaluation of run %s: upstream build failed", run_id)
        return None

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(
                evaluate_findings,
                branch.findings,
                branch.history,
                config,
                run_id=run_id,
                pipeline=branch_pipeline(pipeline, branch.name),
            )
            for branch in branches
        ]
        results = [future.result() for future in futures]

    parent = aggregate_results(
        results,
        run_id=run_id,
        pipeline=pipeline,
        threshold_limit=config.thresholds.threshold_limit,
    )
    logger.info(
        "Matrix run %s of %s: %s across %d branches",
        run_id,
        pipeline or "<unnamed>",
        parent.classification,
        len(results),
    )

    if sink is not None:
        for result in results:
            sink.publish(result)
        sink.publish(parent)
    return parent
