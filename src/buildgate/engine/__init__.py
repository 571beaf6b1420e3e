"""Threshold evaluation and delta aggregation engine."""

from .aggregate import aggregate_health, aggregate_results, worst_classification
from .baseline import Baseline, resolve_baseline
from .delta import compute_delta
from .evaluator import Branch, branch_pipeline, evaluate_findings, evaluate_matrix, evaluate_run
from .thresholds import ThresholdVerdict, bucket_counts, evaluate_thresholds, health_percent

__all__ = [
    "Baseline",
    "Branch",
    "ThresholdVerdict",
    "aggregate_health",
    "aggregate_results",
    "branch_pipeline",
    "bucket_counts",
    "compute_delta",
    "evaluate_findings",
    "evaluate_matrix",
    "evaluate_run",
    "evaluate_thresholds",
    "health_percent",
    "resolve_baseline",
    "worst_classification",
]
