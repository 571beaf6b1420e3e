"""Core data models for Buildgate."""

from .entities import (
    DeltaResult,
    Finding,
    FindingSet,
    HistoryEntry,
    RunResult,
    ThresholdBreach,
    zero_counts,
)

__all__ = [
    "DeltaResult",
    "Finding",
    "FindingSet",
    "HistoryEntry",
    "RunResult",
    "ThresholdBreach",
    "zero_counts",
]
