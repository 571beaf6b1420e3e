"""Shared type aliases for Buildgate."""

from .common import (
    Bucket,
    Classification,
    DeltaMode,
    JsonObject,
    JsonScalar,
    JsonValue,
    RunStatus,
    Severity,
)
from .history import HistoryPayload, HistoryRecord

__all__ = [
    "Bucket",
    "Classification",
    "DeltaMode",
    "HistoryPayload",
    "HistoryRecord",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "RunStatus",
    "Severity",
]
