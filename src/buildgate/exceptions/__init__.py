"""Shared exception hierarchy for Buildgate."""

from __future__ import annotations

from .aggregation import EmptyAggregationError
from .base import BuildGateError
from .config import ConfigError
from .parsing import FindingsParseError, HistoryError

__all__ = [
    "BuildGateError",
    "ConfigError",
    "EmptyAggregationError",
    "FindingsParseError",
    "HistoryError",
]
