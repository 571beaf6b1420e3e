"""Aggregation-related exceptions."""

from __future__ import annotations

from buildgate.exceptions.base import BuildGateError


class EmptyAggregationError(BuildGateError, ValueError):
    """Raised when results are aggregated from zero branches."""
