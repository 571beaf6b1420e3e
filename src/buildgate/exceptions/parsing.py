"""Input parsing exceptions."""

from __future__ import annotations

from buildgate.exceptions.base import BuildGateError


class FindingsParseError(BuildGateError, ValueError):
    """Raised when a findings document cannot be parsed."""


class HistoryError(BuildGateError):
    """Raised when a stored run history file is unreadable or corrupt."""
