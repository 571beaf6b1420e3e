"""Configuration-related exceptions."""

from __future__ import annotations

from buildgate.exceptions.base import BuildGateError


class ConfigError(BuildGateError, ValueError):
    """Raised when threshold configuration is malformed or contradictory."""
