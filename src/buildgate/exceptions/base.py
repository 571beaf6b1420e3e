"""Root of the Buildgate exception hierarchy."""

from __future__ import annotations


class BuildGateError(Exception):
    """Base class for all errors raised by Buildgate."""
