"""Configuration loading, validation, and normalization for Buildgate.

This package facade re-exports all public names so that
``from buildgate.config import ...`` reaches every entry point.
"""

from __future__ import annotations

from buildgate.config.loader import build_threshold_config, config_from_mapping, load_config
from buildgate.config.model import GateConfig, ThresholdConfig
from buildgate.config.options import config_from_options
from buildgate.config.validator import _suggest_key, validate_config_file

__all__ = [
    "GateConfig",
    "ThresholdConfig",
    "_suggest_key",
    "build_threshold_config",
    "config_from_mapping",
    "config_from_options",
    "load_config",
    "validate_config_file",
]
