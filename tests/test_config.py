"""Tests for configuration loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from buildgate.config import GateConfig, ThresholdConfig, load_config
from buildgate.exceptions import ConfigError


def _write_config(tmp_path: Path, content: str) -> Path:
    config_path = tmp_path / "buildgate.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    loaded = load_config(tmp_path)

    assert loaded == GateConfig()
    assert loaded.delta_mode == "set_difference"
    assert loaded.thresholds.unstable == {}
    assert loaded.thresholds.failed == {}
    assert not loaded.thresholds.health_enabled


def test_load_config_missing_explicit_path_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path, tmp_path / "nope.yaml")


def test_load_config_empty_file_is_default(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    assert load_config(tmp_path) == GateConfig()


def test_load_config_full_document(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        "threshold_limit: NORMAL\n"
        "use_delta_values: false\n"
        "can_compute_new: true\n"
        "use_stable_build_as_reference: true\n"
        "can_run_on_failed: true\n"
        "health:\n"
        "  healthy: 2\n"
        "  unhealthy: 12\n"
        "unstable:\n"
        "  total_all: 10\n"
        "  new_high: 1\n"
        "  new_low: null\n"
        "failed:\n"
        "  total_high: 3\n",
    )

    loaded = load_config(tmp_path)

    assert loaded.thresholds == ThresholdConfig(
        unstable={"total_all": 10, "new_high": 1},
        failed={"total_high": 3},
        healthy=2,
        unhealthy=12,
        threshold_limit="normal",
    )
    assert loaded.delta_mode == "absolute"
    assert loaded.use_stable_build_as_reference is True
    assert loaded.can_run_on_failed is True
    assert loaded.thresholds.health_enabled


@pytest.mark.parametrize(
    ("yaml_content", "expected_match"),
    [
        ("threshold_limit: urgent\n", "threshold_limit"),
        ("use_delta_values: maybe\n", "use_delta_values"),
        ("unstable:\n  total_all: -1\n", "unstable.total_all"),
        ("failed:\n  total_everything: 1\n", "failed.total_everything"),
        ("failed:\n  new_high: true\n", "failed.new_high"),
        ("failed: [1, 2]\n", "failed must be a mapping"),
        ("health: 5\n", "health must be a mapping"),
        ("health:\n  healthy: -3\n", "health.healthy"),
        ("- a\n- b\n", "YAML mapping"),
        ("unstable: {total_all: [\n", "Invalid YAML"),
    ],
    ids=[
        "bad_threshold_limit",
        "non_bool_flag",
        "negative_limit",
        "unknown_bucket",
        "bool_limit",
        "limits_not_mapping",
        "health_not_mapping",
        "negative_bound",
        "not_mapping",
        "broken_yaml",
    ],
)
def test_load_config_rejects_invalid_documents(tmp_path: Path, yaml_content: str, expected_match: str) -> None:
    _write_config(tmp_path, yaml_content)

    with pytest.raises(ConfigError, match=expected_match):
        load_config(tmp_path)


def test_require_health_with_inverted_bounds_fails(tmp_path: Path) -> None:
    _write_config(tmp_path, "require_health: true\nhealth:\n  healthy: 10\n  unhealthy: 5\n")

    with pytest.raises(ConfigError, match="require_health"):
        load_config(tmp_path)


def test_require_health_without_bounds_fails(tmp_path: Path) -> None:
    _write_config(tmp_path, "require_health: true\n")

    with pytest.raises(ConfigError, match="require_health"):
        load_config(tmp_path)


def test_inverted_bounds_disable_health_without_require_health(tmp_path: Path) -> None:
    _write_config(tmp_path, "health:\n  healthy: 10\n  unhealthy: 5\n")

    loaded = load_config(tmp_path)

    assert not loaded.thresholds.health_enabled


def test_unreachable_unstable_limit_is_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    _write_config(tmp_path, "unstable:\n  total_high: 5\nfailed:\n  total_high: 3\n")

    with caplog.at_level(logging.WARNING, logger="buildgate.config.loader"):
        load_config(tmp_path)

    assert "total_high" in caplog.text
