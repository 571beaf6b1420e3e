"""CLI exit codes and help text."""

from __future__ import annotations

CLI_DESCRIPTION: str = (
    "Evaluate static-analysis findings against a run history and configured\n"
    "thresholds, and report a stable / unstable / failed build verdict."
)

EXIT_STABLE: int = 0
EXIT_FAILED: int = 1
EXIT_CONFIG_ERROR: int = 2
EXIT_UNSTABLE: int = 3

CLASSIFICATION_EXIT_CODES: dict[str, int] = {
    "stable": EXIT_STABLE,
    "unstable": EXIT_UNSTABLE,
    "failed": EXIT_FAILED,
}

BRANCH_SPEC_SEPARATOR: str = "="

DEFAULT_HISTORY_DIRNAME: str = ".buildgate/history"
RUN_ID_TIME_FORMAT: str = "%Y%m%dT%H%M%SZ"
