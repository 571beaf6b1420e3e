"""Constants for report file names, atomic writing, and stdout formatting."""

from __future__ import annotations

REPORT_FILE_SUFFIX: str = ".json"
REPORT_TEMP_PREFIX: str = ".tmp-"
REPORT_TEMP_SUFFIX: str = ".json"

SCHEMA_VERSION: str = "1.0.0"

SUMMARY_TITLE: str = "Buildgate Verdict"

# ANSI escape codes for terminal colouring.
ANSI_RESET: str = "\033[0m"
ANSI_RED: str = "\033[31;1m"
ANSI_YELLOW: str = "\033[33;1m"
ANSI_GREEN: str = "\033[32;1m"
ANSI_DIM: str = "\033[2m"

CLASSIFICATION_COLORS: dict[str, str] = {
    "failed": ANSI_RED,
    "unstable": ANSI_YELLOW,
    "stable": ANSI_GREEN,
}

SEVERITY_COLORS: dict[str, str] = {
    "high": ANSI_RED,
    "normal": ANSI_YELLOW,
    "low": ANSI_GREEN,
}
