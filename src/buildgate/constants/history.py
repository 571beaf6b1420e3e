"""Constants for the on-disk run history store."""

from __future__ import annotations

HISTORY_VERSION: int = 1
HISTORY_FILE_SUFFIX: str = ".history.json"
HISTORY_TEMP_PREFIX: str = ".tmp-history-"
HISTORY_TEMP_SUFFIX: str = ".json"
DEFAULT_MAX_HISTORY_ENTRIES: int = 50
# Hex digits of the sha256 of the raw pipeline identity appended to file names.
HISTORY_NAME_DIGEST_LENGTH: int = 12

STATUS_COMPLETED: str = "completed"
STATUS_IN_PROGRESS: str = "in_progress"
VALID_RUN_STATUSES: frozenset[str] = frozenset({STATUS_COMPLETED, STATUS_IN_PROGRESS})

PIPELINE_NAME_FALLBACK: str = "pipeline"
BRANCH_PIPELINE_SEPARATOR: str = "/"
