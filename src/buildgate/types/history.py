"""TypedDict payloads for the on-disk run history file."""

from __future__ import annotations

from typing import TypedDict

from buildgate.types.common import JsonObject


class HistoryRecord(TypedDict, total=False):
    """One persisted run within a pipeline history file."""

    run_id: str
    status: str
    result: JsonObject


class HistoryPayload(TypedDict):
    """Top-level history file payload for one pipeline."""

    version: int
    pipeline: str
    runs: list[HistoryRecord]
