"""On-disk run history, one JSON file per pipeline identity."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from buildgate.constants.history import (
    DEFAULT_MAX_HISTORY_ENTRIES,
    HISTORY_FILE_SUFFIX,
    HISTORY_NAME_DIGEST_LENGTH,
    HISTORY_TEMP_PREFIX,
    HISTORY_TEMP_SUFFIX,
    HISTORY_VERSION,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    VALID_RUN_STATUSES,
)
from buildgate.exceptions import HistoryError
from buildgate.io import load_json_file, write_json_atomic
from buildgate.model import HistoryEntry, RunResult
from buildgate.types import HistoryPayload, HistoryRecord
from buildgate.utils import sanitize_output_name

logger = logging.getLogger(__name__)


def history_file_stem(pipeline: str) -> str:
    """Readable, collision-free file stem for a pipeline identity.

    The sanitized name alone folds case and separators, so a digest of the
    raw identity keeps ``app/Linux``, ``app/linux`` and ``app-linux`` apart.
    """
    digest = hashlib.sha256(pipeline.encode("utf-8")).hexdigest()[:HISTORY_NAME_DIGEST_LENGTH]
    return f"{sanitize_output_name(pipeline)}-{digest}"


def _without_branch_findings(result: RunResult) -> RunResult:
    """Drop findings from contributing results; each branch keeps its own history."""
    if not result.is_aggregate:
        return result
    branches = tuple(replace(branch, findings=None) for branch in result.contributing)
    return replace(result, contributing=branches)


class JsonHistoryStore:
    """Run history store backed by JSON files under *root*.

    Runs are kept oldest first on disk; :meth:`history` hands out a
    newest-first snapshot that callers can pass to baseline resolution.
    """

    def __init__(self, root: Path, *, max_entries: int = DEFAULT_MAX_HISTORY_ENTRIES) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._root = root
        self._max_entries = max_entries

    def path_for(self, pipeline: str) -> Path:
        """Return the history file path for *pipeline*."""
        return self._root / f"{history_file_stem(pipeline)}{HISTORY_FILE_SUFFIX}"

    def history(self, pipeline: str) -> tuple[HistoryEntry, ...]:
        """Return a newest-first snapshot of the pipeline's runs."""
        payload = self._load(pipeline)
        entries = [self._entry_from_record(record, pipeline) for record in payload["runs"]]
        return tuple(reversed(entries))

    def mark_in_progress(self, pipeline: str, run_id: str) -> None:
        """Record that *run_id* has started and must not serve as reference."""
        payload = self._load(pipeline)
        runs = [record for record in payload["runs"] if record.get("run_id") != run_id]
        runs.append({"run_id": run_id, "status": STATUS_IN_PROGRESS})
        payload["runs"] = runs
        self._save(pipeline, payload)

    def record(self, pipeline: str, result: RunResult) -> None:
        """Append a completed result, replacing any record of the same run.

        Aggregate results are stored without their branches' findings.
        """
        payload = self._load(pipeline)
        stored = _without_branch_findings(result)
        runs = [record for record in payload["runs"] if record.get("run_id") != result.run_id]
        runs.append({"run_id": result.run_id, "status": STATUS_COMPLETED, "result": stored.to_dict()})
        if len(runs) > self._max_entries:
            dropped = len(runs) - self._max_entries
            logger.debug("Dropping %d oldest runs from %s history", dropped, pipeline)
            runs = runs[dropped:]
        payload["runs"] = runs
        self._save(pipeline, payload)

    def _load(self, pipeline: str) -> HistoryPayload:
        path = self.path_for(pipeline)
        if not path.is_file():
            return {"version": HISTORY_VERSION, "pipeline": pipeline, "runs": []}

        try:
            payload = load_json_file(path)
        except (OSError, ValueError) as exc:
            raise HistoryError(f"Unreadable history file {path}: {exc}") from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("runs"), list):
            raise HistoryError(f"History file {path} is not a run history document")
        if payload.get("version") != HISTORY_VERSION:
            raise HistoryError(f"History file {path} has unsupported version {payload.get('version')!r}")
        if payload.get("pipeline") != pipeline:
            raise HistoryError(
                f"History file {path} belongs to pipeline {payload.get('pipeline')!r}, not {pipeline!r}"
            )

        return {
            "version": HISTORY_VERSION,
            "pipeline": pipeline,
            "runs": [self._check_record(record, path) for record in payload["runs"]],
        }

    def _save(self, pipeline: str, payload: HistoryPayload) -> None:
        path = self.path_for(pipeline)
        try:
            write_json_atomic(
                path=path,
                payload=payload,
                temp_prefix=HISTORY_TEMP_PREFIX,
                temp_suffix=HISTORY_TEMP_SUFFIX,
            )
        except OSError as exc:
            raise HistoryError(f"Cannot write history file {path}: {exc}") from exc

    @staticmethod
    def _check_record(record: Any, path: Path) -> HistoryRecord:
        if not isinstance(record, dict) or not isinstance(record.get("run_id"), str):
            raise HistoryError(f"History file {path} contains a run without a run_id")
        status = record.get("status")
        if status not in VALID_RUN_STATUSES:
            raise HistoryError(f"History file {path} has run {record['run_id']} with invalid status {status!r}")
        if status == STATUS_COMPLETED and not isinstance(record.get("result"), dict):
            raise HistoryError(f"History file {path} has completed run {record['run_id']} without a result")
        return record  # type: ignore[return-value]

    def _entry_from_record(self, record: HistoryRecord, pipeline: str) -> HistoryEntry:
        if record["status"] == STATUS_IN_PROGRESS:
            return HistoryEntry(run_id=record["run_id"], status=STATUS_IN_PROGRESS)  # type: ignore[arg-type]
        try:
            result = RunResult.from_dict(record["result"])
        except (KeyError, TypeError, ValueError) as exc:
            raise HistoryError(f"Corrupt result for run {record['run_id']} of {pipeline}: {exc}") from exc
        return HistoryEntry.from_result(result)
