"""Result sinks that persist or publish evaluated runs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from buildgate.history.store import JsonHistoryStore
from buildgate.model import RunResult
from buildgate.reporting.writer import write_result_report

logger = logging.getLogger(__name__)


class ResultSink(Protocol):
    """Receives each evaluated result exactly once."""

    def publish(self, result: RunResult) -> None:
        """Persist or display *result*."""


class HistorySink:
    """Records results into a history store so later runs can use them as reference."""

    def __init__(self, store: JsonHistoryStore) -> None:
        self._store = store

    def publish(self, result: RunResult) -> None:
        self._store.record(result.pipeline, result)


class ReportSink:
    """Writes one JSON report per result into *out_dir*."""

    def __init__(self, out_dir: Path) -> None:
        self._out_dir = out_dir
        self.written: list[Path] = []

    def publish(self, result: RunResult) -> None:
        path = write_result_report(self._out_dir, result)
        logger.debug("Wrote report %s", path)
        self.written.append(path)


class CompositeSink:
    """Forwards each result to several sinks in order."""

    def __init__(self, *sinks: ResultSink) -> None:
        self._sinks = sinks

    def publish(self, result: RunResult) -> None:
        for sink in self._sinks:
            sink.publish(result)
