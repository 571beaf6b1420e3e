"""Run history store and result sinks."""

from .sink import CompositeSink, HistorySink, ReportSink, ResultSink
from .store import JsonHistoryStore, history_file_stem

__all__ = ["CompositeSink", "HistorySink", "JsonHistoryStore", "ReportSink", "ResultSink", "history_file_stem"]
