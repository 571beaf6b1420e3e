"""JSON report writer for evaluated runs."""

from __future__ import annotations

from pathlib import Path

from buildgate.constants.reporting import REPORT_FILE_SUFFIX, REPORT_TEMP_PREFIX, REPORT_TEMP_SUFFIX
from buildgate.io import write_json_atomic
from buildgate.model import RunResult
from buildgate.utils import sanitize_output_name


def report_filename(result: RunResult) -> str:
    """Deterministic report file name for a result."""
    stem = sanitize_output_name(f"{result.pipeline}-{result.run_id}" if result.pipeline else result.run_id)
    return f"{stem}{REPORT_FILE_SUFFIX}"


def write_result_report(out_dir: Path, result: RunResult) -> Path:
    """Write ``result.to_dict()`` atomically and return the report path."""
    path = out_dir / report_filename(result)
    write_json_atomic(
        path=path,
        payload=result.to_dict(),
        temp_prefix=REPORT_TEMP_PREFIX,
        temp_suffix=REPORT_TEMP_SUFFIX,
    )
    return path
