"""JSON document persistence shared by run history and report output."""

from __future__ import annotations

import json
import os
import tempfile
from contextlib import suppress
from pathlib import Path


def load_json_file(path: Path) -> object:
    """Decode the JSON document at *path*."""
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def dump_json(payload: object) -> str:
    """Render *payload* in the on-disk layout: sorted keys, two-space indent, trailing newline."""
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"


def write_json_atomic(
    *,
    path: Path,
    payload: object,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Replace *path* with *payload* so readers never see a partial document.

    The payload is rendered before any file is created, so a value that
    cannot be serialized leaves the directory untouched.
    """
    text = dump_json(payload)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=temp_prefix, suffix=temp_suffix)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, path)
    except BaseException:
        with suppress(FileNotFoundError):
            os.unlink(temp_name)
        raise
