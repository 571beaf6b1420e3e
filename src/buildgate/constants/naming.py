"""Regex patterns for pipeline and run identifier normalization."""

from __future__ import annotations

import re

NON_OUTPUT_NAME_PATTERN: re.Pattern[str] = re.compile(r"[^a-z0-9._-]+")
COLLAPSE_DASH_PATTERN: re.Pattern[str] = re.compile(r"-{2,}")
