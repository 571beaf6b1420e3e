"""Reference run lookup over a materialized history snapshot."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from buildgate.model import FindingSet, HistoryEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Baseline:
    """Findings of the reference run, or the empty set on a first run."""

    findings: FindingSet = field(default_factory=FindingSet.empty)
    run_id: str | None = None

    @property
    def is_empty_reference(self) -> bool:
        """Whether no prior run qualified as reference."""
        return self.run_id is None


def resolve_baseline(history: Iterable[HistoryEntry], *, use_stable_only: bool) -> Baseline:
    """Return the newest qualifying run from a newest-first *history*.

    Runs still in progress never qualify. With *use_stable_only*, only
    runs classified ``stable`` qualify; otherwise any completed run does.
    """
    for entry in history:
        if not entry.is_completed:
            continue
        if use_stable_only and entry.classification != "stable":
            continue
        logger.debug("Using run %s (%s) as reference", entry.run_id, entry.classification)
        return Baseline(findings=entry.findings, run_id=entry.run_id)

    logger.debug("No qualifying reference run; comparing against an empty baseline")
    return Baseline()
