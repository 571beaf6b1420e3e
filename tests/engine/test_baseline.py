"""Tests for reference run lookup."""

from __future__ import annotations

from buildgate.engine import resolve_baseline
from buildgate.model import Finding, FindingSet, HistoryEntry


def _entry(run_id: str, classification: str | None = "stable", status: str = "completed") -> HistoryEntry:
    findings = FindingSet.from_findings([Finding(key=f"k-{run_id}", severity="high", location="a.py")])
    return HistoryEntry(
        run_id=run_id,
        status=status,  # type: ignore[arg-type]
        classification=classification,  # type: ignore[arg-type]
        findings=findings,
    )


def test_empty_history_yields_empty_baseline() -> None:
    baseline = resolve_baseline([], use_stable_only=False)

    assert baseline.findings == FindingSet.empty()
    assert baseline.run_id is None
    assert baseline.is_empty_reference


def test_most_recent_completed_run_wins() -> None:
    history = [_entry("3", "unstable"), _entry("2", "stable")]

    baseline = resolve_baseline(history, use_stable_only=False)

    assert baseline.run_id == "3"
    assert baseline.findings.keys() == frozenset({"k-3"})


def test_stable_only_skips_unstable_and_failed_runs() -> None:
    history = [_entry("5", "failed"), _entry("4", "unstable"), _entry("3", "stable")]

    baseline = resolve_baseline(history, use_stable_only=True)

    assert baseline.run_id == "3"


def test_in_progress_run_never_qualifies() -> None:
    history = [_entry("9", None, status="in_progress"), _entry("8", "unstable")]

    assert resolve_baseline(history, use_stable_only=False).run_id == "8"


def test_no_qualifying_run_yields_empty_baseline() -> None:
    history = [_entry("2", "failed"), _entry("1", "unstable")]

    baseline = resolve_baseline(history, use_stable_only=True)

    assert baseline.is_empty_reference
    assert baseline.findings.count_all == 0


def test_resolution_does_not_consume_more_than_needed() -> None:
    consumed: list[str] = []

    def snapshot():
        for entry in [_entry("2"), _entry("1")]:
            consumed.append(entry.run_id)
            yield entry

    resolve_baseline(snapshot(), use_stable_only=False)

    assert consumed == ["2"]
