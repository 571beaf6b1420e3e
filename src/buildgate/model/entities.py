"""Frozen value objects shared by the evaluation engine, history, and reporting."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from buildgate.constants.history import STATUS_COMPLETED
from buildgate.constants.reporting import SCHEMA_VERSION
from buildgate.constants.thresholds import SEVERITIES
from buildgate.types import Bucket, Classification, RunStatus, Severity


def zero_counts() -> dict[Severity, int]:
    """Return a per-severity count map with every severity present."""
    return {"high": 0, "normal": 0, "low": 0}


def _counts_from_dict(raw: Mapping[str, Any]) -> dict[Severity, int]:
    counts = zero_counts()
    for severity in SEVERITIES:
        counts[severity] = int(raw.get(severity, 0))  # type: ignore[index]
    return counts


@dataclass(frozen=True)
class Finding:
    """One reported issue from a static-analysis report."""

    key: str
    severity: Severity
    location: str
    title: str = ""

    def to_dict(self) -> dict[str, str]:
        """Serialize to a JSON-compatible dict."""
        return {
            "key": self.key,
            "severity": self.severity,
            "location": self.location,
            "title": self.title,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Finding:
        """Rebuild a finding from a trusted ``to_dict`` payload."""
        return cls(
            key=str(raw["key"]),
            severity=raw["severity"],
            location=str(raw.get("location", "")),
            title=str(raw.get("title", "")),
        )


@dataclass(frozen=True)
class FindingSet:
    """Ordered, key-deduplicated findings of one run.

    Counts are always derived from ``findings``; duplicate keys keep the
    first occurrence.
    """

    findings: tuple[Finding, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        unique: list[Finding] = []
        for finding in self.findings:
            if finding.key in seen:
                continue
            seen.add(finding.key)
            unique.append(finding)
        object.__setattr__(self, "findings", tuple(unique))

    @classmethod
    def from_findings(cls, findings: Iterable[Finding]) -> FindingSet:
        """Build a set from provider output."""
        return cls(findings=tuple(findings))

    @classmethod
    def empty(cls) -> FindingSet:
        """Return the baseline used when no prior run qualifies."""
        return cls()

    def __len__(self) -> int:
        return len(self.findings)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self.findings)

    @property
    def counts_by_severity(self) -> dict[Severity, int]:
        """Number of findings per severity, with stable keys."""
        counts = zero_counts()
        for finding in self.findings:
            counts[finding.severity] += 1
        return counts

    @property
    def count_all(self) -> int:
        """Total number of findings."""
        return sum(self.counts_by_severity.values())

    def keys(self, severity: Severity | None = None) -> frozenset[str]:
        """Identity keys, optionally restricted to one severity."""
        return frozenset(
            finding.key for finding in self.findings if severity is None or finding.severity == severity
        )

    def to_list(self) -> list[dict[str, str]]:
        """Serialize findings in their stored order."""
        return [finding.to_dict() for finding in self.findings]

    @classmethod
    def from_list(cls, raw: Iterable[Mapping[str, Any]]) -> FindingSet:
        """Rebuild a set from ``to_list`` output."""
        return cls.from_findings(Finding.from_dict(item) for item in raw)


@dataclass(frozen=True)
class DeltaResult:
    """New and fixed finding counts relative to a baseline."""

    new_counts: dict[Severity, int] = field(default_factory=zero_counts)
    fixed_counts: dict[Severity, int] = field(default_factory=zero_counts)

    @classmethod
    def zero(cls) -> DeltaResult:
        """Return a delta with no new and no fixed findings."""
        return cls()

    @property
    def new_count_all(self) -> int:
        """Total number of new findings."""
        return sum(self.new_counts.values())

    @property
    def fixed_count_all(self) -> int:
        """Total number of fixed findings."""
        return sum(self.fixed_counts.values())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "new_counts_by_severity": dict(self.new_counts),
            "fixed_counts_by_severity": dict(self.fixed_counts),
            "new_count_all": self.new_count_all,
            "fixed_count_all": self.fixed_count_all,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> DeltaResult:
        """Rebuild a delta from ``to_dict`` output."""
        return cls(
            new_counts=_counts_from_dict(raw.get("new_counts_by_severity", {})),
            fixed_counts=_counts_from_dict(raw.get("fixed_counts_by_severity", {})),
        )


@dataclass(frozen=True)
class ThresholdBreach:
    """A configured bucket limit that a run reached."""

    bucket: Bucket
    limit: int
    actual: int
    classification: Classification

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "bucket": self.bucket,
            "limit": self.limit,
            "actual": self.actual,
            "classification": self.classification,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> ThresholdBreach:
        """Rebuild a breach from ``to_dict`` output."""
        return cls(
            bucket=raw["bucket"],
            limit=int(raw["limit"]),
            actual=int(raw["actual"]),
            classification=raw["classification"],
        )


@dataclass(frozen=True)
class RunResult:
    """Verdict of one evaluation pass, or of an aggregate of branch passes."""

    run_id: str
    classification: Classification
    health_percent: int | None
    counts: dict[Severity, int]
    delta: DeltaResult
    pipeline: str = ""
    contributing: tuple[RunResult, ...] = ()
    findings: FindingSet | None = None
    reference_run_id: str | None = None
    breaches: tuple[ThresholdBreach, ...] = ()

    @property
    def count_all(self) -> int:
        """Total number of findings across severities."""
        return sum(self.counts.values())

    @property
    def is_aggregate(self) -> bool:
        """Whether this result folds branch results together."""
        return bool(self.contributing)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict, branches included."""
        return {
            "schema_version": SCHEMA_VERSION,
            "run_id": self.run_id,
            "pipeline": self.pipeline,
            "classification": self.classification,
            "health_percent": self.health_percent,
            "counts_by_severity": dict(self.counts),
            "count_all": self.count_all,
            "delta": self.delta.to_dict(),
            "reference_run_id": self.reference_run_id,
            "breaches": [breach.to_dict() for breach in self.breaches],
            "findings": self.findings.to_list() if self.findings is not None else None,
            "contributing": [result.to_dict() for result in self.contributing],
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> RunResult:
        """Rebuild a result from ``to_dict`` output."""
        raw_findings = raw.get("findings")
        health = raw.get("health_percent")
        return cls(
            run_id=str(raw["run_id"]),
            classification=raw["classification"],
            health_percent=int(health) if health is not None else None,
            counts=_counts_from_dict(raw.get("counts_by_severity", {})),
            delta=DeltaResult.from_dict(raw.get("delta", {})),
            pipeline=str(raw.get("pipeline", "")),
            contributing=tuple(cls.from_dict(item) for item in raw.get("contributing", [])),
            findings=FindingSet.from_list(raw_findings) if raw_findings is not None else None,
            reference_run_id=raw.get("reference_run_id"),
            breaches=tuple(ThresholdBreach.from_dict(item) for item in raw.get("breaches", [])),
        )


@dataclass(frozen=True)
class HistoryEntry:
    """One prior run as seen by baseline resolution."""

    run_id: str
    status: RunStatus = STATUS_COMPLETED  # type: ignore[assignment]
    classification: Classification | None = None
    findings: FindingSet = field(default_factory=FindingSet.empty)

    @property
    def is_completed(self) -> bool:
        """Whether the run finished and carries a classification."""
        return self.status == STATUS_COMPLETED and self.classification is not None

    @classmethod
    def from_result(cls, result: RunResult) -> HistoryEntry:
        """Wrap a finished result as a history entry."""
        return cls(
            run_id=result.run_id,
            status=STATUS_COMPLETED,  # type: ignore[arg-type]
            classification=result.classification,
            findings=result.findings if result.findings is not None else FindingSet.empty(),
        )
