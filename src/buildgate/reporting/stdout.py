"""Human-readable stdout reporter for evaluation results."""

from __future__ import annotations

from collections.abc import Mapping

from buildgate.constants.reporting import (
    ANSI_DIM,
    ANSI_RESET,
    CLASSIFICATION_COLORS,
    SEVERITY_COLORS,
    SUMMARY_TITLE,
)
from buildgate.constants.thresholds import SEVERITIES
from buildgate.model import RunResult
from buildgate.types import Classification, Severity


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


def _format_health(health: int | None) -> str:
    return "n/a" if health is None else f"{health}%"


class StdoutReporter:
    """Formats a run result as a compact terminal summary."""

    def __init__(self, result: RunResult, *, color: bool = True, verbose: bool = False) -> None:
        """Initialise the reporter."""
        self._result = result
        self._color = color
        self._verbose = verbose

    def render(self) -> str:
        """Render the full stdout report as a single string."""
        sections = [self._render_header(), self._render_breaches(), self._render_branches()]
        return "\n".join(section for section in sections if section)

    def _render_header(self) -> str:
        r = self._result
        sep = "  " + "─" * 38
        reference = r.reference_run_id if r.reference_run_id is not None else "none"

        lines = [
            "",
            f"  {SUMMARY_TITLE}",
            sep,
            "",
        ]
        if r.pipeline:
            lines.append(f"  Pipeline    {r.pipeline}")
        if r.is_aggregate:
            lines.append(f"  Run         {r.run_id} ({len(r.contributing)} branches)")
        else:
            lines.append(f"  Run         {r.run_id} (reference: {reference})")
        lines.extend(
            [
                f"  Verdict     {self._classification(r.classification)}",
                f"  Health      {_format_health(r.health_percent)}",
                f"  Findings    {r.count_all} ({self._breakdown(r.counts)})",
                f"  New         {r.delta.new_count_all} ({self._breakdown(r.delta.new_counts)})",
                f"  Fixed       {r.delta.fixed_count_all} ({self._breakdown(r.delta.fixed_counts)})",
            ]
        )
        return "\n".join(lines)

    def _render_breaches(self) -> str:
        if not self._result.breaches:
            return ""
        lines = ["", "  Limits reached"]
        for breach in self._result.breaches:
            lines.append(
                f"    {self._classification(breach.classification):<10} "
                f"{breach.bucket:<13} {breach.actual} >= {breach.limit}"
            )
        return "\n".join(lines)

    def _render_branches(self) -> str:
        if not self._result.is_aggregate:
            return ""
        width = max(len(branch.pipeline or branch.run_id) for branch in self._result.contributing)
        lines = ["", "  Branches"]
        for branch in self._result.contributing:
            name = branch.pipeline or branch.run_id
            line = (
                f"    {name:<{width}}  {self._classification(branch.classification):<10} "
                f"{branch.count_all} findings, {branch.delta.new_count_all} new, "
                f"health {_format_health(branch.health_percent)}"
            )
            lines.append(line)
            if self._verbose:
                for breach in branch.breaches:
                    detail = f"      {breach.bucket} {breach.actual} >= {breach.limit}"
                    lines.append(_colorize(detail, ANSI_DIM) if self._color else detail)
        return "\n".join(lines)

    def _classification(self, classification: Classification) -> str:
        label = classification.upper()
        color = CLASSIFICATION_COLORS.get(classification, "")
        return _colorize(label, color) if self._color and color else label

    def _breakdown(self, counts: Mapping[Severity, int]) -> str:
        parts = []
        for severity in SEVERITIES:
            label = f"{severity} {counts.get(severity, 0)}"
            color = SEVERITY_COLORS.get(severity, "")
            parts.append(_colorize(label, color) if self._color and color else label)
        return " / ".join(parts)
