"""Tests for the JSON findings provider."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from buildgate.exceptions import FindingsParseError
from buildgate.model import FindingSet
from buildgate.providers import load_findings_file, normalize_severity, parse_findings, structural_key


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("HIGH", "high"),
        ("critical", "high"),
        ("Error", "high"),
        ("medium", "normal"),
        ("warning", "normal"),
        (" normal ", "normal"),
        ("info", "low"),
        ("note", "low"),
    ],
)
def test_normalize_severity(raw: str, expected: str) -> None:
    assert normalize_severity(raw) == expected


def test_normalize_severity_rejects_unknown_label() -> None:
    with pytest.raises(ValueError, match="unknown severity"):
        normalize_severity("blocker")


def test_parse_plain_list() -> None:
    findings = parse_findings(
        [
            {"key": "CVE-1", "severity": "high", "location": "lib/a.jar", "title": "bad"},
            {"id": 42, "priority": "low", "file": "b.py", "message": "meh"},
        ]
    )

    assert [finding.key for finding in findings] == ["CVE-1", "42"]
    assert findings[1].severity == "low"
    assert findings[1].location == "b.py"
    assert findings[1].title == "meh"


def test_parse_wrapper_object() -> None:
    findings = parse_findings({"tool": "scanner", "findings": [{"severity": "normal", "path": "a.py"}]})

    assert len(findings) == 1
    assert findings[0].location == "a.py"


def test_missing_key_uses_structural_hash() -> None:
    record = {"severity": "high", "location": "a.py", "title": "Injection"}

    first = parse_findings([record])[0]
    second = parse_findings([dict(record)])[0]

    assert first.key == second.key == structural_key("high", "a.py", "Injection")
    assert len(FindingSet.from_findings([first, second])) == 1


def test_structural_key_depends_on_every_field() -> None:
    base = structural_key("high", "a.py", "x")

    assert base != structural_key("low", "a.py", "x")
    assert base != structural_key("high", "b.py", "x")
    assert base != structural_key("high", "a.py", "y")


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ("nope", "expected a list"),
        ({"results": []}, "expected a list"),
        (["x"], "must be an object"),
        ([{"location": "a.py"}], "has no severity"),
        ([{"severity": "blocker", "location": "a.py"}], "unknown severity"),
        ([{"severity": "high"}], "needs a location or a title"),
        ([{"severity": True, "location": "a.py"}], "has no severity"),
    ],
    ids=["scalar", "wrong_wrapper", "non_object", "no_severity", "bad_severity", "no_location", "bool_severity"],
)
def test_parse_errors(payload: object, message: str) -> None:
    with pytest.raises(FindingsParseError, match=message):
        parse_findings(payload)


def test_load_findings_file(tmp_path: Path) -> None:
    path = tmp_path / "findings.json"
    path.write_text(json.dumps([{"key": "a", "severity": "high", "location": "x"}]), encoding="utf-8")

    findings = load_findings_file(path)

    assert findings[0].key == "a"


def test_load_findings_file_reports_bad_json(tmp_path: Path) -> None:
    path = tmp_path / "findings.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(FindingsParseError, match="Invalid JSON"):
        load_findings_file(path)


def test_load_findings_file_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FindingsParseError, match="Cannot read"):
        load_findings_file(tmp_path / "absent.json")
