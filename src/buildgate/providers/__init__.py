"""Finding providers that turn external documents into findings."""

from .json_findings import load_findings_file, normalize_severity, parse_findings, structural_key

__all__ = ["load_findings_file", "normalize_severity", "parse_findings", "structural_key"]
