"""CLI subcommand handlers and exit-code mapping."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

from buildgate.config import GateConfig, load_config
from buildgate.constants.cli import (
    BRANCH_SPEC_SEPARATOR,
    CLASSIFICATION_EXIT_CODES,
    DEFAULT_HISTORY_DIRNAME,
    EXIT_CONFIG_ERROR,
    EXIT_STABLE,
    RUN_ID_TIME_FORMAT,
)
from buildgate.engine import Branch, branch_pipeline, evaluate_matrix, evaluate_run
from buildgate.exceptions import BuildGateError, ConfigError, FindingsParseError, HistoryError
from buildgate.exceptions.validation import format_errors
from buildgate.history import CompositeSink, HistorySink, JsonHistoryStore, ReportSink, ResultSink
from buildgate.model import FindingSet, RunResult
from buildgate.providers import load_findings_file
from buildgate.reporting.stdout import StdoutReporter
from buildgate.validation import preflight_validate

logger = logging.getLogger(__name__)


def exit_code_for(result: RunResult | None) -> int:
    """Map a verdict to a process exit code; a skipped run exits cleanly."""
    if result is None:
        return EXIT_STABLE
    return CLASSIFICATION_EXIT_CODES[result.classification]


def parse_branch_spec(spec: str) -> tuple[str, Path]:
    """Split an ``AXIS=FINDINGS`` command-line value."""
    name, separator, path = spec.partition(BRANCH_SPEC_SEPARATOR)
    if not separator or not name.strip() or not path.strip():
        raise ConfigError(f"--branch must look like AXIS=FINDINGS, got {spec!r}")
    return name.strip(), Path(path.strip())


def default_run_id() -> str:
    """Timestamp run identifier used when ``--run-id`` is omitted."""
    return datetime.now(UTC).strftime(RUN_ID_TIME_FORMAT)


def handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return EXIT_CONFIG_ERROR

    print("Configuration is valid.")
    return EXIT_STABLE


def handle_start(args: argparse.Namespace) -> int:
    """Mark a run as in progress so it is never used as a reference."""
    store = JsonHistoryStore(_history_dir(args))
    try:
        store.mark_in_progress(args.pipeline, args.run_id)
    except HistoryError as exc:
        print(f"History error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    print(f"Run {args.run_id} of {args.pipeline} marked in progress.")
    return EXIT_STABLE


def handle_evaluate(args: argparse.Namespace) -> int:
    """Evaluate a single run."""
    config = _load_checked_config(args)
    if config is None:
        return EXIT_CONFIG_ERROR

    store = JsonHistoryStore(_history_dir(args))
    run_id = args.run_id or default_run_id()
    try:
        findings = FindingSet.from_findings(load_findings_file(args.findings))
        history = store.history(args.pipeline)
        result = evaluate_run(
            findings,
            history,
            config,
            run_id=run_id,
            pipeline=args.pipeline,
            sink=_build_sink(args, store),
            upstream_failed=args.upstream_failed,
        )
    except (FindingsParseError, HistoryError) as exc:
        print(f"Input error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except BuildGateError as exc:
        print(f"Evaluation error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    return _report(args, result)


def handle_matrix(args: argparse.Namespace) -> int:
    """Evaluate every branch of a fanned-out run and aggregate the verdict."""
    config = _load_checked_config(args)
    if config is None:
        return EXIT_CONFIG_ERROR

    store = JsonHistoryStore(_history_dir(args))
    run_id = args.run_id or default_run_id()
    try:
        branch_specs = [parse_branch_spec(spec) for spec in args.branch]
        names = [name for name, _ in branch_specs]
        if len(set(names)) != len(names):
            raise ConfigError(f"Duplicate branch names in {names}")
        branches = [
            Branch(
                name=name,
                findings=FindingSet.from_findings(load_findings_file(path)),
                history=store.history(branch_pipeline(args.pipeline, name)),
            )
            for name, path in branch_specs
        ]
        result = evaluate_matrix(
            branches,
            config,
            run_id=run_id,
            pipeline=args.pipeline,
            sink=_build_sink(args, store),
            upstream_failed=args.upstream_failed,
            max_workers=args.workers,
        )
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except (FindingsParseError, HistoryError) as exc:
        print(f"Input error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except BuildGateError as exc:
        print(f"Evaluation error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    return _report(args, result)


def _load_checked_config(args: argparse.Namespace) -> GateConfig | None:
    """Run preflight validation then load config; print problems and return ``None`` on failure."""
    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return None
    try:
        return load_config(args.root, args.config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return None


def _history_dir(args: argparse.Namespace) -> Path:
    if args.history_dir is not None:
        return args.history_dir
    return args.root / DEFAULT_HISTORY_DIRNAME


def _build_sink(args: argparse.Namespace, store: JsonHistoryStore) -> ResultSink | None:
    sinks: list[ResultSink] = []
    if not args.no_record:
        sinks.append(HistorySink(store))
    if args.output_dir is not None:
        sinks.append(ReportSink(args.output_dir))
    if not sinks:
        return None
    return CompositeSink(*sinks)


def _report(args: argparse.Namespace, result: RunResult | None) -> int:
    if result is None:
        if not args.no_stdout:
            print("Evaluation skipped: upstream build failed and can_run_on_failed is off.")
        return exit_code_for(result)

    if not args.no_stdout:
        use_color = not args.no_color and sys.stdout.isatty()
        print(StdoutReporter(result, color=use_color, verbose=args.verbose).render())
    return exit_code_for(result)
