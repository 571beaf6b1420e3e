"""CLI entrypoint for Buildgate."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from buildgate import __version__
from buildgate.cli.handlers import (
    handle_evaluate,
    handle_matrix,
    handle_start,
    handle_validate_config,
)
from buildgate.constants.cli import CLI_DESCRIPTION


def _add_run_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by the ``evaluate`` and ``matrix`` commands."""
    parser.add_argument("-p", "--pipeline", required=True, help="Pipeline identity used to look up run history")
    parser.add_argument("-r", "--root", type=Path, default=Path("."), help="Workspace root (default: .)")
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file")
    parser.add_argument(
        "-H",
        "--history-dir",
        type=Path,
        default=None,
        help="Run history directory (default: <root>/.buildgate/history)",
    )
    parser.add_argument("--run-id", default=None, help="Identifier of this run (default: UTC timestamp)")
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Write a JSON report per evaluated result into this directory",
    )
    parser.add_argument(
        "--upstream-failed",
        action="store_true",
        help="The build already failed before evaluation (skipped unless can_run_on_failed)",
    )
    parser.add_argument("--no-record", action="store_true", help="Do not record the result into run history")
    parser.add_argument("--no-stdout", action="store_true", help="Silence stdout output")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug diagnostics")


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="buildgate",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    evaluate = subparsers.add_parser("evaluate", help="Evaluate one run's findings")
    evaluate.add_argument("-f", "--findings", type=Path, required=True, help="Findings JSON document")
    _add_run_arguments(evaluate)

    matrix = subparsers.add_parser("matrix", help="Evaluate a fanned-out run and aggregate its branches")
    matrix.add_argument(
        "-b",
        "--branch",
        action="append",
        required=True,
        metavar="AXIS=FINDINGS",
        help="Branch name and findings document (repeat flag for multiple branches)",
    )
    matrix.add_argument("--workers", type=int, default=None, help="Maximum parallel branch evaluations")
    _add_run_arguments(matrix)

    start = subparsers.add_parser("start", help="Mark a run as in progress in run history")
    start.add_argument("-p", "--pipeline", required=True, help="Pipeline identity")
    start.add_argument("--run-id", required=True, help="Identifier of the run being started")
    start.add_argument("-r", "--root", type=Path, default=Path("."), help="Workspace root (default: .)")
    start.add_argument("-H", "--history-dir", type=Path, default=None, help="Run history directory")

    validate = subparsers.add_parser("validate-config", help="Validate configuration without evaluating")
    validate.add_argument("-r", "--root", type=Path, default=Path("."), help="Workspace root (default: .)")
    validate.add_argument("-c", "--config", type=Path, help="Explicit config file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    verbose = getattr(args, "verbose", False)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s %(message)s")

    if args.command == "validate-config":
        return handle_validate_config(args)
    if args.command == "start":
        return handle_start(args)
    if args.command == "evaluate":
        return handle_evaluate(args)
    if args.command == "matrix":
        return handle_matrix(args)

    parser.error(f"Unsupported command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
