"""CLI entrypoint for the scmrev header generator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import TRACKED_FILES, ConfigError, load_config
from .git.oracle import GitOracle, OracleQueryFailed, OracleUnavailable, find_git
from .logging import configure_logging, get_logger
from .models import WriteOutcome
from .record import build_record
from .writer import render_header, write_header

logger = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scmrev",
        description="Generate scmrev.h with the build identity of a git checkout.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Header to generate (defaults to the configured output in the repository).",
    )
    parser.add_argument(
        "--git",
        default=None,
        help="Git executable to use instead of searching PATH.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the header instead of writing it.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for scmrev."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = load_config(Path(args.path))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    output = args.output if args.output is not None else config.output

    try:
        executable = find_git(args.git or config.git)
        oracle = GitOracle(config.root, executable=executable, baseline=config.baseline)
        record = build_record(oracle, TRACKED_FILES)
    except OracleUnavailable as exc:
        parser.exit(1, f"{exc}\n")
    except OracleQueryFailed as exc:
        parser.exit(1, f"scmrev failed: {exc}\nRun with --verbose for more details.\n")

    if args.dry_run:
        sys.stdout.write(render_header(record))
        return

    outcome = write_header(output, record)
    rel_path = _relativize(output)
    if outcome is WriteOutcome.UNCHANGED:
        print(f"{rel_path} current at {record.description}")
    else:
        print(f"{rel_path} updated to {record.description}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
