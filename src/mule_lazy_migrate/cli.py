"""Command-line entry point for ``mule-lazy-migrate``.

Typical usage from a Mule project root::

    mule-lazy-migrate --config migration.json --dry-run
    mule-lazy-migrate -c migration.json -p ../my-api --backup -u

The summary printed at the end is colorised when the output is a terminal.
``--json`` swaps it for a machine-readable document on stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.logging import RichHandler

from .errors import MigrationError
from .migration import MigrationOptions, run_migration
from .reporting import print_summary, write_json
from .result import RunResult

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_HANDLER_NAME = "mule-lazy-migrate-cli"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mule-lazy-migrate",
        description=(
            "Migrate Mule 4 projects to a new runtime using a JSON config. "
            "The summary at the end is colorized for clarity."
        ),
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        required=True,
        help="Path to the JSON config file.",
    )
    parser.add_argument(
        "-p",
        "--project",
        type=Path,
        default=Path("."),
        help="Path to the Mule project root (default: current directory).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing any file.",
    )
    parser.add_argument(
        "--backup",
        action="store_true",
        help="Copy each file to <name>.bak before modifying it.",
    )
    parser.add_argument(
        "-u",
        "--update-maven-deps",
        action="store_true",
        help="Also update all Maven dependencies to their latest release versions.",
    )
    parser.add_argument(
        "-b",
        "--build-mule-project",
        action="store_true",
        help="Build the Mule project with 'mvn clean install'.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the summary as JSON instead of colorized text.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        default="INFO",
        help="Progress log verbosity on stderr (default: INFO).",
    )
    return parser


def _configure_logging(level: str) -> None:
    package_logger = logging.getLogger("mule_lazy_migrate")
    for handler in list(package_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    handler.set_name(_HANDLER_NAME)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def _report(result: RunResult, *, as_json: bool, status: str) -> None:
    if as_json:
        write_json(result, sys.stdout, status=status)
    else:
        print_summary(result, Console())


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(sys.argv[1:]) if argv is None else list(argv))
    _configure_logging(args.log_level)

    options = MigrationOptions(
        config_path=args.config,
        project_root=args.project,
        dry_run=args.dry_run,
        backup=args.backup,
        update_maven_deps=args.update_maven_deps,
        build_mule_project=args.build_mule_project,
    )
    try:
        result = run_migration(options)
    except MigrationError as exc:
        partial = exc.result or RunResult(dry_run=args.dry_run, errors=[str(exc)])
        _report(partial, as_json=args.json, status="failed")
        sys.stderr.write(f"Migration failed: {exc}\n")
        return 1

    _report(result, as_json=args.json, status="ok")
    return 0


def console_main() -> None:
    """Entry point for ``mule-lazy-migrate`` console script."""

    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
