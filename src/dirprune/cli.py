from __future__ import annotations

import argparse
import logging
from collections.abc import Iterable
from pathlib import Path

from dirprune import __version__
from dirprune.exceptions import RootPathError, TargetsError
from dirprune.models import RunConfig
from dirprune.pool import DEFAULT_WORKERS
from dirprune.targets import DEFAULT_TARGETS_FILE

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirprune",
        description=(
            "Find dependency and build-cache directories by name, report their "
            "size and delete them after confirmation."
        ),
    )
    parser.add_argument("--path", default=".", help="Root directory to search from")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only list and size directories, don't delete",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Skip the confirmation prompt",
    )
    parser.add_argument(
        "--skip-warning",
        action="store_true",
        help="Skip the targets file warning",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=DEFAULT_WORKERS,
        help="Maximum number of concurrent workers",
    )
    parser.add_argument(
        "--targets",
        default=DEFAULT_TARGETS_FILE,
        help="File containing directory names to delete",
    )
    parser.add_argument(
        "--report",
        default=None,
        help="Also write the run report as JSON to this file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        format=LOG_FORMAT,
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    config = RunConfig(
        root=Path(args.path),
        targets_file=Path(args.targets),
        dry_run=args.dry_run,
        assume_yes=args.yes,
        verbose=args.verbose,
        workers=args.workers,
        skip_warning=args.skip_warning,
    )

    from dirprune.orchestrator import Orchestrator
    from dirprune.reporting import ConsoleReporter, write_report

    orchestrator = Orchestrator(config, reporter=ConsoleReporter(verbose=args.verbose))
    try:
        report = orchestrator.run()
    except RootPathError as exc:
        raise SystemExit(str(exc)) from exc
    except TargetsError as exc:
        raise SystemExit(f"Error reading targets: {exc}") from exc

    if args.report:
        write_report(Path(args.report), report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
