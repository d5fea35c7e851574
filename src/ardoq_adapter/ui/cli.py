from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from ardoq_adapter.app import sync_dependency_report
from ardoq_adapter.config import configure_logging
from ardoq_adapter.domain.model import Dependency, parse_dependency_report

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mirror dependency reports into Ardoq")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Root log level (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Sync one dependency report")
    sync.add_argument(
        "--repo",
        type=_parse_name,
        required=True,
        help="Code repository component the dependencies belong to",
    )
    sync.add_argument(
        "--vcs-host",
        type=_parse_name,
        help="Optional VCS hosting component the repository is hosted in (e.g. github.com/org)",
    )
    sync.add_argument(
        "--file",
        type=str,
        default="-",
        help="Report with one '<name> -> <version>' per line; '-' reads stdin (default)",
    )
    sync.add_argument(
        "--batch",
        action="store_true",
        help="Queue reference writes and submit them in one batch request",
    )

    return parser.parse_args(list(argv))


def _parse_name(value: str) -> str:
    name = value.strip()
    if not name:
        raise argparse.ArgumentTypeError("component name must not be blank")
    return name


def _read_report(source: str) -> list[Dependency]:
    if source == "-":
        text = sys.stdin.read()
    else:
        try:
            text = Path(source).read_text(encoding="utf-8")
        except OSError as exc:
            raise ValueError(f"Unable to read report {source}: {exc}") from exc
    dependencies = parse_dependency_report(text)
    if not dependencies:
        raise ValueError("No body: the dependency report is empty")
    return dependencies


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=parsed_args.log_level)
        dependencies = _read_report(parsed_args.file)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        result = sync_dependency_report(
            code_repository=parsed_args.repo,
            vcs_hosting=parsed_args.vcs_host,
            dependencies=dependencies,
            use_batch=parsed_args.batch,
        )
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)

    print(json.dumps(result.summary(), indent=2))  # noqa: T201
    if result.components.errors or result.failed_references:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
