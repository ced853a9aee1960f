from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import ValidationError
from sqlalchemy.exc import ArgumentError

from zappy.adapters.manifest import ManifestError
from zappy.app import converge_manifest
from zappy.config import ConfigurationError, configure_logging, get_run_config, parse_log_level

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Converge a zappy run manifest")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level name (defaults to ZAPPY_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("converge", help="Converge the resources of a manifest")
    run.add_argument("manifest", type=Path, help="Path to a JSON run manifest")
    run.add_argument(
        "--why-run",
        action="store_true",
        default=None,
        help="Report changes without making them (defaults to ZAPPY_WHY_RUN)",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        config = get_run_config()
        level = (
            parse_log_level(parsed_args.log_level)
            if parsed_args.log_level
            else config.log_level
        )
    except ConfigurationError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)
    configure_logging(level=level)

    try:
        if parsed_args.command != "converge":
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
        report = converge_manifest(parsed_args.manifest, why_run=parsed_args.why_run)
    except (ValidationError, ManifestError, ConfigurationError, ArgumentError, OSError):
        log.exception("Invalid run input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during run")
        sys.exit(1)

    if not report.succeeded:
        for failure in report.failures:
            log.error("Failed: %s (%s)", failure.resource, failure.error)
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
