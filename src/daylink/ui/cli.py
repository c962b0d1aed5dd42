from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from daylink.app import reconcile_daily_links
from daylink.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

SIGINT_EXIT_CODE = 130


def _non_negative_hours(value: str) -> float:
    try:
        hours = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number of hours: {value}") from exc
    if hours < 0:
        raise argparse.ArgumentTypeError("Lookback hours must be non-negative")
    return hours


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Link unlinked wallet entries to the daily-activity page of their date",
    )
    parser.add_argument(
        "--lookback-hours",
        type=_non_negative_hours,
        default=None,
        help="Only consider entries created within this many hours (defaults to config)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve targets and report outcomes without writing any relation",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        reconcile_daily_links(
            dry_run=parsed_args.dry_run,
            lookback_hours=parsed_args.lookback_hours,
        )
    except ConfigurationError as exc:
        log.error("Configuration error: %s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.warning("Interrupted by user (Ctrl+C); run did not complete")
    sys.exit(SIGINT_EXIT_CODE)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
