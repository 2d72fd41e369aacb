#!/usr/bin/env python
"""
Command-line interface for the start.gg -> Google Sheets sync.

Usage:
    startgg_sheets_sync [options]
    python -m startgg_sheets.continuous.cli [options]

Examples:
    # Single invocation (for cron or another external scheduler)
    startgg_sheets_sync --once

    # Run continuously, one invocation every 30 minutes
    startgg_sheets_sync --interval 30

    # Cap a run at 5 pages or 2 minutes, whichever comes first
    startgg_sheets_sync --once --max-pages 5 --time-budget 120

    # Show the persisted cursor and last run
    startgg_sheets_sync --status

    # Start over from page 1 on the next run
    startgg_sheets_sync --reset

Configuration is read from the environment (or a local .env):
    STARTGG_API_KEY, STARTGG_SPREADSHEET_ID, STARTGG_SHEET_NAME,
    GOOGLE_APPLICATION_CREDENTIALS, STARTGG_STATE_FILE,
    STARTGG_TIME_BUDGET_SECONDS, STARTGG_MAX_PAGES, STARTGG_WINDOW_DAYS,
    STARTGG_TIMEZONE, STARTGG_TIMEOUT
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import Optional, Sequence

from startgg_sheets import __version__
from startgg_sheets.continuous.manager import SyncRunner
from startgg_sheets.core.config import ConfigError, SyncConfig
from startgg_sheets.core.constants import DEFAULT_INTERVAL_MINUTES
from startgg_sheets.core.logging import setup_logging
from startgg_sheets.core.sentry import init_sentry

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sync upcoming start.gg tournaments into a Google Sheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--once",
        action="store_true",
        help="Run a single sync invocation and exit",
    )
    mode_group.add_argument(
        "--status",
        action="store_true",
        help="Show persisted sync state and exit",
    )
    mode_group.add_argument(
        "--reset",
        action="store_true",
        help="Reset the pagination cursor to 0 and exit",
    )

    parser.add_argument(
        "--interval",
        type=int,
        default=DEFAULT_INTERVAL_MINUTES,
        help=f"Minutes between invocations in continuous mode (default: {DEFAULT_INTERVAL_MINUTES})",
    )
    parser.add_argument(
        "--max-cycles",
        type=int,
        help="Maximum number of invocations in continuous mode (default: unlimited)",
    )

    parser.add_argument("--spreadsheet-id", help="Target spreadsheet ID")
    parser.add_argument("--sheet-name", help="Target worksheet name")
    parser.add_argument(
        "--credentials", help="Service-account JSON key file"
    )
    parser.add_argument("--state-file", help="Path of the persisted state")
    parser.add_argument(
        "--time-budget",
        type=float,
        help="Seconds a single invocation may keep fetching pages",
    )
    parser.add_argument(
        "--max-pages",
        type=int,
        help="Maximum pages fetched per invocation",
    )
    parser.add_argument(
        "--timezone", help="IANA timezone used for start dates"
    )

    parser.add_argument(
        "--log-file", help="Also write logs to this file"
    )
    parser.add_argument(
        "--log-format",
        choices=["simple", "detailed", "json"],
        default="detailed",
        help="Log line format (default: detailed)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging"
    )
    return parser


def config_from_args(args: argparse.Namespace) -> SyncConfig:
    """Environment config with CLI flags layered on top."""
    config = SyncConfig.from_env()
    overrides = {
        "spreadsheet_id": args.spreadsheet_id,
        "sheet_name": args.sheet_name,
        "credentials_file": args.credentials,
        "state_file": args.state_file,
        "time_budget_seconds": args.time_budget,
        "max_pages": args.max_pages,
        "timezone": args.timezone,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return dataclasses.replace(config, **overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the sync CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
        format_style=args.log_format,
    )

    try:
        config = config_from_args(args)
        config.zone()
    except ConfigError as e:
        logger.error(str(e))
        return 2

    if args.status or args.reset:
        with SyncRunner(config) as runner:
            if args.reset:
                runner.reset()
            print(json.dumps(runner.get_status(), indent=2))
        return 0

    try:
        config.validate()
    except ConfigError as e:
        logger.error(str(e))
        return 2

    init_sentry(
        context="startgg_sheets_sync", release=f"startgg-sheets@{__version__}"
    )
    logger.info(f"Configuration: {config.describe()}")

    with SyncRunner(config) as runner:
        if args.once:
            summary = runner.run_once()
            print(json.dumps(summary.to_dict(), indent=2))
            return 0

        runner.run_continuous(
            interval_minutes=args.interval, max_cycles=args.max_cycles
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
