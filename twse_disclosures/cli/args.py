"""
Argument parsing utilities for twse_disclosures CLI.

Every option defaults to None so unset options fall back to Settings.
"""

import argparse
from pathlib import Path


def add_date_range_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--start-date",
        help="Listing start date in the MOPS format (default: START_DATE)",
    )
    parser.add_argument(
        "--end-date",
        help="Listing end date in the MOPS format (default: END_DATE)",
    )


def add_stock_ids_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--stock-ids",
        help="Comma-separated stock ids, e.g. 1101,2330 (default: STOCK_IDS)",
    )


def add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory to write the report to (default: OUTPUT_DIR or .)",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        help="Concurrent detail page fetches (default: MAX_WORKERS or 8)",
    )


def add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write a detailed log file under logs/",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug messages",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar",
    )


def settings_overrides(args: argparse.Namespace) -> dict:
    """Collect the options that were given on the command line."""
    overrides = {
        "start_date": args.start_date,
        "end_date": args.end_date,
        "stock_ids": args.stock_ids,
        "output_dir": args.output_dir,
        "max_workers": args.max_workers,
    }
    return {key: value for key, value in overrides.items() if value is not None}
