"""
CLI command entry points for twse_disclosures.

These functions are registered as console scripts in pyproject.toml.
"""

import argparse
import sys

from pydantic import ValidationError

from twse_disclosures.cli.args import (
    add_date_range_arguments,
    add_logging_arguments,
    add_output_arguments,
    add_stock_ids_argument,
    settings_overrides,
)
from twse_disclosures.cli.logging import print_header, setup_logging
from twse_disclosures.config import MISSING_STOCK_IDS_MESSAGE, Settings, get_settings
from twse_disclosures.exceptions import FetchError
from twse_disclosures.pipeline import build_report
from twse_disclosures.report.writer import save_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="twse-disclosures",
        description="Compile MOPS self-assessed result disclosures for a set of stock ids",
    )
    add_date_range_arguments(parser)
    add_stock_ids_argument(parser)
    add_output_arguments(parser)
    add_logging_arguments(parser)
    return parser


def run_report(argv: list[str] | None = None) -> int:
    """Entry point for twse-disclosures command."""
    args = build_parser().parse_args(argv)
    logger = setup_logging("report", log_to_file=args.log_file, verbose=args.verbose)

    overrides = settings_overrides(args)
    try:
        # Init values take priority over environment variables and .env
        settings = Settings(**overrides) if overrides else get_settings()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if not settings.stock_ids:
        logger.error(MISSING_STOCK_IDS_MESSAGE)
        return 1

    print_header("TWSE disclosure report", logger)
    try:
        run = build_report(settings, show_progress=not args.no_progress)
    except FetchError as e:
        logger.error(str(e))
        return 1

    save_report(run.document, settings.output_dir)
    logger.info("HTML file has been generated and saved.")
    return 0


def main() -> None:
    sys.exit(run_report())
