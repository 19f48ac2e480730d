"""
Logging utilities for twse_disclosures CLI.

Provides logging setup with tqdm compatibility.
"""

import logging
import sys
import time
from pathlib import Path

from twse_disclosures.utils.tqdm_logging import TqdmLoggingHandler

PACKAGE_LOGGER = "twse_disclosures"


def setup_logging(
    script_name: str,
    log_to_file: bool = False,
    log_dir: Path = Path("logs"),
    verbose: bool = False,
    tqdm_compatible: bool = True,
) -> logging.Logger:
    """
    Set up logging for a command.

    Args:
        script_name: Name of the command (for log file naming)
        log_to_file: If True, also write DEBUG-level logs to a timestamped file
        log_dir: Directory for log files
        verbose: Show DEBUG messages on the console
        tqdm_compatible: If True, use TqdmLoggingHandler for clean progress bar output

    Returns:
        Configured logger instance
    """
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(logging.DEBUG)  # Capture all levels
    pkg_logger.handlers = []  # Clear any existing handlers
    pkg_logger.propagate = False  # Don't propagate to root

    console_level = logging.DEBUG if verbose else logging.INFO
    if tqdm_compatible:
        console_handler = TqdmLoggingHandler(level=console_level)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    pkg_logger.addHandler(console_handler)

    log_file = None
    if log_to_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{script_name}_{timestamp}.log"

        # File handler: DEBUG and above (detailed logs)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        pkg_logger.addHandler(file_handler)

    # Suppress noisy external library loggers
    for noisy_logger in ["urllib3", "requests"]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    logger = logging.getLogger(f"{PACKAGE_LOGGER}.{script_name}")
    if log_file:
        logger.info(f"Log file: {log_file}")
    return logger


def print_header(title: str, logger: logging.Logger | None = None):
    """Log a standard section header."""
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info("=" * 70)
    logger.info(title)
    logger.info("=" * 70)
