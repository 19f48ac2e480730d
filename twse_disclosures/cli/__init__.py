"""
CLI utilities for twse_disclosures.

This package provides:
- Logging setup
- Argument parsing
- Command entry points
"""

from twse_disclosures.cli.commands import main, run_report
from twse_disclosures.cli.logging import print_header, setup_logging

__all__ = [
    "setup_logging",
    "print_header",
    "run_report",
    "main",
]
