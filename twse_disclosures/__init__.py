"""
TWSE Disclosures - MOPS self-assessed result announcements compiled into a report.

This package provides utilities for:
- Fetching the disclosure listing from the TWSE Market Observation Post System
- Matching listing records against a set of stock ids
- Fetching and extracting each matched record's detail table
- Assembling and saving a single HTML report (.xls for spreadsheet apps)
"""

import logging

# Set up NullHandler to prevent "No handler found" warnings
# when used as a library. Applications should configure their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

# Re-export commonly used items
from twse_disclosures.config import Settings, get_settings
from twse_disclosures.exceptions import FetchError
from twse_disclosures.pipeline import DisclosureReportPipeline, ReportRun, RunState, build_report

__all__ = [
    "__version__",
    # Config
    "Settings",
    "get_settings",
    # Errors
    "FetchError",
    # Pipeline
    "DisclosureReportPipeline",
    "ReportRun",
    "RunState",
    "build_report",
]
