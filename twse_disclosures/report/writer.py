"""
Report persistence.

The report is HTML saved with an .xls extension so spreadsheet applications
open it directly. File names carry the Taipei local date and time.
"""

import logging
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from twse_disclosures.constants import (
    REPORT_FILE_EXTENSION,
    REPORT_FILENAME_PREFIX,
    REPORT_TIMEZONE,
)

logger = logging.getLogger(__name__)


def report_filename(now: datetime | None = None) -> str:
    """
    Build the report file name, e.g. twse_historical_data_2024-03-05_0930.xls.

    Args:
        now: Moment to stamp (naive values are taken as UTC); defaults to now
    """
    tz = ZoneInfo(REPORT_TIMEZONE)
    if now is None:
        local = datetime.now(tz)
    elif now.tzinfo is None:
        local = now.replace(tzinfo=ZoneInfo("UTC")).astimezone(tz)
    else:
        local = now.astimezone(tz)
    return f"{REPORT_FILENAME_PREFIX}_{local:%Y-%m-%d}_{local:%H%M}{REPORT_FILE_EXTENSION}"


def save_report(document: str, output_dir: Path | str = ".", now: datetime | None = None) -> Path:
    """
    Write the report document to output_dir.

    Returns:
        Path of the written file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    file_path = output_dir / report_filename(now)
    file_path.write_text(document, encoding="utf-8")
    logger.info(f"File saved to: {file_path.resolve()}")
    return file_path
