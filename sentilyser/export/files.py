"""
File helpers shared by the export adapters.
"""

import logging
import os
from datetime import date
from typing import Optional

import config.settings as settings

logger = logging.getLogger(__name__)


def report_filename(extension: str, today: Optional[date] = None) -> str:
    """Dated export filename, e.g. sentiment-report-2024-10-22.csv."""
    today = today or date.today()
    return f"{settings.REPORT_FILENAME_PREFIX}-{today.isoformat()}.{extension}"


def write_report(data: bytes, output_dir: str, filename: str) -> str:
    """
    Write export bytes into output_dir, creating it if needed.

    Returns:
        Path of the written file
    """
    os.makedirs(output_dir, exist_ok=True)
    filepath = os.path.join(output_dir, filename)

    with open(filepath, 'wb') as f:
        f.write(data)

    logger.info(f"Wrote {len(data)} bytes to {filepath}")
    return filepath
