"""
CSV export of a normalized report.

One row per trend point; the summary and the joined actionable items repeat on every row.
"""

import csv
import logging
from datetime import date
from typing import List, Optional

import pandas as pd

from sentilyser.exceptions import ExportError
from sentilyser.export.files import report_filename, write_report
from sentilyser.models.analysis import ActionableItem, NormalizedAnalysisResult

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Date", "Score (0-100)", "Label", "Summary", "Actionable Items"]
UTF8_BOM = "\ufeff"


def format_actionable_items(items: List[ActionableItem]) -> str:
    """Join items as 'Title: description (High impact); ...'."""
    return "; ".join(f"{item.title}: {item.description} ({item.impact} impact)" for item in items)


def build_csv(normalized: NormalizedAnalysisResult) -> str:
    """
    Serialize the report to CSV text (without BOM).

    Header is written unquoted. Every non-numeric field, Date and Label
    included, is quoted with internal quotes doubled; the score is the only
    bare field and keeps one decimal.
    """
    actions = format_actionable_items(normalized.actionable_items)
    trend = normalized.sentiment_trend

    frame = pd.DataFrame(
        {
            "Date": [p.date for p in trend],
            "Score (0-100)": pd.Series([round(p.score, 1) for p in trend], dtype="float64"),
            "Label": [p.label for p in trend],
            "Summary": [normalized.summary] * len(trend),
            "Actionable Items": [actions] * len(trend),
        },
        columns=CSV_HEADERS
    )

    body = frame.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_NONNUMERIC,
        lineterminator="\n"
    )
    return ",".join(CSV_HEADERS) + "\n" + body


def build_csv_bytes(normalized: NormalizedAnalysisResult) -> bytes:
    """CSV encoded as UTF-8 with a leading byte-order mark for spreadsheet apps."""
    try:
        return (UTF8_BOM + build_csv(normalized)).encode("utf-8")
    except Exception as e:
        logger.error(f"CSV generation failed: {e}")
        raise ExportError("csv", e) from e


def export_csv(
    normalized: NormalizedAnalysisResult,
    output_dir: str,
    today: Optional[date] = None
) -> str:
    """
    Write the CSV report to output_dir.

    Returns:
        Path to the written file

    Raises:
        ExportError: If generation or writing fails
    """
    data = build_csv_bytes(normalized)
    try:
        return write_report(data, output_dir, report_filename("csv", today))
    except OSError as e:
        logger.error(f"Failed to write CSV report: {e}")
        raise ExportError("csv", e) from e
