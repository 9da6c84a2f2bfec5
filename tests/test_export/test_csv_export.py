"""
Unit tests for the CSV export.
"""

import os
from dataclasses import replace
from datetime import date
from unittest.mock import patch

import pytest

from sentilyser.exceptions import ExportError
from sentilyser.export.csv_export import (
    CSV_HEADERS,
    build_csv,
    build_csv_bytes,
    export_csv,
    format_actionable_items,
)
from sentilyser.export.files import report_filename
from sentilyser.utils.scoring import normalize


@pytest.fixture
def normalized(analysis_result):
    return normalize(analysis_result)


def test_header_row(normalized):
    """Test the header is the fixed, unquoted column list."""
    lines = build_csv(normalized).splitlines()

    assert lines[0] == "Date,Score (0-100),Label,Summary,Actionable Items"
    assert lines[0] == ",".join(CSV_HEADERS)


def test_one_row_per_trend_point(normalized):
    """Test rows follow the trend, with normalized one-decimal scores."""
    lines = build_csv(normalized).splitlines()

    assert len(lines) == 1 + len(normalized.sentiment_trend)
    assert lines[1].startswith('"2024-10-01",90.0,"Positive",')
    assert lines[2].startswith('"2024-10-10",20.0,"Negative",')
    assert lines[3].startswith('"2024-10-22",50.0,"Neutral",')


def test_date_and_label_are_quoted(normalized):
    """Test Date and Label are quoted like other text fields while the score stays bare."""
    date_field, score_field, label_field = build_csv(normalized).splitlines()[1].split(",")[:3]

    assert date_field == '"2024-10-01"'
    assert score_field == "90.0"
    assert label_field == '"Positive"'


def test_text_fields_quoted_with_doubled_quotes(normalized):
    """Test embedded quotes in the summary are escaped by doubling."""
    row = build_csv(normalized).splitlines()[1]

    assert '"Customers love the build quality, but ""shipping"" delays and app crashes hurt trust."' in row


def test_actionable_items_joined(normalized):
    """Test every row carries all actionable items in one field."""
    joined = format_actionable_items(normalized.actionable_items)

    assert joined == (
        "Fix app crashes: Stabilize the latest mobile release. (High impact); "
        "Speed up shipping: Renegotiate courier SLAs. (Medium impact); "
        "Refresh docs: Update the outdated documentation. (Low impact)"
    )
    for row in build_csv(normalized).splitlines()[1:]:
        assert row.endswith(f'"{joined}"')


def test_bytes_start_with_bom(normalized):
    """Test the encoded export begins with a UTF-8 byte-order mark."""
    data = build_csv_bytes(normalized)

    assert data.startswith(b"\xef\xbb\xbf")
    assert data[3:].decode("utf-8").startswith("Date,")


def test_empty_trend_gives_header_only(normalized):
    """Test a report without trend points exports just the header."""
    empty = replace(normalized, sentiment_trend=[])

    assert build_csv(empty).strip() == ",".join(CSV_HEADERS)


def test_report_filename():
    assert report_filename("csv", today=date(2024, 10, 22)) == "sentiment-report-2024-10-22.csv"


def test_export_csv_writes_file(normalized, tmp_path):
    """Test export_csv writes a dated file into the output directory."""
    out_dir = tmp_path / "reports"

    path = export_csv(normalized, str(out_dir), today=date(2024, 10, 22))

    assert os.path.basename(path) == "sentiment-report-2024-10-22.csv"
    with open(path, "rb") as f:
        assert f.read() == build_csv_bytes(normalized)


def test_export_csv_write_failure(normalized, tmp_path):
    """Test an OS error while writing becomes an ExportError."""
    with patch('sentilyser.export.csv_export.write_report', side_effect=PermissionError("read-only")):
        with pytest.raises(ExportError) as exc_info:
            export_csv(normalized, str(tmp_path))

    assert exc_info.value.export_format == "csv"


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
