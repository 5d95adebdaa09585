"""Tests for date normalization."""

from datetime import date

import pytest

from timerecon.sdk.dates import format_canonical_date, normalize_date, parse_canonical_date


@pytest.mark.parametrize("text,expected", [
    ("01/01/2025", "2025/01/01"),
    ("25/12/2024", "2024/12/25"),
    ("29/02/2024", "2024/02/29"),
    ("31/12/1999", "1999/12/31"),
    ("  01/01/2025  ", "2025/01/01"),
    (" 01/01/2025", "2025/01/01"),
])
def test_normalizes_day_month_year(text, expected):
    assert normalize_date(text) == expected


@pytest.mark.parametrize("text", ["", " ", None])
def test_blank_gives_empty_string(text):
    assert normalize_date(text) == ""


@pytest.mark.parametrize("text", [
    "not-a-date",
    "2025/01/01",
    "01-01-2025",
    "1/1/2025",
    "32/01/2025",
    "01/13/2025",
    "29/02/2025",
    "01/01/25",
    "01/01",
    "/01/2025",
    "01//2025",
])
def test_unparseable_passes_through(text):
    assert normalize_date(text) == text


def test_unparseable_logs_warning(caplog):
    normalize_date(" 2025-01-01 ")
    assert "2025-01-01" in caplog.text
    assert any(r.levelname == "WARNING" for r in caplog.records)


def test_canonical_helpers():
    assert format_canonical_date(date(2025, 1, 6)) == "2025/01/06"
    assert parse_canonical_date("2025/01/06") == date(2025, 1, 6)
    assert parse_canonical_date("06/01/2025") is None
