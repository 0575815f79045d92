"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta

from finledger.utils.date_parser import parse_date

TODAY = date(2024, 3, 13)  # a Wednesday


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_today_defaults_to_current_date():
    assert parse_date("today") == date.today()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("today", TODAY),
        ("Yesterday", TODAY - timedelta(days=1)),
        ("tomorrow", TODAY + timedelta(days=1)),
        ("in 3 days", date(2024, 3, 16)),
        ("2 weeks ago", date(2024, 2, 28)),
        ("in 1 month", date(2024, 4, 13)),
        ("this month", date(2024, 3, 1)),
        ("last month", date(2024, 2, 1)),
        ("next month", date(2024, 4, 1)),
        ("last year", date(2023, 1, 1)),
        ("this week", date(2024, 3, 11)),
        ("next week", date(2024, 3, 18)),
    ],
)
def test_parse_relative_dates(text, expected):
    assert parse_date(text, today=TODAY) == expected


def test_parse_last_month_in_january():
    """January rolls back to December of the previous year."""
    assert parse_date("last month", today=date(2024, 1, 20)) == date(2023, 12, 1)


def test_parse_invalid_date():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")
