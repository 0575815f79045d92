"""Tests for money and calendar helpers."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from finledger.utils.amount_parser import parse_amount
from finledger.utils.dates import (
    add_months,
    as_reference_date,
    days_until,
    month_key,
    month_start,
    previous_month,
)
from finledger.utils.money import format_money, quantize_money, round_percent, to_money


def test_to_money_keeps_decimal_precision():
    assert to_money("0.1") + to_money("0.2") == Decimal("0.3")
    assert to_money(0.1) == Decimal("0.1")
    assert to_money(5) == Decimal("5")


@pytest.mark.parametrize("bad", ["abc", "", "NaN", "Infinity", True])
def test_to_money_rejects_garbage(bad):
    with pytest.raises(ValueError):
        to_money(bad)


def test_quantize_money_rounds_half_up():
    assert quantize_money("2.345") == Decimal("2.35")
    assert quantize_money("2.344") == Decimal("2.34")


def test_format_money():
    assert format_money(Decimal("1234.5")) == "$1,234.50"
    assert format_money(Decimal("-12")) == "-$12.00"
    assert format_money(0) == "$0.00"


def test_round_percent_half_up():
    assert round_percent(Decimal("42.5")) == 43
    assert round_percent(Decimal("42.49")) == 42
    assert round_percent(Decimal("300")) == 300


def test_previous_month_rolls_over_year():
    assert previous_month(date(2024, 1, 15)) == (2023, 12)
    assert previous_month(date(2024, 3, 31)) == (2024, 2)


def test_month_helpers():
    assert month_start(date(2024, 5, 17)) == date(2024, 5, 1)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2024, 5, 1), -6) == date(2023, 11, 1)
    assert month_key(datetime(2024, 5, 17, 23, 59)) == (2024, 5)


def test_as_reference_date_normalizes_aware_datetimes_to_utc():
    # 23:30 at UTC-05:00 is already the next day in UTC
    local = datetime(2024, 5, 31, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    assert as_reference_date(local) == date(2024, 6, 1)
    assert as_reference_date(datetime(2024, 5, 31, 23, 30)) == date(2024, 5, 31)
    assert as_reference_date(date(2024, 5, 31)) == date(2024, 5, 31)


def test_days_until():
    today = date(2024, 5, 10)
    assert days_until(date(2024, 5, 10), today) == 0
    assert days_until(date(2024, 5, 17), today) == 7
    assert days_until(date(2024, 5, 9), today) == -1
    assert days_until(date(2024, 5, 11), datetime(2024, 5, 10, 22, 0)) == 1


class TestParseAmount:
    def test_plain_and_currency(self):
        assert parse_amount("123.45") == Decimal("123.45")
        assert parse_amount("$1,234.56") == Decimal("1234.56")

    def test_comma_decimal_separator(self):
        assert parse_amount("1.234,56") == Decimal("1234.56")
        assert parse_amount("12,50") == Decimal("12.50")

    @pytest.mark.parametrize("signed", ["-5", "+5", "(5.00)"])
    def test_signs_rejected(self, signed):
        with pytest.raises(ValueError, match="without a sign"):
            parse_amount(signed)

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            parse_amount("twelve")
        with pytest.raises(ValueError):
            parse_amount("  ")
