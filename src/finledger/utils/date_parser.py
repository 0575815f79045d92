"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_RELATIVE_OFFSET = re.compile(r"^(?:in (\d+) (day|week|month)s?|(\d+) (day|week|month)s? ago)$")


def _offset(amount: int, unit: str) -> relativedelta:
    if unit == "day":
        return relativedelta(days=amount)
    if unit == "week":
        return relativedelta(weeks=amount)
    return relativedelta(months=amount)


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones: "today", "yesterday", "tomorrow", "in 3 days", "2 weeks ago",
    "this month", "last month", "next month" (first day of that month),
    and the same forms for "week" (Monday) and "year" (January 1).

    Args:
        date_str: Date string in various formats
        today: Reference date for relative forms (defaults to the current date)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    simple = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in simple:
        return simple[date_str]

    match = _RELATIVE_OFFSET.match(date_str)
    if match:
        if match.group(1):
            return today + _offset(int(match.group(1)), match.group(2))
        return today - _offset(int(match.group(3)), match.group(4))

    for prefix, step in (("this ", 0), ("last ", -1), ("next ", 1)):
        if date_str.startswith(prefix):
            period = date_str[len(prefix):]
            if period == "month":
                return today.replace(day=1) + relativedelta(months=step)
            if period == "year":
                return today.replace(month=1, day=1) + relativedelta(years=step)
            if period == "week":
                return today - timedelta(days=today.weekday()) + timedelta(weeks=step)

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
