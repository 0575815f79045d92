"""Calendar helpers for month bucketing and due-date arithmetic.

Every helper takes its reference date explicitly; nothing here reads the
wall clock.
"""

from datetime import date, datetime, timezone
from typing import Union

from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime]


def as_reference_date(now: DateLike) -> date:
    """Normalize a reference instant to a calendar date.

    Timezone-aware datetimes are converted to UTC first so that the same
    instant always lands in the same day and month bucket.
    """
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.date()
    return now


def month_start(d: DateLike) -> date:
    """First day of the month containing ``d``."""
    return as_reference_date(d).replace(day=1)


def add_months(d: DateLike, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month."""
    return as_reference_date(d) + relativedelta(months=months)


def month_key(d: DateLike) -> tuple[int, int]:
    """Return ``(year, month)`` for a date."""
    d = as_reference_date(d)
    return (d.year, d.month)


def previous_month(d: DateLike) -> tuple[int, int]:
    """Return ``(year, month)`` of the month before ``d`` (January rolls back a year)."""
    return month_key(add_months(month_start(d), -1))


def days_until(target: DateLike, today: DateLike) -> int:
    """Whole days from ``today`` to ``target`` (negative when in the past)."""
    return (as_reference_date(target) - as_reference_date(today)).days
