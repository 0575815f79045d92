"""Anomaly detector: current-month spend against a trailing baseline.

The baseline for a category is its average spend per *active* month in the
window ``[month_start(now) - 6 months, month_start(now))``: months in which
the category had no expenses do not pull the average down. A category with
no activity in the window has no baseline and is never reported.
"""

from decimal import Decimal
from typing import Iterable, Sequence

from finledger.domain.analytics import category_label, category_names, category_totals, expenses
from finledger.domain.entities import Category, SpendingAnomaly, Transaction
from finledger.utils.dates import DateLike, add_months, month_key, month_start
from finledger.utils.money import HUNDRED, ZERO, round_percent

HISTORY_MONTHS = 6
ANOMALY_THRESHOLD = Decimal("1.5")


def category_baselines(
    transactions: Sequence[Transaction],
    categories: Iterable[Category],
    now: DateLike,
    window_months: int = HISTORY_MONTHS,
) -> dict[str, Decimal]:
    """Average monthly expense per category name over the trailing window."""
    window_end = month_start(now)
    window_start = add_months(window_end, -window_months)
    names = category_names(categories)

    totals: dict[str, Decimal] = {}
    active_months: dict[str, set[tuple[int, int]]] = {}
    for txn in expenses(transactions):
        if not (window_start <= txn.date < window_end):
            continue
        label = category_label(txn, names)
        totals[label] = totals.get(label, ZERO) + txn.amount
        active_months.setdefault(label, set()).add(month_key(txn.date))

    return {label: totals[label] / len(months) for label, months in active_months.items()}


def detect_unusual_spending(
    transactions: Sequence[Transaction],
    categories: Iterable[Category],
    now: DateLike,
    window_months: int = HISTORY_MONTHS,
    threshold: Decimal = ANOMALY_THRESHOLD,
) -> list[SpendingAnomaly]:
    """Categories whose spend this month exceeds ``threshold`` times their baseline.

    Returns:
        Anomalies sorted by percentage increase, largest first
    """
    categories = list(categories)
    baselines = category_baselines(transactions, categories, now, window_months)

    anomalies = []
    for item in category_totals(transactions, categories, now=now):
        average = baselines.get(item.category)
        if not average:
            continue
        if item.amount > average * threshold:
            increase = (item.amount - average) / average * HUNDRED
            anomalies.append(
                SpendingAnomaly(
                    category=item.category,
                    current=item.amount,
                    average=average,
                    percent_increase=round_percent(increase),
                )
            )

    return sorted(anomalies, key=lambda a: a.percent_increase, reverse=True)
