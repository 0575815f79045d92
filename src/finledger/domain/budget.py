"""Budget tracker: current-month spend against per-category limits."""

from decimal import Decimal
from typing import Iterable, Sequence

from finledger.domain.analytics import expenses_in_month
from finledger.domain.entities import BudgetStatus, Category, Transaction
from finledger.utils.dates import DateLike, month_key
from finledger.utils.money import ZERO


def budgeted_categories(categories: Iterable[Category]) -> list[Category]:
    """Categories with a positive budget; the rest are not tracked."""
    return [c for c in categories if c.budget is not None and c.budget > 0]


def budget_statuses(
    categories: Iterable[Category], transactions: Sequence[Transaction], now: DateLike
) -> list[BudgetStatus]:
    """Spend this month for every budgeted category, matched by category id."""
    tracked = budgeted_categories(categories)
    if not tracked:
        return []

    spent: dict[int, Decimal] = {}
    for txn in expenses_in_month(transactions, month_key(now)):
        if txn.category_id is not None:
            spent[txn.category_id] = spent.get(txn.category_id, ZERO) + txn.amount

    return [
        BudgetStatus(category_id=c.id, category=c.name, limit=c.budget, spent=spent.get(c.id, ZERO))
        for c in tracked
    ]


def exceeded_budgets(
    categories: Iterable[Category], transactions: Sequence[Transaction], now: DateLike
) -> list[BudgetStatus]:
    """Budgeted categories whose spend is strictly above the limit."""
    return [status for status in budget_statuses(categories, transactions, now) if status.exceeded]
