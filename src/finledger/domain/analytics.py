"""Aggregator: monthly and per-category expense sums.

Everything here is a pure function of its arguments. Sums are exact Decimal
additions with no intermediate rounding, and the reference instant ``now``
is always passed in.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from finledger.domain.entities import (
    Account,
    Category,
    CategoryAmount,
    MonthlyCashFlow,
    MonthlyComparison,
    Transaction,
    TransactionType,
)
from finledger.utils.dates import DateLike, add_months, month_key, month_start, previous_month
from finledger.utils.money import HUNDRED, ZERO

UNCATEGORIZED = "Uncategorized"
TOP_CATEGORY_LIMIT = 5
CASH_FLOW_MONTHS = 6


def category_names(categories: Iterable[Category]) -> dict[int, str]:
    """Map category id to display name."""
    return {category.id: category.name for category in categories}


def category_label(transaction: Transaction, names: Mapping[int, str]) -> str:
    """Name a transaction is grouped under; missing categories pool as Uncategorized."""
    if transaction.category_id is None:
        return UNCATEGORIZED
    return names.get(transaction.category_id, UNCATEGORIZED)


def expenses(transactions: Iterable[Transaction]) -> list[Transaction]:
    return [t for t in transactions if t.type == TransactionType.EXPENSE]


def expenses_in_month(transactions: Iterable[Transaction], key: tuple[int, int]) -> list[Transaction]:
    """Expense transactions dated in the ``(year, month)`` bucket."""
    return [t for t in expenses(transactions) if month_key(t.date) == key]


def total(transactions: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in transactions), ZERO)


def percent_change(previous: Decimal, current: Decimal) -> Decimal:
    """Relative change in percent; 0 when there is no previous amount."""
    if previous == 0:
        return ZERO
    return (current - previous) / previous * HUNDRED


def monthly_comparison(transactions: Sequence[Transaction], now: DateLike) -> MonthlyComparison:
    """Compare this calendar month's expenses with the previous month's."""
    current = total(expenses_in_month(transactions, month_key(now)))
    previous = total(expenses_in_month(transactions, previous_month(now)))
    return MonthlyComparison(
        current=current,
        previous=previous,
        percent_change=percent_change(previous, current),
    )


def category_totals(
    transactions: Sequence[Transaction],
    categories: Iterable[Category],
    now: Optional[DateLike] = None,
) -> list[CategoryAmount]:
    """Expense totals per category name, in first-encountered order.

    Args:
        transactions: Transactions to group
        categories: Categories used to resolve names
        now: If given, only expenses in the month of ``now`` are counted
    """
    names = category_names(categories)
    selected = expenses(transactions) if now is None else expenses_in_month(transactions, month_key(now))

    # dict preserves first-seen order, which sorting below relies on for ties
    sums: dict[str, Decimal] = {}
    for txn in selected:
        label = category_label(txn, names)
        sums[label] = sums.get(label, ZERO) + txn.amount
    return [CategoryAmount(category=name, amount=amount) for name, amount in sums.items()]


def top_categories(
    transactions: Sequence[Transaction],
    categories: Iterable[Category],
    now: DateLike,
    limit: int = TOP_CATEGORY_LIMIT,
) -> list[CategoryAmount]:
    """Largest current-month expense categories, descending.

    Ties keep the order in which the categories were first encountered.
    """
    totals = category_totals(transactions, categories, now=now)
    ranked = sorted(totals, key=lambda item: item.amount, reverse=True)
    return ranked[:limit]


def monthly_cash_flow(
    transactions: Sequence[Transaction], now: DateLike, months: int = CASH_FLOW_MONTHS
) -> list[MonthlyCashFlow]:
    """Income and expenses for the trailing ``months`` months (current included), oldest first."""
    first = add_months(month_start(now), -(months - 1))
    keys = [month_key(add_months(first, offset)) for offset in range(months)]

    income: dict[tuple[int, int], Decimal] = defaultdict(lambda: ZERO)
    spent: dict[tuple[int, int], Decimal] = defaultdict(lambda: ZERO)
    wanted = set(keys)
    for txn in transactions:
        key = month_key(txn.date)
        if key not in wanted:
            continue
        if txn.type == TransactionType.INCOME:
            income[key] += txn.amount
        else:
            spent[key] += txn.amount

    return [
        MonthlyCashFlow(year=year, month=month, income=income[(year, month)], expenses=spent[(year, month)])
        for year, month in keys
    ]


def period_totals(transactions: Iterable[Transaction]) -> tuple[Decimal, Decimal, Decimal]:
    """Return ``(income, expenses, net)`` over the given transactions."""
    income = ZERO
    spent = ZERO
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        else:
            spent += txn.amount
    return income, spent, income - spent


def account_balance(account: Account, transactions: Iterable[Transaction]) -> Decimal:
    """Initial balance plus income minus expenses booked on this account."""
    balance = account.initial_balance
    for txn in transactions:
        if txn.account_id != account.id:
            continue
        if txn.type == TransactionType.INCOME:
            balance += txn.amount
        else:
            balance -= txn.amount
    return balance


def account_balances(accounts: Iterable[Account], transactions: Iterable[Transaction]) -> dict[int, Decimal]:
    """Derived balance for every account, keyed by account id, in one pass over the transactions.

    Transactions booked on accounts not in ``accounts`` are ignored.
    """
    balances = {account.id: account.initial_balance for account in accounts}
    for txn in transactions:
        if txn.account_id not in balances:
            continue
        if txn.type == TransactionType.INCOME:
            balances[txn.account_id] += txn.amount
        else:
            balances[txn.account_id] -= txn.amount
    return balances
