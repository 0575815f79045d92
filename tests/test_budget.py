"""Tests for the budget tracker."""

from datetime import date
from decimal import Decimal

import pytest

from finledger.domain.budget import budget_statuses, exceeded_budgets

NOW = date(2024, 5, 15)


def test_budget_status_for_current_month(make_txn, make_category):
    categories = [make_category(1, "Food", budget="300")]
    transactions = [
        make_txn("120", date(2024, 5, 1), category_id=1),
        make_txn("500", date(2024, 4, 28), category_id=1),
    ]
    [status] = budget_statuses(categories, transactions, NOW)

    assert status.spent == Decimal("120")
    assert status.limit == Decimal("300")
    assert status.remaining == Decimal("180")
    assert not status.exceeded


def test_exceeded_only_when_strictly_over(make_txn, make_category):
    categories = [make_category(1, "Food", budget="100"), make_category(2, "Fun", budget="50")]
    transactions = [
        make_txn("100", date(2024, 5, 1), category_id=1),
        make_txn("50.01", date(2024, 5, 1), category_id=2),
    ]
    assert [s.category for s in exceeded_budgets(categories, transactions, NOW)] == ["Fun"]


@pytest.mark.parametrize("budget", [None, "0", "-10"])
def test_untracked_budgets_never_flagged(make_txn, make_category, budget):
    categories = [make_category(1, "Food", budget=budget)]
    transactions = [make_txn("9999", date(2024, 5, 1), category_id=1)]
    assert budget_statuses(categories, transactions, NOW) == []
    assert exceeded_budgets(categories, transactions, NOW) == []


def test_spend_matched_by_category_id(make_txn, make_category):
    # Same name, different owners: only the budgeted category's id counts
    categories = [make_category(1, "Food", budget="100"), make_category(2, "Food", user_id=None)]
    transactions = [make_txn("400", date(2024, 5, 1), category_id=2)]
    [status] = budget_statuses(categories, transactions, NOW)
    assert status.spent == 0
