"""Tests for unusual-spending detection."""

from datetime import date
from decimal import Decimal

from finledger.domain.anomalies import category_baselines, detect_unusual_spending

NOW = date(2024, 5, 15)


def test_two_active_months_average_over_two(make_txn, make_category):
    categories = [make_category(1, "Comida")]
    transactions = [
        make_txn("100", date(2024, 1, 10), category_id=1),
        make_txn("200", date(2024, 2, 10), category_id=1),
        make_txn("500", date(2024, 5, 3), category_id=1),
    ]
    anomalies = detect_unusual_spending(transactions, categories, NOW)

    assert len(anomalies) == 1
    anomaly = anomalies[0]
    assert anomaly.category == "Comida"
    assert anomaly.average == Decimal("150")
    assert anomaly.current == Decimal("500")
    assert anomaly.percent_increase == 233


def test_single_active_month_divides_by_one(make_txn, make_category):
    categories = [make_category(1, "Food")]
    transactions = [make_txn("80", date(2024, 3, 1), category_id=1), make_txn("40", date(2024, 3, 20), category_id=1)]
    assert category_baselines(transactions, categories, NOW) == {"Food": Decimal("120")}


def test_window_excludes_current_and_old_months(make_txn, make_category):
    categories = [make_category(1, "Food")]
    transactions = [
        make_txn("1000", date(2023, 10, 31), category_id=1),  # before the six-month window
        make_txn("60", date(2023, 11, 1), category_id=1),
        make_txn("70", date(2024, 5, 1), category_id=1),  # current month
    ]
    assert category_baselines(transactions, categories, NOW) == {"Food": Decimal("60")}


def test_not_flagged_at_exactly_threshold(make_txn, make_category):
    categories = [make_category(1, "Food")]
    transactions = [make_txn("100", date(2024, 4, 1), category_id=1), make_txn("150", date(2024, 5, 1), category_id=1)]
    assert detect_unusual_spending(transactions, categories, NOW) == []


def test_no_baseline_never_flagged(make_txn, make_category):
    categories = [make_category(1, "Travel")]
    transactions = [make_txn("3000", date(2024, 5, 2), category_id=1)]
    assert detect_unusual_spending(transactions, categories, NOW) == []


def test_sorted_by_increase_descending(make_txn, make_category):
    categories = [make_category(1, "Food"), make_category(2, "Fun")]
    transactions = [
        make_txn("100", date(2024, 4, 1), category_id=1),
        make_txn("100", date(2024, 4, 1), category_id=2),
        make_txn("200", date(2024, 5, 1), category_id=1),
        make_txn("400", date(2024, 5, 1), category_id=2),
    ]
    anomalies = detect_unusual_spending(transactions, categories, NOW)
    assert [(a.category, a.percent_increase) for a in anomalies] == [("Fun", 300), ("Food", 100)]


def test_income_is_ignored(make_txn, make_category):
    from finledger.domain.entities import TransactionType

    categories = [make_category(1, "Salary")]
    transactions = [
        make_txn("100", date(2024, 4, 1), category_id=1, type=TransactionType.INCOME),
        make_txn("900", date(2024, 5, 1), category_id=1, type=TransactionType.INCOME),
    ]
    assert detect_unusual_spending(transactions, categories, NOW) == []
