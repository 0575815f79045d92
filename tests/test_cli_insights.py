"""Tests for insights, budgets, distribution and notifications commands."""

from datetime import date
from decimal import Decimal

import pytest

from finledger.cli.main import cli
from finledger.domain.entities import Frequency, TransactionType


@pytest.fixture
def month_of_spending(
    temp_db, sample_account, food_category, category_service, transaction_service, goal_service, recurring_service, user_id
):
    """April and May 2024 expenses, a reached goal and rent due on May 22."""
    category_service.set_budget(user_id, food_category.id, Decimal("300"))
    for amount, on in (("200", date(2024, 4, 10)), ("350", date(2024, 5, 3))):
        transaction_service.create_transaction(
            user_id,
            account_id=sample_account.id,
            type=TransactionType.EXPENSE,
            amount=Decimal(amount),
            date=on,
            category_id=food_category.id,
        )
    transaction_service.create_transaction(
        user_id,
        account_id=sample_account.id,
        type=TransactionType.INCOME,
        amount=Decimal("2000"),
        date=date(2024, 5, 1),
    )
    goal_id = goal_service.create_goal(user_id, "Bike", Decimal("500"))
    goal_service.correct_amount(user_id, goal_id, Decimal("500"))
    recurring_service.create_schedule(
        user_id,
        "Rent",
        Decimal("950"),
        TransactionType.EXPENSE,
        Frequency.MONTHLY,
        date(2024, 1, 22),
        today=date(2024, 5, 20),
    )
    return temp_db


def _invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def test_insights_report(cli_runner, month_of_spending):
    result = _invoke(cli_runner, month_of_spending, "insights", "--as-of", "2024-05-20")

    assert result.exit_code == 0
    assert "Spending this month: $350.00" in result.output
    assert "Spending last month: $200.00" in result.output
    assert "You spent 75.0% more than last month." in result.output
    assert "Food" in result.output
    assert "2024-05" in result.output
    assert "Notifications:" in result.output


def test_insights_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "insights", "--as-of", "2024-05-20")

    assert result.exit_code == 0
    assert "Spending this month: $0.00" in result.output
    assert "No expenses this month." in result.output
    assert "Nothing unusual." in result.output


def test_insights_invalid_date(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "insights", "--as-of", "someday maybe")
    assert result.exit_code == 1
    assert "Invalid date format" in result.output


def test_budgets(cli_runner, month_of_spending):
    result = _invoke(cli_runner, month_of_spending, "budgets", "--as-of", "2024-05-20")

    assert result.exit_code == 0
    assert "Budgets for May 2024" in result.output
    assert "$350.00 / $300.00" in result.output
    assert "EXCEEDED" in result.output


def test_budgets_previous_month_is_within_limit(cli_runner, month_of_spending):
    result = _invoke(cli_runner, month_of_spending, "budgets", "--as-of", "2024-04-30")

    assert "$200.00 / $300.00" in result.output
    assert "$100.00 left" in result.output


def test_budgets_none_set(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "budgets")
    assert "No budgets set" in result.output


def test_distribution_all_time(cli_runner, month_of_spending):
    result = _invoke(cli_runner, month_of_spending, "distribution")

    assert result.exit_code == 0
    assert "Spending by category (all time)" in result.output
    assert "$550.00  100.0%" in result.output


def test_distribution_for_month(cli_runner, month_of_spending):
    result = _invoke(cli_runner, month_of_spending, "distribution", "--month", "2024-04-15")

    assert result.exit_code == 0
    assert "Spending by category (April 2024)" in result.output
    assert "$200.00  100.0%" in result.output


def test_distribution_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "distribution")
    assert "No expenses found." in result.output


def test_notifications_in_order(cli_runner, month_of_spending):
    result = _invoke(cli_runner, month_of_spending, "notifications", "--as-of", "2024-05-20")

    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines == [
        '* Congratulations! You reached your savings goal "Bike".',
        '! Reminder: the payment "Rent" is due in 2 days.',
        '! You have exceeded your "Food" budget this month. (Spent: $350.00 / Limit: $300.00)',
    ]


def test_notifications_horizon(cli_runner, month_of_spending):
    result = _invoke(cli_runner, month_of_spending, "notifications", "--as-of", "2024-05-20", "--horizon", "1")

    assert "Rent" not in result.output


def test_notifications_horizon_from_environment(cli_runner, month_of_spending):
    result = cli_runner.invoke(
        cli,
        ["--db-path", month_of_spending.database_path, "notifications", "--as-of", "2024-05-20"],
        env={"FINLEDGER_HORIZON_DAYS": "1"},
    )

    assert result.exit_code == 0
    assert "Rent" not in result.output


def test_no_notifications(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "notifications", "--as-of", "2024-05-20")
    assert "No notifications." in result.output
