"""End-to-end workflow through the CLI."""

from decimal import Decimal

from finledger.cli.main import cli
from finledger.domain.entities import TransactionOrigin


def test_month_of_personal_finance(cli_runner, temp_db):
    db_path = temp_db.database_path

    def run(*args):
        result = cli_runner.invoke(cli, ["--db-path", db_path, *args])
        assert result.exit_code == 0, result.output
        return result.output

    run("init-categories")
    run("account", "create", "Checking", "--initial-balance", "1000")
    run("category", "create", "Groceries", "--budget", "300")

    run("add", "--account", "Checking", "--date", "2024-04-05", "--amount", "280", "--category", "Groceries")
    run("add", "--account", "Checking", "--date", "2024-05-01", "--amount", "2500", "--type", "income", "--category", "Salary")
    run("add", "--account", "Checking", "--date", "2024-05-03", "--amount", "320.50", "--category", "Groceries")

    run("goal", "create", "Rainy day", "1000")
    run("goal", "deposit", "1", "400", "--account", "Checking", "--date", "2024-05-10")
    run("debt", "create", "Laptop", "1200", "--installments", "12")
    run("debt", "pay", "1", "--account", "Checking", "--date", "2024-05-15")

    # 1000 + 2500 - 280 - 320.50 - 400 - 100
    assert "$2,399.50" in run("account", "list")
    assert "$400.00 / $1,000.00 (40%)" in run("goal", "list")
    assert "Total outstanding: $1,100.00" in run("debt", "list")

    budgets = run("budgets", "--as-of", "2024-05-20")
    assert "$320.50 / $300.00" in budgets
    assert "EXCEEDED" in budgets

    # Transfers into goals and debt payments are spending in their own categories
    insights = run("insights", "--as-of", "2024-05-20")
    assert "Spending this month: $820.50" in insights
    assert "Savings Transfer" in insights
    assert "Debt Payment" in insights

    listing = run("transaction", "list", "--start-date", "2024-05-01", "--end-date", "2024-05-31")
    assert "Found 4 transaction(s)" in listing
    assert 'Deposit to goal "Rainy day"' in listing
    assert 'Installment 1/12 of "Laptop"' in listing

    temp_db.disconnect()
    origins = sorted(txn.origin.value for txn in temp_db.list_transactions("local"))
    assert origins == [
        TransactionOrigin.GOAL_DEPOSIT.value,
        TransactionOrigin.INSTALLMENT_PAYMENT.value,
        TransactionOrigin.MANUAL.value,
        TransactionOrigin.MANUAL.value,
        TransactionOrigin.MANUAL.value,
    ]
    assert temp_db.get_goal(1).current_amount == Decimal("400")
    assert temp_db.get_debt(1).installments_paid == 1
