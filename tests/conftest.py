"""Shared pytest fixtures for finledger tests."""

import itertools
import logging
import os
import tempfile
from datetime import date, datetime
from decimal import Decimal

import pytest
import structlog

from finledger.database.factories import create_sqlite_database
from finledger.domain.account import AccountService
from finledger.domain.category import CategoryService
from finledger.domain.debt import DebtService
from finledger.domain.entities import (
    Category,
    Debt,
    Frequency,
    RecurringSchedule,
    SavingsGoal,
    Transaction,
    TransactionOrigin,
    TransactionType,
)
from finledger.domain.goal import GoalService
from finledger.domain.insights import InsightService
from finledger.domain.ledger import LedgerService
from finledger.domain.recurring import RecurringService
from finledger.domain.transaction import TransactionService

USER = "local"
CREATED = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo CLI logging configuration so later tests don't log to a closed stream."""
    yield
    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_id():
    return USER


@pytest.fixture
def account_service(temp_db):
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    return TransactionService(temp_db)


@pytest.fixture
def goal_service(temp_db):
    return GoalService(temp_db)


@pytest.fixture
def debt_service(temp_db):
    return DebtService(temp_db)


@pytest.fixture
def recurring_service(temp_db):
    return RecurringService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    return LedgerService(temp_db)


@pytest.fixture
def insight_service(temp_db):
    return InsightService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account for testing."""
    account_id = account_service.create_account(USER, name="Checking", initial_balance=Decimal("1000.00"))
    return account_service.get_account(account_id)


@pytest.fixture
def food_category(category_service):
    category_id = category_service.create_category("Food", user_id=USER)
    return category_service.get_category(category_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


# In-memory entity builders for the pure analytics tests

_ids = itertools.count(1)


@pytest.fixture
def make_txn():
    def build(
        amount,
        on: date,
        category_id=None,
        type=TransactionType.EXPENSE,
        account_id=1,
        origin=TransactionOrigin.MANUAL,
    ) -> Transaction:
        txn_id = next(_ids)
        return Transaction(
            id=txn_id,
            unique_id=f"t{txn_id}",
            user_id=USER,
            account_id=account_id,
            category_id=category_id,
            type=type,
            amount=Decimal(str(amount)),
            description=None,
            date=on,
            payment_method=None,
            origin=origin,
            origin_id=None,
            created_at=CREATED,
        )

    return build


@pytest.fixture
def make_category():
    def build(category_id: int, name: str, budget=None, user_id=USER) -> Category:
        return Category(
            id=category_id,
            name=name,
            user_id=user_id,
            budget=None if budget is None else Decimal(str(budget)),
            created_at=CREATED,
        )

    return build


@pytest.fixture
def make_goal():
    def build(goal_id: int, name: str, target, current) -> SavingsGoal:
        return SavingsGoal(
            id=goal_id,
            user_id=USER,
            name=name,
            target_amount=Decimal(str(target)),
            current_amount=Decimal(str(current)),
            deadline=None,
            version=1,
            created_at=CREATED,
        )

    return build


@pytest.fixture
def make_debt():
    def build(debt_id: int, total, paid="0", installments_total=12, installments_paid=0) -> Debt:
        return Debt(
            id=debt_id,
            user_id=USER,
            description="Laptop",
            total_amount=Decimal(str(total)),
            amount_paid=Decimal(str(paid)),
            installments_total=installments_total,
            installments_paid=installments_paid,
            debt_type="Installment purchase",
            start_date=None,
            version=1,
            created_at=CREATED,
        )

    return build


@pytest.fixture
def make_schedule():
    def build(schedule_id: int, description: str, next_date: date, end_date=None) -> RecurringSchedule:
        return RecurringSchedule(
            id=schedule_id,
            user_id=USER,
            description=description,
            amount=Decimal("50.00"),
            type=TransactionType.EXPENSE,
            account_id=None,
            category_id=None,
            frequency=Frequency.MONTHLY,
            start_date=next_date,
            end_date=end_date,
            next_date=next_date,
            created_at=CREATED,
        )

    return build
