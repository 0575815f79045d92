"""Tests for domain entities."""

from dataclasses import FrozenInstanceError
from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from finledger.domain.entities import (
    Account,
    Category,
    Snapshot,
    Transaction,
    TransactionOrigin,
    TransactionType,
)


class TestAccount:
    """Tests for Account entity."""

    def test_account_immutability(self):
        """Test that Account entities are immutable."""
        account = Account(
            id=1, user_id="local", name="Checking", initial_balance=Decimal("0"), created_at=datetime.now(UTC)
        )
        with pytest.raises(FrozenInstanceError):
            account.name = "New Name"

    def test_account_equality(self):
        created_at = datetime.now(UTC)
        account1 = Account(id=1, user_id="local", name="A", initial_balance=Decimal("1"), created_at=created_at)
        account2 = Account(id=1, user_id="local", name="A", initial_balance=Decimal("1"), created_at=created_at)
        account3 = Account(id=2, user_id="local", name="A", initial_balance=Decimal("1"), created_at=created_at)

        assert account1 == account2
        assert account1 != account3


class TestCategory:
    """Tests for Category entity."""

    def test_global_category(self):
        category = Category(id=1, name="Salary", user_id=None, budget=None, created_at=datetime.now(UTC))
        assert category.is_global

    def test_user_category(self):
        category = Category(id=2, name="Food", user_id="local", budget=Decimal("300"), created_at=datetime.now(UTC))
        assert not category.is_global
        assert category.budget == Decimal("300")


class TestTransaction:
    """Tests for Transaction entity."""

    def _transaction(self, **overrides):
        fields = dict(
            id=1,
            unique_id="abc",
            user_id="local",
            account_id=1,
            category_id=None,
            type=TransactionType.INCOME,
            amount=Decimal("10.00"),
            description=None,
            date=date(2024, 1, 15),
            payment_method=None,
            origin=TransactionOrigin.MANUAL,
            origin_id=None,
            created_at=datetime.now(UTC),
        )
        fields.update(overrides)
        return Transaction(**fields)

    def test_manual_transaction(self):
        txn = self._transaction()
        assert not txn.is_expense
        assert not txn.is_ledger_entry

    @pytest.mark.parametrize("origin", [TransactionOrigin.GOAL_DEPOSIT, TransactionOrigin.INSTALLMENT_PAYMENT])
    def test_ledger_entry(self, origin):
        txn = self._transaction(type=TransactionType.EXPENSE, origin=origin, origin_id=3)
        assert txn.is_expense
        assert txn.is_ledger_entry


class TestSnapshot:
    def test_defaults_to_empty_collections(self):
        snapshot = Snapshot(now=date(2024, 5, 1))
        assert snapshot.transactions == ()
        assert snapshot.goals == ()
        assert snapshot.recurring == ()
