"""Transaction domain service."""

import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from finledger.database.base import Database
from finledger.domain.entities import Transaction as TransactionEntity, TransactionType
from finledger.domain.errors import (
    ConflictError,
    ImmutableTransactionError,
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    duplicate_unique_id,
    ledger_transaction_immutable,
    non_positive_amount,
    transaction_not_found,
)
from finledger.utils.money import CENT, to_money


def require_positive_amount(amount) -> Decimal:
    """Validate a monetary amount: strictly positive, whole cents.

    Raises:
        ValidationError: If the amount is not a number, not positive or has
            sub-cent precision
    """
    try:
        value = to_money(amount)
    except ValueError as e:
        raise ValidationError(str(e)) from None
    if value <= 0:
        raise ValidationError(non_positive_amount(amount))
    if value != value.quantize(CENT):
        raise ValidationError(f"Amount {amount} has more than two decimal places")
    return value.quantize(CENT)


def new_unique_id() -> str:
    """Client token for a transaction that was not given one."""
    return uuid.uuid4().hex


class TransactionService:
    """Service for managing manually entered transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        user_id: str,
        account_id: int,
        type: TransactionType,
        amount: Decimal,
        date: date,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
        payment_method: Optional[str] = None,
        unique_id: Optional[str] = None,
    ) -> int:
        """Create a transaction.

        Args:
            user_id: Owner
            account_id: Account ID
            type: Income or expense
            amount: Positive amount; the direction comes from ``type``
            date: Transaction date
            category_id: Category ID (required for expenses)
            description: Optional description
            payment_method: Optional payment method tag
            unique_id: Optional client token; generated when omitted

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the amount or category is invalid
            NotFoundError: If the account or category doesn't exist
            ConflictError: If the unique_id was used before
        """
        amount = require_positive_amount(amount)
        self._require_account(user_id, account_id)
        self._check_category(user_id, type, category_id)

        if unique_id is None:
            unique_id = new_unique_id()
        elif self.db.transaction_exists(unique_id):
            raise ConflictError(duplicate_unique_id(unique_id))

        return self.db.create_transaction(
            unique_id=unique_id,
            user_id=user_id,
            account_id=account_id,
            type=type,
            amount=amount,
            date=date,
            category_id=category_id,
            description=description,
            payment_method=payment_method,
        )

    def get_transaction(self, user_id: str, transaction_id: int) -> TransactionEntity:
        """Get a transaction owned by the user.

        Raises:
            NotFoundError: If it doesn't exist or belongs to someone else
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None or txn.user_id != user_id:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        user_id: str,
        transaction_id: int,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        date: Optional[date] = None,
        payment_method: Optional[str] = None,
    ) -> None:
        """Update transaction fields.

        Raises:
            ImmutableTransactionError: If the transaction belongs to a goal
                deposit or installment payment
            ValidationError / NotFoundError: For invalid new values
        """
        txn = self._require_mutable(user_id, transaction_id)

        if amount is not None:
            amount = require_positive_amount(amount)
        if account_id is not None:
            self._require_account(user_id, account_id)
        if category_id is not None:
            self._check_category(user_id, txn.type, category_id)

        self.db.update_transaction(
            transaction_id=transaction_id,
            account_id=account_id,
            category_id=category_id,
            amount=amount,
            description=description,
            date=date,
            payment_method=payment_method,
        )

    def delete_transaction(self, user_id: str, transaction_id: int) -> None:
        """Delete a manually entered transaction."""
        self._require_mutable(user_id, transaction_id)
        self.db.delete_transaction(transaction_id)

    def list_transactions(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        type: Optional[TransactionType] = None,
    ) -> list[TransactionEntity]:
        """List a user's transactions, newest first."""
        return self.db.list_transactions(
            user_id,
            start_date=start_date,
            end_date=end_date,
            account_id=account_id,
            category_id=category_id,
            type=type,
        )

    def _require_mutable(self, user_id: str, transaction_id: int) -> TransactionEntity:
        txn = self.get_transaction(user_id, transaction_id)
        if txn.is_ledger_entry:
            raise ImmutableTransactionError(ledger_transaction_immutable(txn.id, txn.origin.value))
        return txn

    def _require_account(self, user_id: str, account_id: int) -> None:
        account = self.db.get_account(account_id)
        if account is None or account.user_id != user_id:
            raise NotFoundError(account_not_found(account_id))

    def _check_category(self, user_id: str, type: TransactionType, category_id: Optional[int]) -> None:
        if category_id is None:
            if type == TransactionType.EXPENSE:
                raise ValidationError("Expenses must have a category")
            return
        category = self.db.get_category(category_id)
        if category is None or (category.user_id is not None and category.user_id != user_id):
            raise NotFoundError(category_not_found(category_id))
