"""Account domain service."""

from decimal import Decimal
from typing import Optional

from finledger.database.base import Database
from finledger.domain.analytics import account_balance, account_balances
from finledger.domain.entities import Account as AccountEntity
from finledger.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
)
from finledger.utils.money import quantize_money


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, user_id: str, name: str, initial_balance: Decimal = Decimal("0")) -> int:
        """Create a new account.

        Args:
            user_id: Owner of the account
            name: Account name
            initial_balance: Opening balance

        Returns:
            Account ID

        Raises:
            ConflictError: If the user already has an account with that name
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        for acc in self.db.list_accounts(user_id):
            if acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")

        return self.db.create_account(
            user_id=user_id, name=name, initial_balance=quantize_money(initial_balance)
        )

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, user_id: str, account_id: int) -> AccountEntity:
        """Get an account owned by the user.

        Raises:
            NotFoundError: If the account is missing or belongs to someone else
        """
        account = self.db.get_account(account_id)
        if account is None or account.user_id != user_id:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, user_id: str) -> list[AccountEntity]:
        """List a user's accounts."""
        return self.db.list_accounts(user_id)

    def get_balance(self, user_id: str, account_id: int) -> Decimal:
        """Current balance: initial balance plus income minus expenses."""
        account = self.require_account(user_id, account_id)
        transactions = self.db.list_transactions(user_id, account_id=account_id)
        return account_balance(account, transactions)

    def get_balances(self, user_id: str) -> dict[int, Decimal]:
        """Current balance of each of the user's accounts, keyed by account id."""
        return account_balances(self.db.list_accounts(user_id), self.db.list_transactions(user_id))

    def delete_account(self, user_id: str, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If account not found
            DependencyError: If the account has transactions
        """
        self.require_account(user_id, account_id)

        transaction_count = self.db.get_account_transaction_count(account_id)
        if transaction_count > 0:
            raise DependencyError(account_delete_blocked(account_id, transaction_count))

        self.db.delete_account(account_id)
