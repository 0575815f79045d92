"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from finledger.domain.entities import (
    Account,
    Category,
    Transaction,
    TransactionType,
    TransactionOrigin,
    SavingsGoal,
    Debt,
    RecurringSchedule,
    Frequency,
)


class Database(ABC):
    """Abstract database interface for finledger.

    Every write commits on its own unless it runs inside ``unit_of_work()``,
    in which case all writes commit together when the block exits cleanly
    and are rolled back together otherwise.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema and seed the system categories."""
        pass

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager["Database"]:
        """Group writes into one atomic transaction.

        Raises:
            ConsistencyError: If the store rejects or cannot commit the writes.
                Nothing is left behind in that case.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, user_id: str, name: str, initial_balance: Decimal) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: str) -> list[Account]:
        """List a user's accounts."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, account_id: int) -> int:
        """Count transactions recorded against an account."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, name: str, user_id: Optional[str] = None, budget: Optional[Decimal] = None
    ) -> int:
        """Create a category (global when user_id is None). Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str, user_id: Optional[str] = None) -> Optional[Category]:
        """Get category by name within exactly one owner scope (None = global)."""
        pass

    @abstractmethod
    def list_categories(self, user_id: str) -> list[Category]:
        """List global categories plus the user's own."""
        pass

    @abstractmethod
    def update_category_budget(self, category_id: int, budget: Optional[Decimal]) -> None:
        """Set or clear a category's monthly budget."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        unique_id: str,
        user_id: str,
        account_id: int,
        type: TransactionType,
        amount: Decimal,
        date: date,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
        payment_method: Optional[str] = None,
        origin: TransactionOrigin = TransactionOrigin.MANUAL,
        origin_id: Optional[int] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def transaction_exists(self, unique_id: str) -> bool:
        """Check if a transaction with given unique_id exists."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        date: Optional[date] = None,
        payment_method: Optional[str] = None,
    ) -> None:
        """Update the given transaction fields (None leaves a field unchanged)."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        """List a user's transactions, newest first, with optional filters."""
        pass

    # Savings goal operations
    @abstractmethod
    def create_goal(
        self, user_id: str, name: str, target_amount: Decimal, deadline: Optional[date] = None
    ) -> int:
        """Create a savings goal with a zero balance. Returns goal ID."""
        pass

    @abstractmethod
    def get_goal(self, goal_id: int, for_update: bool = False) -> Optional[SavingsGoal]:
        """Get goal by ID, locking the row when ``for_update`` is set."""
        pass

    @abstractmethod
    def list_goals(self, user_id: str) -> list[SavingsGoal]:
        """List a user's goals."""
        pass

    @abstractmethod
    def update_goal_amount(self, goal_id: int, current_amount: Decimal, expected_version: int) -> None:
        """Write a goal's current amount if nobody changed it since ``expected_version``."""
        pass

    @abstractmethod
    def update_goal_details(
        self,
        goal_id: int,
        name: Optional[str] = None,
        target_amount: Optional[Decimal] = None,
        deadline: Optional[date] = None,
    ) -> None:
        """Update a goal's descriptive fields."""
        pass

    @abstractmethod
    def delete_goal(self, goal_id: int) -> None:
        """Delete a goal."""
        pass

    # Debt operations
    @abstractmethod
    def create_debt(
        self,
        user_id: str,
        description: str,
        total_amount: Decimal,
        installments_total: int,
        debt_type: str,
        start_date: Optional[date] = None,
    ) -> int:
        """Create a debt with nothing paid yet. Returns debt ID."""
        pass

    @abstractmethod
    def get_debt(self, debt_id: int, for_update: bool = False) -> Optional[Debt]:
        """Get debt by ID, locking the row when ``for_update`` is set."""
        pass

    @abstractmethod
    def list_debts(self, user_id: str) -> list[Debt]:
        """List a user's debts, newest first."""
        pass

    @abstractmethod
    def update_debt_payment(
        self, debt_id: int, amount_paid: Decimal, installments_paid: int, expected_version: int
    ) -> None:
        """Write a debt's payment counters if nobody changed it since ``expected_version``."""
        pass

    @abstractmethod
    def delete_debt(self, debt_id: int) -> None:
        """Delete a debt."""
        pass

    # Recurring schedule operations
    @abstractmethod
    def create_recurring(
        self,
        user_id: str,
        description: str,
        amount: Decimal,
        type: TransactionType,
        frequency: Frequency,
        start_date: date,
        next_date: date,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> int:
        """Create a recurring schedule. Returns schedule ID."""
        pass

    @abstractmethod
    def get_recurring(self, schedule_id: int) -> Optional[RecurringSchedule]:
        """Get recurring schedule by ID."""
        pass

    @abstractmethod
    def list_recurring(self, user_id: str) -> list[RecurringSchedule]:
        """List a user's recurring schedules ordered by next date."""
        pass

    @abstractmethod
    def update_recurring_next_date(self, schedule_id: int, next_date: date) -> None:
        """Move a schedule's next occurrence date."""
        pass

    @abstractmethod
    def delete_recurring(self, schedule_id: int) -> None:
        """Delete a recurring schedule."""
        pass
