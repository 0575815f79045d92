"""Domain model entities for finledger.

These are pure data classes representing business concepts, independent of
database schema. Analytics operate on tuples of these values (see Snapshot),
so every entity is frozen.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction. Amounts are always positive."""

    INCOME = "income"
    EXPENSE = "expense"


class TransactionOrigin(str, Enum):
    """What created a transaction. Non-manual transactions form the audit trail."""

    MANUAL = "manual"
    GOAL_DEPOSIT = "goal_deposit"
    INSTALLMENT_PAYMENT = "installment_payment"


class Frequency(str, Enum):
    """Recurrence frequency of a scheduled payment."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Severity(str, Enum):
    """Notification severity class."""

    ALERT = "alert"
    SUCCESS = "success"
    INFO = "info"


@dataclass(frozen=True)
class Account:
    """Account domain entity. Its current balance is derived, never stored."""

    id: int
    user_id: str
    name: str
    initial_balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity. ``user_id`` is None for global categories."""

    id: int
    name: str
    user_id: Optional[str]
    budget: Optional[Decimal]
    created_at: datetime

    @property
    def is_global(self) -> bool:
        return self.user_id is None


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    unique_id: str
    user_id: str
    account_id: int
    category_id: Optional[int]
    type: TransactionType
    amount: Decimal
    description: Optional[str]
    date: date
    payment_method: Optional[str]
    origin: TransactionOrigin
    origin_id: Optional[int]
    created_at: datetime

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def is_ledger_entry(self) -> bool:
        """True for transactions created by a goal deposit or installment payment."""
        return self.origin != TransactionOrigin.MANUAL


@dataclass(frozen=True)
class SavingsGoal:
    """Savings goal domain entity."""

    id: int
    user_id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    deadline: Optional[date]
    version: int
    created_at: datetime


@dataclass(frozen=True)
class Debt:
    """Installment debt domain entity."""

    id: int
    user_id: str
    description: str
    total_amount: Decimal
    amount_paid: Decimal
    installments_total: int
    installments_paid: int
    debt_type: str
    start_date: Optional[date]
    version: int
    created_at: datetime


@dataclass(frozen=True)
class RecurringSchedule:
    """Recurring payment schedule. ``next_date`` drives due-soon notifications."""

    id: int
    user_id: str
    description: str
    amount: Decimal
    type: TransactionType
    account_id: Optional[int]
    category_id: Optional[int]
    frequency: Frequency
    start_date: date
    end_date: Optional[date]
    next_date: date
    created_at: datetime


@dataclass(frozen=True)
class Notification:
    """User-facing alert. Recomputed on every evaluation, never stored."""

    id: str
    message: str
    severity: Severity


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of one user's data at a reference instant."""

    now: datetime | date
    accounts: tuple[Account, ...] = ()
    categories: tuple[Category, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    goals: tuple[SavingsGoal, ...] = ()
    debts: tuple[Debt, ...] = ()
    recurring: tuple[RecurringSchedule, ...] = ()


@dataclass(frozen=True)
class MonthlyComparison:
    """Expense totals for the current and previous calendar month."""

    current: Decimal
    previous: Decimal
    percent_change: Decimal


@dataclass(frozen=True)
class CategoryAmount:
    """Amount attributed to a category name."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class MonthlyCashFlow:
    """Income and expense totals for one calendar month."""

    year: int
    month: int
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class SpendingAnomaly:
    """Category whose current-month spend is unusually high."""

    category: str
    current: Decimal
    average: Decimal
    percent_increase: int


@dataclass(frozen=True)
class BudgetStatus:
    """Current-month spend against a category's budget."""

    category_id: int
    category: str
    limit: Decimal
    spent: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.limit - self.spent

    @property
    def exceeded(self) -> bool:
        return self.spent > self.limit


@dataclass(frozen=True)
class GoalDepositResult:
    """Outcome of a committed deposit-to-goal operation."""

    goal: SavingsGoal
    transaction: Transaction


@dataclass(frozen=True)
class InstallmentPaymentResult:
    """Outcome of a committed installment payment."""

    debt: Debt
    transaction: Transaction


@dataclass(frozen=True)
class InsightReport:
    """Everything the insight dashboard shows for one evaluation pass."""

    comparison: MonthlyComparison
    top_categories: tuple[CategoryAmount, ...]
    anomalies: tuple[SpendingAnomaly, ...]
    cash_flow: tuple[MonthlyCashFlow, ...]
    budgets: tuple[BudgetStatus, ...]
    notifications: tuple[Notification, ...] = field(default_factory=tuple)
