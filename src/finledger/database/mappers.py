"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so that the analytics and ledger
code never see ORM instances.
"""

from decimal import Decimal
from typing import Optional

from finledger.domain import entities as domain
from finledger.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
    SavingsGoal as ORMSavingsGoal,
    Debt as ORMDebt,
    RecurringSchedule as ORMRecurringSchedule,
)


def _money(value) -> Decimal:
    return Decimal(value) if not isinstance(value, Decimal) else value


def _optional_money(value) -> Optional[Decimal]:
    return None if value is None else _money(value)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        initial_balance=_money(orm_account.initial_balance),
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        user_id=orm_category.user_id,
        budget=_optional_money(orm_category.budget),
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        unique_id=orm_transaction.unique_id,
        user_id=orm_transaction.user_id,
        account_id=orm_transaction.account_id,
        category_id=orm_transaction.category_id,
        type=domain.TransactionType(orm_transaction.type),
        amount=_money(orm_transaction.amount),
        description=orm_transaction.description,
        date=orm_transaction.date,
        payment_method=orm_transaction.payment_method,
        origin=domain.TransactionOrigin(orm_transaction.origin),
        origin_id=orm_transaction.origin_id,
        created_at=orm_transaction.created_at,
    )


def goal_to_domain(orm_goal: ORMSavingsGoal) -> domain.SavingsGoal:
    """Convert SQLAlchemy SavingsGoal model to domain SavingsGoal entity."""
    return domain.SavingsGoal(
        id=orm_goal.id,
        user_id=orm_goal.user_id,
        name=orm_goal.name,
        target_amount=_money(orm_goal.target_amount),
        current_amount=_money(orm_goal.current_amount),
        deadline=orm_goal.deadline,
        version=orm_goal.version,
        created_at=orm_goal.created_at,
    )


def debt_to_domain(orm_debt: ORMDebt) -> domain.Debt:
    """Convert SQLAlchemy Debt model to domain Debt entity."""
    return domain.Debt(
        id=orm_debt.id,
        user_id=orm_debt.user_id,
        description=orm_debt.description,
        total_amount=_money(orm_debt.total_amount),
        amount_paid=_money(orm_debt.amount_paid),
        installments_total=orm_debt.installments_total,
        installments_paid=orm_debt.installments_paid,
        debt_type=orm_debt.debt_type,
        start_date=orm_debt.start_date,
        version=orm_debt.version,
        created_at=orm_debt.created_at,
    )


def schedule_to_domain(orm_schedule: ORMRecurringSchedule) -> domain.RecurringSchedule:
    """Convert SQLAlchemy RecurringSchedule model to domain entity."""
    return domain.RecurringSchedule(
        id=orm_schedule.id,
        user_id=orm_schedule.user_id,
        description=orm_schedule.description,
        amount=_money(orm_schedule.amount),
        type=domain.TransactionType(orm_schedule.type),
        account_id=orm_schedule.account_id,
        category_id=orm_schedule.category_id,
        frequency=domain.Frequency(orm_schedule.frequency),
        start_date=orm_schedule.start_date,
        end_date=orm_schedule.end_date,
        next_date=orm_schedule.next_date,
        created_at=orm_schedule.created_at,
    )
