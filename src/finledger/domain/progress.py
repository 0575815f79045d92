"""Progress model for savings goals and installment debts."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from finledger.domain.entities import Debt, SavingsGoal
from finledger.utils.money import CENT, HUNDRED, ZERO


@dataclass(frozen=True)
class GoalProgress:
    goal: SavingsGoal
    percent: Decimal
    remaining: Decimal
    complete: bool


@dataclass(frozen=True)
class DebtProgress:
    debt: Debt
    percent: Decimal
    remaining: Decimal
    nominal_installment: Decimal
    settled: bool


def progress_percent(current: Decimal, target: Decimal) -> Decimal:
    """``current / target`` as a percentage clamped to [0, 100]; 0 for a non-positive target."""
    if target <= 0:
        return ZERO
    return max(ZERO, min(current / target * HUNDRED, HUNDRED))


def is_goal_complete(goal: SavingsGoal) -> bool:
    return goal.current_amount >= goal.target_amount


def goal_progress(goal: SavingsGoal) -> GoalProgress:
    return GoalProgress(
        goal=goal,
        percent=progress_percent(goal.current_amount, goal.target_amount),
        remaining=max(ZERO, goal.target_amount - goal.current_amount),
        complete=is_goal_complete(goal),
    )


def nominal_installment(debt: Debt) -> Decimal:
    """Suggested payment per installment (total / count), rounded to cents.

    Only used to pre-fill a payment; payments of any positive amount are
    accepted.
    """
    if debt.installments_total <= 0:
        return ZERO
    return (debt.total_amount / debt.installments_total).quantize(CENT, rounding=ROUND_HALF_UP)


def remaining_balance(debt: Debt) -> Decimal:
    return debt.total_amount - debt.amount_paid


def is_debt_settled(debt: Debt) -> bool:
    """True once every installment has been paid."""
    return debt.installments_paid >= debt.installments_total


def debt_progress(debt: Debt) -> DebtProgress:
    return DebtProgress(
        debt=debt,
        percent=progress_percent(debt.amount_paid, debt.total_amount),
        remaining=remaining_balance(debt),
        nominal_installment=nominal_installment(debt),
        settled=is_debt_settled(debt),
    )


def total_outstanding_debt(debts: Iterable[Debt]) -> Decimal:
    """Sum of what is still owed across debts."""
    return sum((remaining_balance(d) for d in debts), ZERO)
