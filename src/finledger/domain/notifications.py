"""Notification synthesizer.

Notifications are derived from current state on every evaluation and never
stored, so evaluating the same snapshot twice yields the same list. Ids are
namespaced per source (``goal-<id>``, ``recurring-<id>``, ``budget-<id>``).
"""

from typing import Iterable, Sequence

from finledger.domain.budget import exceeded_budgets
from finledger.domain.entities import (
    Category,
    Notification,
    RecurringSchedule,
    SavingsGoal,
    Severity,
    Snapshot,
    Transaction,
)
from finledger.domain.progress import is_goal_complete
from finledger.utils.dates import DateLike, as_reference_date, days_until
from finledger.utils.money import format_money

DEFAULT_HORIZON_DAYS = 7


def completed_goal_notifications(goals: Iterable[SavingsGoal]) -> list[Notification]:
    """One success notification per goal that has reached its target."""
    return [
        Notification(
            id=f"goal-{goal.id}",
            message=f'Congratulations! You reached your savings goal "{goal.name}".',
            severity=Severity.SUCCESS,
        )
        for goal in goals
        if is_goal_complete(goal)
    ]


def _due_phrase(days: int) -> str:
    if days == 0:
        return "is due today."
    if days == 1:
        return "is due tomorrow."
    return f"is due in {days} days."


def upcoming_payment_notifications(
    schedules: Iterable[RecurringSchedule],
    now: DateLike,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> list[Notification]:
    """Alerts for schedules whose next date is within ``horizon_days`` (inclusive)."""
    today = as_reference_date(now)
    notifications = []
    for schedule in schedules:
        if schedule.end_date is not None and schedule.next_date > schedule.end_date:
            continue
        days = days_until(schedule.next_date, today)
        if 0 <= days <= horizon_days:
            notifications.append(
                Notification(
                    id=f"recurring-{schedule.id}",
                    message=f'Reminder: the payment "{schedule.description}" {_due_phrase(days)}',
                    severity=Severity.ALERT,
                )
            )
    return notifications


def budget_overrun_notifications(
    categories: Iterable[Category], transactions: Sequence[Transaction], now: DateLike
) -> list[Notification]:
    """One alert per category whose budget is exceeded this month."""
    return [
        Notification(
            id=f"budget-{status.category_id}",
            message=(
                f'You have exceeded your "{status.category}" budget this month. '
                f"(Spent: {format_money(status.spent)} / Limit: {format_money(status.limit)})"
            ),
            severity=Severity.ALERT,
        )
        for status in exceeded_budgets(categories, transactions, now)
    ]


def synthesize_notifications(
    snapshot: Snapshot, horizon_days: int = DEFAULT_HORIZON_DAYS
) -> list[Notification]:
    """Completed goals, then upcoming payments, then budget overruns."""
    return [
        *completed_goal_notifications(snapshot.goals),
        *upcoming_payment_notifications(snapshot.recurring, snapshot.now, horizon_days),
        *budget_overrun_notifications(snapshot.categories, snapshot.transactions, snapshot.now),
    ]
