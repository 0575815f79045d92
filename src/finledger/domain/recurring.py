"""Recurring schedule domain service.

Schedules only drive due-date reminders; booking the actual transaction
when a payment happens is left to the user.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from finledger.database.base import Database
from finledger.domain.entities import Frequency, RecurringSchedule, TransactionType
from finledger.domain.errors import NotFoundError, ValidationError, account_not_found, schedule_not_found
from finledger.domain.transaction import require_positive_amount

_STEPS = {
    Frequency.DAILY: relativedelta(days=1),
    Frequency.WEEKLY: relativedelta(weeks=1),
    Frequency.MONTHLY: relativedelta(months=1),
    Frequency.YEARLY: relativedelta(years=1),
}


def first_occurrence_on_or_after(start: date, frequency: Frequency, today: date) -> date:
    """Earliest occurrence of a schedule starting at ``start`` that is not before ``today``."""
    occurrence = start
    step = 0
    while occurrence < today:
        step += 1
        # Step from the start date so month-end days don't drift (Jan 31 -> Feb 28 -> Mar 31)
        occurrence = start + _STEPS[frequency] * step
    return occurrence


class RecurringService:
    """Service for managing recurring payment schedules."""

    def __init__(self, db: Database):
        self.db = db

    def create_schedule(
        self,
        user_id: str,
        description: str,
        amount: Decimal,
        type: TransactionType,
        frequency: Frequency,
        start_date: date,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> int:
        """Create a schedule; its next date is the first occurrence not before ``today``.

        Raises:
            ValidationError: If the amount, description or date range is invalid
            NotFoundError: If the account doesn't belong to the user
        """
        description = description.strip()
        if not description:
            raise ValidationError("Description cannot be empty")
        amount = require_positive_amount(amount)
        if end_date is not None and end_date < start_date:
            raise ValidationError("End date cannot be before start date")
        if account_id is not None:
            account = self.db.get_account(account_id)
            if account is None or account.user_id != user_id:
                raise NotFoundError(account_not_found(account_id))

        next_date = first_occurrence_on_or_after(start_date, frequency, today or start_date)
        return self.db.create_recurring(
            user_id=user_id,
            description=description,
            amount=amount,
            type=type,
            frequency=frequency,
            start_date=start_date,
            next_date=next_date,
            end_date=end_date,
            account_id=account_id,
            category_id=category_id,
        )

    def get_schedule(self, user_id: str, schedule_id: int) -> RecurringSchedule:
        schedule = self.db.get_recurring(schedule_id)
        if schedule is None or schedule.user_id != user_id:
            raise NotFoundError(schedule_not_found(schedule_id))
        return schedule

    def list_schedules(self, user_id: str) -> list[RecurringSchedule]:
        return self.db.list_recurring(user_id)

    def advance(self, user_id: str, schedule_id: int) -> RecurringSchedule:
        """Move a schedule to its following occurrence (e.g. after it was paid)."""
        schedule = self.get_schedule(user_id, schedule_id)
        following = first_occurrence_on_or_after(
            schedule.start_date, schedule.frequency, schedule.next_date + timedelta(days=1)
        )
        self.db.update_recurring_next_date(schedule_id, following)
        return self.get_schedule(user_id, schedule_id)

    def delete_schedule(self, user_id: str, schedule_id: int) -> None:
        self.get_schedule(user_id, schedule_id)
        self.db.delete_recurring(schedule_id)
