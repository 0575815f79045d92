"""Savings goal domain service.

Money only enters a goal through ``LedgerService.deposit_to_goal``; this
service covers the goal's own lifecycle and explicit corrections.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import structlog

from finledger.database.base import Database
from finledger.domain.entities import SavingsGoal
from finledger.domain.errors import DependencyError, NotFoundError, ValidationError, goal_not_found
from finledger.domain.progress import GoalProgress, goal_progress, is_goal_complete
from finledger.domain.transaction import require_positive_amount
from finledger.utils.money import to_money

logger = structlog.get_logger(__name__)


class GoalService:
    """Service for managing savings goals."""

    def __init__(self, db: Database):
        self.db = db

    def create_goal(
        self, user_id: str, name: str, target_amount: Decimal, deadline: Optional[date] = None
    ) -> int:
        """Create a goal starting at zero.

        Raises:
            ValidationError: If the name is blank or the target not positive
        """
        name = name.strip()
        if not name:
            raise ValidationError("Goal name cannot be empty")
        target = require_positive_amount(target_amount)
        return self.db.create_goal(user_id=user_id, name=name, target_amount=target, deadline=deadline)

    def get_goal(self, user_id: str, goal_id: int) -> SavingsGoal:
        """Get a goal owned by the user.

        Raises:
            NotFoundError: If missing or owned by someone else
        """
        goal = self.db.get_goal(goal_id)
        if goal is None or goal.user_id != user_id:
            raise NotFoundError(goal_not_found(goal_id))
        return goal

    def list_goals(self, user_id: str) -> list[SavingsGoal]:
        return self.db.list_goals(user_id)

    def list_progress(self, user_id: str) -> list[GoalProgress]:
        """Progress summary for each of the user's goals."""
        return [goal_progress(goal) for goal in self.db.list_goals(user_id)]

    def update_goal(
        self,
        user_id: str,
        goal_id: int,
        name: Optional[str] = None,
        target_amount: Optional[Decimal] = None,
        deadline: Optional[date] = None,
    ) -> None:
        """Change a goal's name, target or deadline."""
        self.get_goal(user_id, goal_id)
        if name is not None and not name.strip():
            raise ValidationError("Goal name cannot be empty")
        if target_amount is not None:
            target_amount = require_positive_amount(target_amount)
        self.db.update_goal_details(
            goal_id,
            name=name.strip() if name is not None else None,
            target_amount=target_amount,
            deadline=deadline,
        )

    def correct_amount(self, user_id: str, goal_id: int, current_amount: Decimal) -> SavingsGoal:
        """Overwrite a goal's saved amount (the only way it can go down).

        Raises:
            ValidationError: If the new amount is negative
            ConsistencyError: If the goal changed concurrently
        """
        try:
            amount = to_money(current_amount)
        except ValueError as e:
            raise ValidationError(str(e)) from None
        if amount < 0:
            raise ValidationError(f"Saved amount cannot be negative (got {current_amount})")

        with self.db.unit_of_work():
            goal = self.db.get_goal(goal_id, for_update=True)
            if goal is None or goal.user_id != user_id:
                raise NotFoundError(goal_not_found(goal_id))
            self.db.update_goal_amount(goal_id, amount, expected_version=goal.version)

        logger.info("goal.corrected", goal_id=goal_id, previous=str(goal.current_amount), current=str(amount))
        return self.get_goal(user_id, goal_id)

    def delete_goal(self, user_id: str, goal_id: int) -> None:
        """Delete a goal that has not been completed.

        Raises:
            DependencyError: If the goal is complete; completed goals are kept
        """
        goal = self.get_goal(user_id, goal_id)
        if is_goal_complete(goal):
            raise DependencyError(f"Savings goal {goal_id} is complete and cannot be deleted")
        self.db.delete_goal(goal_id)
