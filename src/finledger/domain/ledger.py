"""Atomic cross-entity money movements.

Depositing into a savings goal and paying a debt installment each touch two
records: a new expense transaction and the goal/debt aggregate. Both writes
run inside one ``Database.unit_of_work()`` so they land together or not at
all. Goal and debt rows carry a version counter; a concurrent writer that got
there first makes the slower one fail with ``ConsistencyError`` instead of
losing an update.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import structlog

from finledger.database.base import Database
from finledger.domain.defaults import DEBT_PAYMENT_CATEGORY, SAVINGS_TRANSFER_CATEGORY
from finledger.domain.entities import (
    Category,
    GoalDepositResult,
    InstallmentPaymentResult,
    TransactionOrigin,
    TransactionType,
)
from finledger.domain.errors import (
    ConsistencyError,
    DuplicateOperationError,
    NotFoundError,
    ValidationError,
    account_not_found,
    debt_not_found,
    duplicate_unique_id,
    goal_not_found,
)
from finledger.domain.progress import is_debt_settled
from finledger.domain.transaction import new_unique_id, require_positive_amount

logger = structlog.get_logger(__name__)


class LedgerService:
    """Performs the goal deposit and installment payment operations."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def deposit_to_goal(
        self,
        user_id: str,
        goal_id: int,
        amount: Decimal,
        account_id: int,
        date: Optional[date] = None,
        idempotency_key: Optional[str] = None,
    ) -> GoalDepositResult:
        """Move money from an account into a savings goal.

        Records an expense on the account (category "Savings Transfer") and
        adds the amount to the goal's balance. The goal may end up above its
        target.

        Args:
            user_id: Owner of the goal and the account
            goal_id: Goal to deposit into
            amount: Positive amount
            account_id: Account the money leaves
            date: Transaction date (defaults to today)
            idempotency_key: Token stored as the transaction's unique_id;
                reusing one is rejected

        Returns:
            The updated goal and the created transaction

        Raises:
            ValidationError: If the amount is not positive
            NotFoundError: If the goal, account or system category is missing
            DuplicateOperationError: If the idempotency key was used before
            ConsistencyError: If the writes could not be committed
        """
        amount = require_positive_amount(amount)
        key = self._claim_key(idempotency_key)
        category = self._system_category(SAVINGS_TRANSFER_CATEGORY)

        with self.db.unit_of_work():
            goal = self.db.get_goal(goal_id, for_update=True)
            if goal is None or goal.user_id != user_id:
                raise NotFoundError(goal_not_found(goal_id))
            self._require_account(user_id, account_id)

            transaction_id = self.db.create_transaction(
                unique_id=key,
                user_id=user_id,
                account_id=account_id,
                type=TransactionType.EXPENSE,
                amount=amount,
                date=date or _today(),
                category_id=category.id,
                description=f'Deposit to goal "{goal.name}"',
                origin=TransactionOrigin.GOAL_DEPOSIT,
                origin_id=goal_id,
            )
            self.db.update_goal_amount(goal_id, goal.current_amount + amount, expected_version=goal.version)

        logger.info(
            "ledger.deposit.committed",
            user_id=user_id,
            goal_id=goal_id,
            account_id=account_id,
            transaction_id=transaction_id,
            amount=str(amount),
        )
        return GoalDepositResult(
            goal=self._reload(self.db.get_goal(goal_id), goal_id),
            transaction=self._reload(self.db.get_transaction(transaction_id), transaction_id),
        )

    def pay_installment(
        self,
        user_id: str,
        debt_id: int,
        amount: Decimal,
        account_id: int,
        date: Optional[date] = None,
        idempotency_key: Optional[str] = None,
    ) -> InstallmentPaymentResult:
        """Pay one installment of a debt from an account.

        Records an expense (category "Debt Payment"), adds the amount to the
        debt's paid total and counts exactly one installment, whatever the
        amount relative to the nominal installment.

        Raises:
            ValidationError: If the amount is not positive, the debt is
                already settled or the payment would exceed the total
            NotFoundError: If the debt, account or system category is missing
            DuplicateOperationError: If the idempotency key was used before
            ConsistencyError: If the writes could not be committed
        """
        amount = require_positive_amount(amount)
        key = self._claim_key(idempotency_key)
        category = self._system_category(DEBT_PAYMENT_CATEGORY)

        with self.db.unit_of_work():
            debt = self.db.get_debt(debt_id, for_update=True)
            if debt is None or debt.user_id != user_id:
                raise NotFoundError(debt_not_found(debt_id))
            self._require_account(user_id, account_id)
            if is_debt_settled(debt):
                raise ValidationError(
                    f"Debt {debt_id} is already fully paid "
                    f"({debt.installments_paid}/{debt.installments_total} installments)"
                )
            if debt.amount_paid + amount > debt.total_amount:
                raise ValidationError(
                    f"Payment of {amount} exceeds the remaining balance "
                    f"{debt.total_amount - debt.amount_paid} of debt {debt_id}"
                )

            installment = debt.installments_paid + 1
            transaction_id = self.db.create_transaction(
                unique_id=key,
                user_id=user_id,
                account_id=account_id,
                type=TransactionType.EXPENSE,
                amount=amount,
                date=date or _today(),
                category_id=category.id,
                description=f'Installment {installment}/{debt.installments_total} of "{debt.description}"',
                origin=TransactionOrigin.INSTALLMENT_PAYMENT,
                origin_id=debt_id,
            )
            self.db.update_debt_payment(
                debt_id,
                amount_paid=debt.amount_paid + amount,
                installments_paid=installment,
                expected_version=debt.version,
            )

        logger.info(
            "ledger.installment.committed",
            user_id=user_id,
            debt_id=debt_id,
            account_id=account_id,
            transaction_id=transaction_id,
            amount=str(amount),
            installment=installment,
        )
        return InstallmentPaymentResult(
            debt=self._reload(self.db.get_debt(debt_id), debt_id),
            transaction=self._reload(self.db.get_transaction(transaction_id), transaction_id),
        )

    def _claim_key(self, idempotency_key: Optional[str]) -> str:
        if idempotency_key is None:
            return new_unique_id()
        if self.db.transaction_exists(idempotency_key):
            logger.warning("ledger.duplicate_operation", idempotency_key=idempotency_key)
            raise DuplicateOperationError(duplicate_unique_id(idempotency_key))
        return idempotency_key

    def _system_category(self, name: str) -> Category:
        category = self.db.get_category_by_name(name, user_id=None)
        if category is None:
            raise NotFoundError(f"System category '{name}' is missing; initialize the database first")
        return category

    def _require_account(self, user_id: str, account_id: int) -> None:
        account = self.db.get_account(account_id)
        if account is None or account.user_id != user_id:
            raise NotFoundError(account_not_found(account_id))

    @staticmethod
    def _reload(entity, entity_id: int):
        if entity is None:
            raise ConsistencyError(f"Record {entity_id} disappeared right after it was written")
        return entity


def _today() -> date:
    return date.today()
