"""Debt domain service.

Payments go through ``LedgerService.pay_installment``; this service creates,
lists and removes debts.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from finledger.database.base import Database
from finledger.domain.entities import Debt, TransactionType
from finledger.domain.errors import DependencyError, NotFoundError, ValidationError, debt_not_found
from finledger.domain.progress import DebtProgress, debt_progress, total_outstanding_debt
from finledger.domain.transaction import require_positive_amount

DEFAULT_DEBT_TYPE = "Installment purchase"
CREDIT_CARD = "credit card"


def is_installment_purchase(type: TransactionType, payment_method: Optional[str], installments: int) -> bool:
    """A credit-card expense split into several installments is tracked as a debt."""
    return (
        type == TransactionType.EXPENSE
        and payment_method is not None
        and payment_method.strip().lower() == CREDIT_CARD
        and installments > 1
    )


class DebtService:
    """Service for managing installment debts."""

    def __init__(self, db: Database):
        self.db = db

    def create_debt(
        self,
        user_id: str,
        description: str,
        total_amount: Decimal,
        installments_total: int,
        debt_type: str = DEFAULT_DEBT_TYPE,
        start_date: Optional[date] = None,
    ) -> int:
        """Create a debt with nothing paid.

        Raises:
            ValidationError: If the description is blank, the total not
                positive or the installment count below 1
        """
        description = description.strip()
        if not description:
            raise ValidationError("Debt description cannot be empty")
        total = require_positive_amount(total_amount)
        if installments_total < 1:
            raise ValidationError(f"A debt needs at least one installment (got {installments_total})")

        return self.db.create_debt(
            user_id=user_id,
            description=description,
            total_amount=total,
            installments_total=installments_total,
            debt_type=debt_type,
            start_date=start_date,
        )

    def get_debt(self, user_id: str, debt_id: int) -> Debt:
        """Get a debt owned by the user.

        Raises:
            NotFoundError: If missing or owned by someone else
        """
        debt = self.db.get_debt(debt_id)
        if debt is None or debt.user_id != user_id:
            raise NotFoundError(debt_not_found(debt_id))
        return debt

    def list_debts(self, user_id: str) -> list[Debt]:
        return self.db.list_debts(user_id)

    def list_progress(self, user_id: str) -> list[DebtProgress]:
        return [debt_progress(debt) for debt in self.db.list_debts(user_id)]

    def outstanding(self, user_id: str) -> Decimal:
        """Total still owed across the user's debts."""
        return total_outstanding_debt(self.db.list_debts(user_id))

    def create_from_purchase(
        self,
        user_id: str,
        description: str,
        amount: Decimal,
        installments: int,
        purchase_date: Optional[date] = None,
    ) -> int:
        """Record a credit-card purchase paid in installments as a debt."""
        return self.create_debt(
            user_id,
            description=description,
            total_amount=amount,
            installments_total=installments,
            debt_type="Credit card",
            start_date=purchase_date,
        )

    def delete_debt(self, user_id: str, debt_id: int) -> None:
        """Delete a debt that has no payments recorded.

        Raises:
            DependencyError: If installments were already paid
        """
        debt = self.get_debt(user_id, debt_id)
        if debt.installments_paid > 0:
            raise DependencyError(
                f"Debt {debt_id} has {debt.installments_paid} recorded payment"
                f"{'s' if debt.installments_paid != 1 else ''} and cannot be deleted"
            )
        self.db.delete_debt(debt_id)
