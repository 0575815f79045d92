"""Snapshot loading and the insight report facade."""

from datetime import date, datetime
from typing import Optional

from finledger.database.base import Database
from finledger.domain.analytics import category_totals, monthly_cash_flow, monthly_comparison, top_categories
from finledger.domain.anomalies import detect_unusual_spending
from finledger.domain.budget import budget_statuses
from finledger.domain.entities import BudgetStatus, CategoryAmount, InsightReport, Notification, Snapshot
from finledger.domain.notifications import DEFAULT_HORIZON_DAYS, synthesize_notifications


class InsightService:
    """Builds snapshots of a user's data and evaluates the analytics over them."""

    def __init__(self, db: Database):
        self.db = db

    def build_snapshot(self, user_id: str, now: datetime | date) -> Snapshot:
        """Load everything the analytics need for one user.

        Transactions are ordered oldest first so ranking ties resolve the
        same way on every evaluation.
        """
        transactions = sorted(self.db.list_transactions(user_id), key=lambda t: (t.date, t.id))
        return Snapshot(
            now=now,
            accounts=tuple(self.db.list_accounts(user_id)),
            categories=tuple(self.db.list_categories(user_id)),
            transactions=tuple(transactions),
            goals=tuple(self.db.list_goals(user_id)),
            debts=tuple(self.db.list_debts(user_id)),
            recurring=tuple(self.db.list_recurring(user_id)),
        )

    def report(
        self,
        user_id: str,
        now: datetime | date,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
        snapshot: Optional[Snapshot] = None,
    ) -> InsightReport:
        """Evaluate the full insight dashboard for ``now``."""
        snapshot = snapshot or self.build_snapshot(user_id, now)
        transactions = snapshot.transactions
        categories = snapshot.categories
        return InsightReport(
            comparison=monthly_comparison(transactions, now),
            top_categories=tuple(top_categories(transactions, categories, now)),
            anomalies=tuple(detect_unusual_spending(transactions, categories, now)),
            cash_flow=tuple(monthly_cash_flow(transactions, now)),
            budgets=tuple(budget_statuses(categories, transactions, now)),
            notifications=tuple(synthesize_notifications(snapshot, horizon_days)),
        )

    def distribution(self, user_id: str, month: Optional[datetime | date] = None) -> list[CategoryAmount]:
        """Expense totals per category, largest first; all time unless ``month`` is given."""
        transactions = sorted(self.db.list_transactions(user_id), key=lambda t: (t.date, t.id))
        totals = category_totals(transactions, self.db.list_categories(user_id), now=month)
        return sorted(totals, key=lambda item: item.amount, reverse=True)

    def budgets(self, user_id: str, now: datetime | date) -> list[BudgetStatus]:
        return budget_statuses(self.db.list_categories(user_id), self.db.list_transactions(user_id), now)

    def notifications(
        self, user_id: str, now: datetime | date, horizon_days: int = DEFAULT_HORIZON_DAYS
    ) -> list[Notification]:
        return synthesize_notifications(self.build_snapshot(user_id, now), horizon_days)
