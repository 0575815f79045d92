"""Tests for the notification synthesizer."""

from datetime import date, datetime, timedelta, timezone

from finledger.domain.entities import Severity, Snapshot
from finledger.domain.notifications import (
    budget_overrun_notifications,
    completed_goal_notifications,
    synthesize_notifications,
    upcoming_payment_notifications,
)

TODAY = date(2024, 5, 10)


def test_completed_goals_only(make_goal):
    goals = [make_goal(1, "Car", "1000", "1000"), make_goal(2, "Trip", "500", "100")]
    [notification] = completed_goal_notifications(goals)

    assert notification.id == "goal-1"
    assert notification.severity == Severity.SUCCESS
    assert '"Car"' in notification.message


def test_horizon_boundary_is_inclusive(make_schedule):
    schedules = [
        make_schedule(1, "Rent", TODAY + timedelta(days=7)),
        make_schedule(2, "Gym", TODAY + timedelta(days=8)),
    ]
    notifications = upcoming_payment_notifications(schedules, TODAY)
    assert [n.id for n in notifications] == ["recurring-1"]
    assert notifications[0].message == 'Reminder: the payment "Rent" is due in 7 days.'
    assert notifications[0].severity == Severity.ALERT


def test_due_today_and_tomorrow_wording(make_schedule):
    schedules = [make_schedule(1, "Rent", TODAY), make_schedule(2, "Phone", TODAY + timedelta(days=1))]
    messages = [n.message for n in upcoming_payment_notifications(schedules, TODAY)]
    assert messages == [
        'Reminder: the payment "Rent" is due today.',
        'Reminder: the payment "Phone" is due tomorrow.',
    ]


def test_overdue_schedules_are_not_reminded(make_schedule):
    assert upcoming_payment_notifications([make_schedule(1, "Rent", TODAY - timedelta(days=1))], TODAY) == []


def test_finished_schedules_are_skipped(make_schedule):
    schedule = make_schedule(1, "Course", TODAY + timedelta(days=2), end_date=TODAY)
    assert upcoming_payment_notifications([schedule], TODAY) == []


def test_days_counted_from_utc_midnight(make_schedule):
    # 21:00 at UTC-05:00 on May 9 is already May 10 in UTC
    now = datetime(2024, 5, 9, 21, 0, tzinfo=timezone(timedelta(hours=-5)))
    [notification] = upcoming_payment_notifications([make_schedule(1, "Rent", TODAY)], now)
    assert notification.message.endswith("is due today.")


def test_custom_horizon(make_schedule):
    schedules = [make_schedule(1, "Insurance", TODAY + timedelta(days=20))]
    assert upcoming_payment_notifications(schedules, TODAY, horizon_days=30)
    assert not upcoming_payment_notifications(schedules, TODAY)


def test_budget_overrun_message(make_txn, make_category):
    categories = [make_category(3, "Food", budget="100")]
    transactions = [make_txn("150.5", TODAY, category_id=3)]
    [notification] = budget_overrun_notifications(categories, transactions, TODAY)

    assert notification.id == "budget-3"
    assert notification.message == (
        'You have exceeded your "Food" budget this month. (Spent: $150.50 / Limit: $100.00)'
    )


def test_synthesize_order_and_idempotence(make_goal, make_schedule, make_txn, make_category):
    snapshot = Snapshot(
        now=TODAY,
        categories=(make_category(3, "Food", budget="10"),),
        transactions=(make_txn("20", TODAY, category_id=3),),
        goals=(make_goal(1, "Car", "100", "100"),),
        recurring=(make_schedule(5, "Rent", TODAY),),
    )
    first = synthesize_notifications(snapshot)

    assert [n.id for n in first] == ["goal-1", "recurring-5", "budget-3"]
    assert synthesize_notifications(snapshot) == first


def test_empty_snapshot_has_no_notifications():
    assert synthesize_notifications(Snapshot(now=TODAY)) == []
