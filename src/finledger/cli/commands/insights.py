"""Insight, budget and notification commands."""

from datetime import date

import click

from finledger.cli.input_parsing import parse_date_or_exit
from finledger.domain.entities import Severity
from finledger.domain.insights import InsightService
from finledger.domain.notifications import DEFAULT_HORIZON_DAYS
from finledger.utils.money import format_money

_SEVERITY_LABELS = {
    Severity.ALERT: "!",
    Severity.SUCCESS: "*",
    Severity.INFO: "-",
}


def _reference_date(ctx, as_of: str | None) -> date:
    """Evaluation date: --as-of if given, otherwise today."""
    if as_of is None:
        return date.today()
    return parse_date_or_exit(ctx, as_of)


as_of_option = click.option("--as-of", help="Evaluate as of this date instead of today")


@click.command("insights")
@as_of_option
@click.pass_context
def insights(ctx, as_of: str | None):
    """Monthly spending insight: comparison, top categories, anomalies, cash flow."""
    db = ctx.obj["db"]
    now = _reference_date(ctx, as_of)
    report = InsightService(db).report(ctx.obj["user"], now)

    comparison = report.comparison
    click.echo(f"\nSpending this month: {format_money(comparison.current)}")
    click.echo(f"Spending last month: {format_money(comparison.previous)}")
    if comparison.previous:
        direction = "more" if comparison.percent_change >= 0 else "less"
        click.echo(f"You spent {abs(comparison.percent_change):.1f}% {direction} than last month.")

    click.echo("\nTop categories this month:")
    if not report.top_categories:
        click.echo("  No expenses this month.")
    for item in report.top_categories:
        click.echo(f"  {item.category:25s} {format_money(item.amount):>14s}")

    click.echo("\nUnusual spending:")
    if not report.anomalies:
        click.echo("  Nothing unusual.")
    for anomaly in report.anomalies:
        click.echo(
            f"  {anomaly.category}: {format_money(anomaly.current)} this month, "
            f"{anomaly.percent_increase}% above the average of {format_money(anomaly.average)}"
        )

    click.echo("\nCash flow:")
    for month in report.cash_flow:
        click.echo(
            f"  {month.label}  income {format_money(month.income):>12s}  "
            f"expenses {format_money(month.expenses):>12s}  net {format_money(month.net):>12s}"
        )

    if report.notifications:
        click.echo("\nNotifications:")
        for notification in report.notifications:
            click.echo(f"  {_SEVERITY_LABELS[notification.severity]} {notification.message}")


@click.command("budgets")
@as_of_option
@click.pass_context
def budgets(ctx, as_of: str | None):
    """Budget status for the current month."""
    db = ctx.obj["db"]
    now = _reference_date(ctx, as_of)
    statuses = InsightService(db).budgets(ctx.obj["user"], now)

    if not statuses:
        click.echo("No budgets set. Use 'category set-budget' to add one.")
        return

    click.echo(f"\nBudgets for {now:%B %Y}:")
    click.echo("-" * 70)
    for status in statuses:
        flag = "EXCEEDED" if status.exceeded else f"{format_money(status.remaining)} left"
        click.echo(
            f"{status.category:20s} {format_money(status.spent):>12s} / {format_money(status.limit)} | {flag}"
        )


@click.command("distribution")
@click.option("--month", help="Only count expenses in the month of this date")
@click.pass_context
def distribution(ctx, month: str | None):
    """Share of spending per category, all time or for one month."""
    db = ctx.obj["db"]
    month_date = parse_date_or_exit(ctx, month) if month is not None else None
    totals = InsightService(db).distribution(ctx.obj["user"], month_date)

    if not totals:
        click.echo("No expenses found.")
        return

    overall = sum(item.amount for item in totals)
    heading = f"{month_date:%B %Y}" if month_date else "all time"
    click.echo(f"\nSpending by category ({heading}):")
    click.echo("-" * 60)
    for item in totals:
        share = item.amount / overall * 100
        click.echo(f"{item.category:25s} {format_money(item.amount):>14s} {share:6.1f}%")
    click.echo("-" * 60)
    click.echo(f"{'Total':25s} {format_money(overall):>14s}")


@click.command("notifications")
@as_of_option
@click.option(
    "--horizon",
    type=click.IntRange(min=0),
    default=DEFAULT_HORIZON_DAYS,
    show_default=True,
    help="Days ahead to look for due recurring payments",
    envvar="FINLEDGER_HORIZON_DAYS",
)
@click.pass_context
def notifications(ctx, as_of: str | None, horizon: int):
    """Reached goals, upcoming payments and exceeded budgets."""
    db = ctx.obj["db"]
    now = _reference_date(ctx, as_of)
    items = InsightService(db).notifications(ctx.obj["user"], now, horizon_days=horizon)

    if not items:
        click.echo("No notifications.")
        return

    for notification in items:
        click.echo(f"{_SEVERITY_LABELS[notification.severity]} {notification.message}")


def register_commands(cli):
    """Register insight commands with main CLI."""
    cli.add_command(insights)
    cli.add_command(budgets)
    cli.add_command(distribution)
    cli.add_command(notifications)
