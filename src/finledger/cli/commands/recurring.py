"""Recurring schedule commands."""

from datetime import date

import click

from finledger.cli.account_resolution import resolve_account_or_exit, resolve_category_or_exit
from finledger.cli.error_handling import handle_domain_error
from finledger.cli.input_parsing import parse_amount_or_exit, parse_date_or_exit, parse_optional_date_or_exit
from finledger.domain.account import AccountService
from finledger.domain.category import CategoryService
from finledger.domain.entities import Frequency, TransactionType
from finledger.domain.errors import DomainError
from finledger.domain.recurring import RecurringService
from finledger.utils.money import format_money


@click.group()
def recurring_group():
    """Manage recurring payments and income."""
    pass


@recurring_group.command("create")
@click.argument("description")
@click.argument("amount")
@click.option(
    "--frequency",
    type=click.Choice([f.value for f in Frequency], case_sensitive=False),
    default=Frequency.MONTHLY.value,
    show_default=True,
)
@click.option("--start-date", required=True, help="First occurrence (YYYY-MM-DD or relative)")
@click.option("--end-date", help="Last possible occurrence")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    default=TransactionType.EXPENSE.value,
    show_default=True,
)
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category name")
@click.pass_context
def create_schedule(
    ctx,
    description: str,
    amount: str,
    frequency: str,
    start_date: str,
    end_date: str | None,
    txn_type: str,
    account: str | None,
    category: str | None,
):
    """Create a recurring schedule; you get reminded before each due date.

    Examples:
        finledger recurring create "Rent" 950 --start-date 2026-01-01
        finledger recurring create "Gym" 35 --frequency monthly --start-date today --account Checking
    """
    db = ctx.obj["db"]
    service = RecurringService(db)

    schedule_amount = parse_amount_or_exit(ctx, amount)

    start = parse_date_or_exit(ctx, start_date)
    end = parse_optional_date_or_exit(ctx, end_date)

    account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account else None
    category_id = resolve_category_or_exit(ctx, CategoryService(db), category).id if category else None

    try:
        schedule_id = service.create_schedule(
            ctx.obj["user"],
            description,
            schedule_amount,
            TransactionType(txn_type.lower()),
            Frequency(frequency.lower()),
            start,
            end_date=end,
            account_id=account_id,
            category_id=category_id,
            today=date.today(),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    schedule = service.get_schedule(ctx.obj["user"], schedule_id)
    click.echo(f"Created recurring '{schedule.description}' (ID: {schedule_id}), next due {schedule.next_date}")


@recurring_group.command("list")
@click.pass_context
def list_schedules(ctx):
    """List recurring schedules by next due date."""
    db = ctx.obj["db"]
    service = RecurringService(db)

    schedules = service.list_schedules(ctx.obj["user"])
    if not schedules:
        click.echo("No recurring schedules found.")
        return

    click.echo("\nRecurring:")
    click.echo("-" * 80)
    for s in schedules:
        until = f" | Until: {s.end_date}" if s.end_date else ""
        click.echo(
            f"ID: {s.id:3d} | {s.description:20s} | {format_money(s.amount):>12s} {s.type.value:7s} | "
            f"{s.frequency.value:7s} | Next: {s.next_date}{until}"
        )


@recurring_group.command("advance")
@click.argument("schedule_id", type=int)
@click.pass_context
def advance_schedule(ctx, schedule_id: int):
    """Mark the current occurrence as handled and move to the next one."""
    db = ctx.obj["db"]
    service = RecurringService(db)

    try:
        schedule = service.advance(ctx.obj["user"], schedule_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"'{schedule.description}' is next due {schedule.next_date}")


@recurring_group.command("delete")
@click.argument("schedule_id", type=int)
@click.pass_context
def delete_schedule(ctx, schedule_id: int):
    """Delete a recurring schedule."""
    db = ctx.obj["db"]
    service = RecurringService(db)

    try:
        service.delete_schedule(ctx.obj["user"], schedule_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted recurring schedule {schedule_id}")


def register_commands(cli):
    """Register recurring commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
