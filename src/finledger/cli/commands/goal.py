"""Savings goal commands."""

import click

from finledger.cli.account_resolution import resolve_account_or_exit
from finledger.cli.error_handling import handle_domain_error
from finledger.cli.input_parsing import parse_amount_or_exit, parse_optional_date_or_exit
from finledger.domain.account import AccountService
from finledger.domain.errors import DomainError
from finledger.domain.goal import GoalService
from finledger.domain.ledger import LedgerService
from finledger.utils.money import format_money


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("create")
@click.argument("name")
@click.argument("target")
@click.option("--deadline", help="Target date (YYYY-MM-DD or relative like 'in 6 months')")
@click.pass_context
def create_goal(ctx, name: str, target: str, deadline: str | None):
    """Create a savings goal.

    Examples:
        finledger goal create "Vacation" 3000
        finledger goal create "Emergency fund" 10000 --deadline 2026-12-31
    """
    db = ctx.obj["db"]
    service = GoalService(db)

    target_amount = parse_amount_or_exit(ctx, target)

    deadline_date = parse_optional_date_or_exit(ctx, deadline)

    try:
        goal_id = service.create_goal(ctx.obj["user"], name, target_amount, deadline=deadline_date)
        click.echo(f"Created goal '{name.strip()}' (ID: {goal_id}) with target {format_money(target_amount)}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List savings goals with their progress."""
    db = ctx.obj["db"]
    service = GoalService(db)

    progress = service.list_progress(ctx.obj["user"])
    if not progress:
        click.echo("No savings goals found.")
        return

    click.echo("\nSavings goals:")
    click.echo("-" * 80)
    for item in progress:
        goal = item.goal
        status = "complete" if item.complete else f"{format_money(item.remaining)} to go"
        deadline = f" | Deadline: {goal.deadline}" if goal.deadline else ""
        click.echo(
            f"ID: {goal.id:3d} | {goal.name:20s} | {format_money(goal.current_amount)} / "
            f"{format_money(goal.target_amount)} ({item.percent:.0f}%) | {status}{deadline}"
        )


@goal_group.command("deposit")
@click.argument("goal_id", type=int)
@click.argument("amount")
@click.option("--account", required=True, help="Account the money comes from (name or ID)")
@click.option("--date", "deposit_date", help="Transaction date (defaults to today)")
@click.option("--idempotency-key", help="Token that makes retrying this deposit safe")
@click.pass_context
def deposit(ctx, goal_id: int, amount: str, account: str, deposit_date: str | None, idempotency_key: str | None):
    """Move money from an account into a savings goal.

    Examples:
        finledger goal deposit 1 250 --account Checking
    """
    db = ctx.obj["db"]
    service = LedgerService(db)

    deposit_amount = parse_amount_or_exit(ctx, amount)

    on = parse_optional_date_or_exit(ctx, deposit_date)

    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        result = service.deposit_to_goal(
            ctx.obj["user"],
            goal_id,
            deposit_amount,
            account_id,
            date=on,
            idempotency_key=idempotency_key,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    goal = result.goal
    click.echo(f"Deposited {format_money(deposit_amount)} into '{goal.name}' (transaction {result.transaction.id})")
    click.echo(f"  Saved: {format_money(goal.current_amount)} / {format_money(goal.target_amount)}")
    if goal.current_amount >= goal.target_amount:
        click.echo(f'Congratulations! You reached your savings goal "{goal.name}".')


@goal_group.command("correct")
@click.argument("goal_id", type=int)
@click.argument("amount")
@click.pass_context
def correct(ctx, goal_id: int, amount: str):
    """Overwrite the saved amount of a goal (e.g., after a withdrawal)."""
    db = ctx.obj["db"]
    service = GoalService(db)

    new_amount = parse_amount_or_exit(ctx, amount)

    try:
        goal = service.correct_amount(ctx.obj["user"], goal_id, new_amount)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Set saved amount of '{goal.name}' to {format_money(goal.current_amount)}")


@goal_group.command("delete")
@click.argument("goal_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_goal(ctx, goal_id: int, yes: bool):
    """Delete a savings goal that hasn't been reached."""
    db = ctx.obj["db"]
    service = GoalService(db)
    user_id = ctx.obj["user"]

    try:
        goal = service.get_goal(user_id, goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete goal '{goal.name}' (ID: {goal_id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_goal(user_id, goal_id)
        click.echo(f"Deleted goal '{goal.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
