"""Debt commands."""

import click

from finledger.cli.account_resolution import resolve_account_or_exit
from finledger.cli.error_handling import handle_domain_error
from finledger.cli.input_parsing import parse_amount_or_exit, parse_optional_date_or_exit
from finledger.domain.account import AccountService
from finledger.domain.debt import DEFAULT_DEBT_TYPE, DebtService
from finledger.domain.errors import DomainError
from finledger.domain.ledger import LedgerService
from finledger.domain.progress import nominal_installment
from finledger.utils.money import format_money


@click.group()
def debt_group():
    """Manage installment debts."""
    pass


@debt_group.command("create")
@click.argument("description")
@click.argument("total")
@click.option("--installments", type=int, required=True, help="Number of installments")
@click.option("--type", "debt_type", default=DEFAULT_DEBT_TYPE, show_default=True, help="Kind of debt")
@click.option("--start-date", help="Date of the first installment")
@click.pass_context
def create_debt(ctx, description: str, total: str, installments: int, debt_type: str, start_date: str | None):
    """Create a debt.

    Examples:
        finledger debt create "Laptop" 1200 --installments 12
        finledger debt create "Car loan" 15000 --installments 48 --type Loan
    """
    db = ctx.obj["db"]
    service = DebtService(db)

    total_amount = parse_amount_or_exit(ctx, total)

    start = parse_optional_date_or_exit(ctx, start_date)

    try:
        debt_id = service.create_debt(
            ctx.obj["user"],
            description,
            total_amount,
            installments,
            debt_type=debt_type,
            start_date=start,
        )
        click.echo(f"Created debt '{description.strip()}' (ID: {debt_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@debt_group.command("list")
@click.pass_context
def list_debts(ctx):
    """List debts with their repayment progress."""
    db = ctx.obj["db"]
    service = DebtService(db)
    user_id = ctx.obj["user"]

    progress = service.list_progress(user_id)
    if not progress:
        click.echo("No debts found.")
        return

    click.echo("\nDebts:")
    click.echo("-" * 90)
    for item in progress:
        debt = item.debt
        status = "paid off" if item.settled else f"{format_money(item.remaining)} left"
        click.echo(
            f"ID: {debt.id:3d} | {debt.description:20s} | {debt.debt_type:20s} | "
            f"{debt.installments_paid}/{debt.installments_total} installments "
            f"({item.percent:.0f}%) | {status}"
        )
    click.echo("-" * 90)
    click.echo(f"Total outstanding: {format_money(service.outstanding(user_id))}")


@debt_group.command("pay")
@click.argument("debt_id", type=int)
@click.argument("amount", required=False)
@click.option("--account", required=True, help="Account the payment comes from (name or ID)")
@click.option("--date", "payment_date", help="Transaction date (defaults to today)")
@click.option("--idempotency-key", help="Token that makes retrying this payment safe")
@click.pass_context
def pay(ctx, debt_id: int, amount: str | None, account: str, payment_date: str | None, idempotency_key: str | None):
    """Pay one installment of a debt.

    AMOUNT defaults to the nominal installment (total / installments).

    Examples:
        finledger debt pay 1 --account Checking
        finledger debt pay 1 150 --account Checking
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user"]

    try:
        debt = DebtService(db).get_debt(user_id, debt_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if amount is None:
        payment = nominal_installment(debt)
    else:
        payment = parse_amount_or_exit(ctx, amount)

    on = parse_optional_date_or_exit(ctx, payment_date)

    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        result = LedgerService(db).pay_installment(
            user_id, debt_id, payment, account_id, date=on, idempotency_key=idempotency_key
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    debt = result.debt
    click.echo(
        f"Paid {format_money(payment)} towards '{debt.description}' "
        f"(installment {debt.installments_paid}/{debt.installments_total}, transaction {result.transaction.id})"
    )
    click.echo(f"  Paid so far: {format_money(debt.amount_paid)} / {format_money(debt.total_amount)}")


@debt_group.command("delete")
@click.argument("debt_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_debt(ctx, debt_id: int, yes: bool):
    """Delete a debt that has no payments yet."""
    db = ctx.obj["db"]
    service = DebtService(db)
    user_id = ctx.obj["user"]

    try:
        debt = service.get_debt(user_id, debt_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete debt '{debt.description}' (ID: {debt_id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_debt(user_id, debt_id)
        click.echo(f"Deleted debt '{debt.description}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register debt commands with main CLI."""
    cli.add_command(debt_group, name="debt")
