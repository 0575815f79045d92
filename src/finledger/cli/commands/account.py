"""Account management commands."""

import click

from finledger.cli.account_resolution import resolve_account_or_exit
from finledger.cli.error_handling import handle_domain_error
from finledger.cli.input_parsing import parse_amount_or_exit
from finledger.domain.account import AccountService
from finledger.domain.errors import DomainError
from finledger.utils.money import format_money


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--initial-balance", default="0", help="Opening balance (e.g., 1500.00)")
@click.pass_context
def create_account(ctx, name: str, initial_balance: str):
    """Create a new account.

    Examples:
        finledger account create "Checking"
        finledger account create "Savings" --initial-balance 2500
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    balance = parse_amount_or_exit(ctx, initial_balance)

    try:
        account_id = service.create_account(ctx.obj["user"], name=name, initial_balance=balance)
        click.echo(f"Created account '{name}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List accounts with their current balance."""
    db = ctx.obj["db"]
    service = AccountService(db)
    user_id = ctx.obj["user"]

    accounts = service.list_accounts(user_id)
    if not accounts:
        click.echo("No accounts found.")
        return

    balances = service.get_balances(user_id)

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | Balance: {format_money(balances[acc.id]):>14s}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID. The account can only be deleted
    if it has no transactions.

    Examples:
        finledger account delete "Checking"
        finledger account delete 1 --yes
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(ctx.obj["user"], account_id)
        click.echo(f"Deleted account '{account_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
