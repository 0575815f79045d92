"""Add transaction command."""

import click

from finledger.cli.account_resolution import resolve_account_or_exit, resolve_category_or_exit
from finledger.cli.error_handling import handle_domain_error
from finledger.cli.input_parsing import parse_amount_or_exit, parse_date_or_exit
from finledger.domain.account import AccountService
from finledger.domain.category import CategoryService
from finledger.domain.debt import DebtService, is_installment_purchase
from finledger.domain.entities import TransactionType
from finledger.domain.errors import DomainError
from finledger.domain.transaction import TransactionService
from finledger.utils.money import format_money


@click.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--amount", required=True, help="Transaction amount, without sign (e.g., 123.45)")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    default=TransactionType.EXPENSE.value,
    show_default=True,
    help="Income or expense",
)
@click.option("--category", help="Category name (required for expenses)")
@click.option("--description", help="Transaction description")
@click.option("--payment-method", help="Payment method (e.g., 'cash', 'debit card', 'credit card')")
@click.option(
    "--installments",
    type=click.IntRange(min=1),
    default=1,
    help="Number of installments for a credit card purchase",
)
@click.option("--unique-id", help="Unique transaction ID (auto-generated if not provided)")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    date: str,
    amount: str,
    txn_type: str,
    category: str | None,
    description: str | None,
    payment_method: str | None,
    installments: int,
    unique_id: str | None,
):
    """Add a transaction manually.

    A credit card expense with more than one installment is recorded as a
    debt instead; pay it off with 'debt pay'.

    Examples:
        finledger add --account Checking --amount 54.20 --category Food --description "Groceries"
        finledger add --account Checking --amount 2500 --type income --category Salary
        finledger add --account Checking --amount 900 --category Shopping --payment-method "credit card" --installments 6
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)

    txn_date = parse_date_or_exit(ctx, date)
    txn_amount = parse_amount_or_exit(ctx, amount)

    type_ = TransactionType(txn_type.lower())
    account_id = resolve_account_or_exit(ctx, account_service, account)

    if is_installment_purchase(type_, payment_method, installments):
        label = description or f"Credit card purchase on {txn_date}"
        try:
            debt_id = DebtService(db).create_from_purchase(
                user_id, description=label, amount=txn_amount, installments=installments, purchase_date=txn_date
            )
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Recorded '{label}' as debt {debt_id}: {format_money(txn_amount)} in {installments} installments")
        return

    category_obj = resolve_category_or_exit(ctx, category_service, category) if category else None

    try:
        transaction_id = transaction_service.create_transaction(
            user_id,
            account_id=account_id,
            type=type_,
            amount=txn_amount,
            date=txn_date,
            category_id=category_obj.id if category_obj else None,
            description=description,
            payment_method=payment_method,
            unique_id=unique_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {format_money(txn_amount)} ({type_.value})")
    if description:
        click.echo(f"  Description: {description}")
    if category_obj:
        click.echo(f"  Category: {category_obj.name}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
