"""Transaction management commands."""

import click

from finledger.cli.account_resolution import resolve_account_or_exit, resolve_category_or_exit
from finledger.cli.error_handling import handle_domain_error
from finledger.cli.input_parsing import parse_amount_or_exit, parse_optional_date_or_exit
from finledger.domain.account import AccountService
from finledger.domain.analytics import UNCATEGORIZED, period_totals
from finledger.domain.category import CategoryService
from finledger.domain.entities import TransactionType
from finledger.domain.errors import DomainError
from finledger.domain.transaction import TransactionService
from finledger.utils.money import format_money


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("edit")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--amount", help="Transaction amount, without sign (e.g., 123.45)")
@click.option("--description", help="Transaction description")
@click.option("--category", help="Category name")
@click.option("--payment-method", help="Payment method")
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    date: str | None,
    amount: str | None,
    description: str | None,
    category: str | None,
    payment_method: str | None,
) -> None:
    """Edit a transaction you entered manually.

    Updates only the fields that are provided. Goal deposits and
    installment payments cannot be edited.

    Examples:
        finledger transaction edit 1 --amount 75.00
        finledger transaction edit 1 --account "Checking" --category Food
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account is not None else None
    txn_date = parse_optional_date_or_exit(ctx, date)
    txn_amount = parse_amount_or_exit(ctx, amount) if amount is not None else None
    category_id = resolve_category_or_exit(ctx, CategoryService(db), category).id if category is not None else None

    try:
        transaction_service.update_transaction(
            ctx.obj["user"],
            transaction_id,
            account_id=account_id,
            category_id=category_id,
            amount=txn_amount,
            description=description,
            date=txn_date,
            payment_method=payment_method,
        )
        click.echo(f"Updated transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--category", help="Category name")
@click.option("--account", help="Account name or ID")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    help="Only income or only expenses",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all fields including unique_id and origin")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    account: str | None,
    txn_type: str | None,
    verbose: bool,
):
    """View transactions with optional filters.

    Account can be specified by name or ID.
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user"]
    service = TransactionService(db)
    category_service = CategoryService(db)
    account_service = AccountService(db)

    start = parse_optional_date_or_exit(ctx, start_date, "start date")
    end = parse_optional_date_or_exit(ctx, end_date, "end date")

    account_id = resolve_account_or_exit(ctx, account_service, account) if account else None
    category_id = resolve_category_or_exit(ctx, category_service, category).id if category else None

    transactions = service.list_transactions(
        user_id,
        start_date=start,
        end_date=end,
        account_id=account_id,
        category_id=category_id,
        type=TransactionType(txn_type.lower()) if txn_type else None,
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    # Get account and category names for display
    accounts = {acc.id: acc.name for acc in account_service.list_accounts(user_id)}
    categories = {cat.id: cat.name for cat in category_service.list_categories(user_id)}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.date}")
            click.echo(f"  Amount: {format_money(txn.amount)} ({txn.type.value})")
            click.echo(f"  Account: {accounts.get(txn.account_id, 'Unknown')} (ID: {txn.account_id})")
            click.echo(f"  Category: {categories.get(txn.category_id, UNCATEGORIZED)}")
            if txn.description:
                click.echo(f"  Description: {txn.description}")
            if txn.payment_method:
                click.echo(f"  Payment method: {txn.payment_method}")
            click.echo(f"  Unique ID: {txn.unique_id}")
            origin = txn.origin.value if txn.origin_id is None else f"{txn.origin.value} #{txn.origin_id}"
            click.echo(f"  Origin: {origin}")
            click.echo("-" * 100)
    else:
        click.echo("-" * 100)
        click.echo(
            f"{'ID':<6} {'Date':<12} {'Amount':>12}  {'Account':<18} {'Category':<18} {'Description':<30}"
        )
        click.echo("-" * 100)
        for txn in transactions:
            amount_str = format_money(txn.amount if txn.type == TransactionType.INCOME else -txn.amount)
            click.echo(
                f"{txn.id:<6} {str(txn.date):<12} {amount_str:>12}  "
                f"{accounts.get(txn.account_id, 'Unknown')[:18]:<18} "
                f"{categories.get(txn.category_id, UNCATEGORIZED)[:18]:<18} {(txn.description or '')[:30]:<30}"
            )

    # Show totals
    income, spent, net = period_totals(transactions)
    click.echo("-" * 100)
    click.echo(
        f"TOTAL  Expenses: {format_money(spent)} | Income: {format_money(income)} | "
        f"Net: {format_money(net)} | Count: {len(transactions)}"
    )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction you entered manually.

    Examples:
        finledger transaction delete 1
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user"]
    transaction_service = TransactionService(db)

    try:
        txn = transaction_service.get_transaction(user_id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    # Confirm deletion
    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id} ({format_money(txn.amount)})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        transaction_service.delete_transaction(user_id, transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
