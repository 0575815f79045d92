"""Category management commands."""

import click

from finledger.cli.account_resolution import resolve_category_or_exit
from finledger.cli.error_handling import handle_domain_error
from finledger.cli.input_parsing import parse_amount_or_exit
from finledger.domain.category import CategoryService
from finledger.domain.errors import DomainError
from finledger.utils.money import format_money


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List shared categories and your own, with monthly budgets."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories(ctx.obj["user"])
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        scope = "shared" if cat.is_global else "own"
        budget = f" | Budget: {format_money(cat.budget)}" if cat.budget else ""
        click.echo(f"ID: {cat.id:3d} | {cat.name:20s} | {scope}{budget}")


@category_group.command("create")
@click.argument("name")
@click.option("--budget", help="Monthly budget limit (e.g., 400.00)")
@click.pass_context
def create_category(ctx, name: str, budget: str | None):
    """Create a category of your own."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    limit = None
    if budget is not None:
        limit = parse_amount_or_exit(ctx, budget)

    try:
        category_id = service.create_category(name=name, user_id=ctx.obj["user"], budget=limit)
        click.echo(f"Created category '{name.strip()}' (ID: {category_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("set-budget")
@click.argument("category")
@click.argument("amount", required=False)
@click.option("--clear", is_flag=True, help="Remove the budget instead")
@click.pass_context
def set_budget(ctx, category: str, amount: str | None, clear: bool):
    """Set or clear the monthly budget of one of your categories.

    Examples:
        finledger category set-budget Groceries 400
        finledger category set-budget Groceries --clear
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    if clear == (amount is not None):
        click.echo("Error: Give either an AMOUNT or --clear.", err=True)
        ctx.exit(1)

    limit = None
    if amount is not None:
        limit = parse_amount_or_exit(ctx, amount)

    category_obj = resolve_category_or_exit(ctx, service, category)
    try:
        service.set_budget(ctx.obj["user"], category_obj.id, limit)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if limit is None:
        click.echo(f"Cleared budget for '{category_obj.name}'")
    else:
        click.echo(f"Set budget for '{category_obj.name}' to {format_money(limit)}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
