"""CLI helpers for parsing amount and date arguments."""

from datetime import date
from decimal import Decimal

import click

from finledger.utils.amount_parser import parse_amount
from finledger.utils.date_parser import parse_date


def parse_amount_or_exit(ctx: click.Context, value: str) -> Decimal:
    """Parse an amount argument, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def parse_date_or_exit(ctx: click.Context, value: str, label: str = "date format") -> date:
    """Parse a date argument (absolute or relative), or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_optional_date_or_exit(ctx: click.Context, value: str | None, label: str = "date format") -> date | None:
    """Like parse_date_or_exit, but an omitted option stays None."""
    if value is None:
        return None
    return parse_date_or_exit(ctx, value, label)
