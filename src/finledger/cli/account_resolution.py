"""CLI helpers for resolving names given on the command line."""

from __future__ import annotations

import click

from finledger.cli.error_handling import handle_domain_error
from finledger.domain.account import AccountService
from finledger.domain.category import CategoryService
from finledger.domain.entities import Category
from finledger.domain.errors import DomainError
from finledger.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve account name or ID for the current user, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, ctx.obj["user"], account)
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def resolve_category_or_exit(
    ctx: click.Context, category_service: CategoryService, category: str
) -> Category:
    """Resolve a category name visible to the current user, or exit with a CLI error."""
    try:
        return category_service.require_category(category, ctx.obj["user"])
    except DomainError as exc:
        handle_domain_error(ctx, exc)
