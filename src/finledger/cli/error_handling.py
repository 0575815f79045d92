"""CLI error handling helpers."""

import click
import structlog

from finledger.domain.errors import DomainError

logger = structlog.get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    logger.debug("cli.domain_error", error=error.__class__.__name__, detail=str(error))
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
