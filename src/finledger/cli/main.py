"""Main CLI entry point."""

import click
import structlog

from finledger.database.factories import create_sqlite_database
from finledger.log import LOG_LEVELS, configure_logging

# Import and register all commands at module level
from finledger.cli.commands import (
    account,
    category,
    init_categories,
    add,
    transaction,
    goal,
    debt,
    recurring,
    insights,
)

logger = structlog.get_logger(__name__)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINLEDGER_DB_PATH environment variable)",
    envvar="FINLEDGER_DB_PATH",
)
@click.option(
    "--user",
    default="local",
    show_default=True,
    help="User whose data is read and written",
    envvar="FINLEDGER_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log verbosity (logs go to stderr)",
    envvar="FINLEDGER_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user: str, log_level: str):
    """Finledger - personal finance ledger and insights.

    Record income and expenses, save towards goals, pay off installment
    debts and get monthly insight into where the money goes.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user"] = user
        ctx.call_on_close(db.disconnect)
        logger.debug("cli.started", command=ctx.invoked_subcommand, user=user)


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
init_categories.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
goal.register_commands(cli)
debt.register_commands(cli)
recurring.register_commands(cli)
insights.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
