"""Initialize default categories."""

import click

from finledger.domain.category import CategoryService


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Create the default shared categories that don't exist yet."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    created = service.seed_defaults()
    if not created:
        click.echo("Default categories already exist.")
        return

    click.echo(f"Successfully created {len(created)} categories.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
