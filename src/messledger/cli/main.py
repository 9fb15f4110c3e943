"""Main CLI entry point."""

import click
from messledger.config import get_settings
from messledger.database.factories import create_sqlite_database
from messledger.logger import setup_logging

# Import and register all commands at module level
from messledger.cli.commands import (
    member,
    expense,
    meal,
    guest,
    duty,
    manager,
    cooking,
    month,
    summary,
    bill,
    notify,
    serve,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides MESSLEDGER_DB_PATH environment variable)",
    envvar="MESSLEDGER_DB_PATH",
)
@click.option(
    "--as",
    "as_user",
    metavar="MEMBER",
    help="Act as a member (ID or user ID) instead of the administrator",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level for diagnostics on stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, as_user: str | None, log_level: str):
    """messledger - Shared mess management.

    Record members, meals, guest meals, expenses, market, manager and
    cooking duty, and settle each month's bill.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["settings"] = get_settings()
        ctx.obj["as_user"] = as_user


# Register all commands
member.register_commands(cli)
expense.register_commands(cli)
meal.register_commands(cli)
guest.register_commands(cli)
duty.register_commands(cli)
manager.register_commands(cli)
cooking.register_commands(cli)
month.register_commands(cli)
summary.register_commands(cli)
bill.register_commands(cli)
notify.register_commands(cli)
serve.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
