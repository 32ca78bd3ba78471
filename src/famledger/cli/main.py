"""Main CLI entry point."""

import click
from famledger.config import (
    DB_PATH_ENV,
    DEFAULT_LOG_LEVEL,
    DEFAULT_USER_ID,
    LOG_LEVEL_ENV,
    USER_ENV,
)
from famledger.database.factories import create_sqlite_database
from famledger.logging_config import configure_logging

# Import and register all commands at module level
from famledger.cli.commands import (
    account,
    add,
    confirm,
    portfolio,
    transaction,
    usage,
    view,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FAMLEDGER_DB_PATH environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option(
    "--user",
    "user_id",
    default=DEFAULT_USER_ID,
    show_default=True,
    envvar=USER_ENV,
    help="Ledger owner; every user has separate accounts and transactions",
)
@click.option(
    "--log-level",
    default=DEFAULT_LOG_LEVEL,
    show_default=True,
    envvar=LOG_LEVEL_ENV,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Level of the JSON log lines written to stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str, log_level: str):
    """Famledger - double-entry family finance ledger.

    Record drafts of money movements, then confirm them into the ledger in
    atomic batches that keep every account balance reconciled.
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
        ctx.obj["user_id"] = user_id
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
confirm.register_commands(cli)
view.register_commands(cli)
usage.register_commands(cli)
portfolio.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
