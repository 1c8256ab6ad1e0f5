"""Main CLI entry point."""

import click

from spendlog.database.factories import create_sqlite_storage
from spendlog.domain.store import ExpenseStore
from spendlog.log import configure_logging

# Import and register all commands at module level
from spendlog.cli.commands import add, view, edit, split, stats, share


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SPENDLOG_DB_PATH environment variable)",
    envvar="SPENDLOG_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug information to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Spendlog - Personal expense tracker.

    Record expenses, review them by day, week or month, split bills with
    others and email expense summaries.
    """
    ctx.ensure_object(dict)
    configure_logging("DEBUG" if verbose else None)

    # Open storage only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None and "store" not in ctx.obj:
        storage = create_sqlite_storage(database_path=db_path)
        storage.connect()
        storage.initialize_schema()
        ctx.obj["storage"] = storage
        ctx.obj["store"] = ExpenseStore(storage)
        ctx.call_on_close(storage.disconnect)


# Register all commands
add.register_commands(cli)
view.register_commands(cli)
edit.register_commands(cli)
split.register_commands(cli)
stats.register_commands(cli)
share.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
