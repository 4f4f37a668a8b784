"""Main CLI entry point."""

import logging

import click
from ledgerimport.database.factories import create_sqlite_ledger

# Import and register all commands at module level
from ledgerimport.cli.commands import (
    account,
    association,
    entries,
    import_cmd,
)


def configure_logging(verbose: int) -> None:
    """Send log records to stderr; -v for INFO, -vv for DEBUG.

    Without -v, Python's last-resort handler still prints warnings and errors.
    """
    if not verbose:
        return
    level = logging.DEBUG if verbose >= 2 else logging.INFO
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("ledgerimport").setLevel(level)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to ledger database file (overrides LEDGERIMPORT_DB_PATH environment variable)",
    envvar="LEDGERIMPORT_DB_PATH",
)
@click.option("-v", "--verbose", count=True, help="Show progress (-v) or debug details (-vv)")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: int):
    """Ledgerimport - Bank statement to journal entry importer.

    Turns bank statement exports into balanced double-entry journal entries,
    learning which ledger account each transaction label belongs to.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Open the ledger only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_ledger(database_path=db_path)
        store.connect()
        store.initialize_schema()
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
account.register_commands(cli)
association.register_commands(cli)
import_cmd.register_commands(cli)
entries.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
