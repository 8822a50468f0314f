"""Main CLI entry point."""

import logging

import click
from continuum.database.factories import create_sqlite_database

# Import and register all commands at module level
from continuum.cli.commands import (
    subscription,
    asset,
    warranty,
    dashboard,
    calendar_cmd,
    backup,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class ClickEchoHandler(logging.Handler):
    """Logging handler that writes through click to the current stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(level: str) -> None:
    """Route continuum log records to stderr at the given level."""
    logger = logging.getLogger("continuum")
    for handler in list(logger.handlers):
        if isinstance(handler, ClickEchoHandler):
            logger.removeHandler(handler)
    handler = ClickEchoHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CONTINUUM_DB_PATH environment variable)",
    envvar="CONTINUUM_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="CONTINUUM_LOG_LEVEL",
    help="Logging verbosity (overrides CONTINUUM_LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Continuum - Track subscriptions, assets and warranties.

    Keep recurring costs, the value of things you own and product warranties
    in one local database, with JSON backup and restore.
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
        ctx.call_on_close(db.disconnect)


# Register all commands
subscription.register_commands(cli)
asset.register_commands(cli)
warranty.register_commands(cli)
dashboard.register_commands(cli)
calendar_cmd.register_commands(cli)
backup.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
