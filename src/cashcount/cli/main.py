"""Main CLI entry point."""

import click
from cashcount.database.factories import create_database, create_sqlite_database

# Import and register all commands at module level
from cashcount.cli.commands import (
    denomination,
    serve,
    statement,
    user,
)


@click.group()
@click.option(
    "--database-url",
    help="SQLAlchemy database URL (overrides CASHCOUNT_DATABASE_URL environment variable)",
    envvar="CASHCOUNT_DATABASE_URL",
)
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides CASHCOUNT_DB_PATH environment variable)",
    envvar="CASHCOUNT_DB_PATH",
)
@click.pass_context
def cli(ctx, database_url: str | None, db_path: str | None):
    """Cashcount - cash denomination statements.

    Keep a catalog of currency denominations, inspect the statements users
    submit, and serve the HTTP API the entry form talks to.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        if database_url:
            db = create_database(database_url)
        else:
            db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
denomination.register_commands(cli)
statement.register_commands(cli)
user.register_commands(cli)
serve.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
