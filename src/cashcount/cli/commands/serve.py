"""HTTP server command."""

import dataclasses

import click
import uvicorn

from cashcount.config import Settings
from cashcount.logging_config import configure_logging
from cashcount.web.app import create_app


@click.command("serve")
@click.option("--host", envvar="CASHCOUNT_HOST", default="0.0.0.0", show_default=True)
@click.option("--port", envvar="CASHCOUNT_PORT", type=int, default=4000, show_default=True)
@click.option(
    "--jwt-secret",
    envvar="CASHCOUNT_JWT_SECRET",
    required=True,
    help="Secret used to sign bearer tokens",
)
@click.option(
    "--enforce-ownership/--no-enforce-ownership",
    envvar="CASHCOUNT_ENFORCE_OWNERSHIP",
    default=False,
    help="Require a token to list or delete statements and restrict both to the caller",
)
@click.pass_context
def serve(ctx, host: str, port: int, jwt_secret: str, enforce_ownership: bool):
    """Run the HTTP API."""
    db = ctx.obj["db"]
    settings = dataclasses.replace(
        Settings.from_env(),
        database_url=db.database_url,
        jwt_secret=jwt_secret,
        host=host,
        port=port,
        enforce_ownership=enforce_ownership,
    )
    configure_logging(settings.log_level)

    app = create_app(db, settings)
    click.echo(f"Server running on http://{host}:{port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
