"""User management commands."""

import click
from cashcount.cli.error_handling import handle_domain_error
from cashcount.domain.user import UserService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("email")
@click.password_option(help="Password (prompted if omitted)")
@click.option("--rounds", type=int, default=10, show_default=True, help="bcrypt cost factor")
@click.pass_context
def create_user(ctx, email: str, password: str, rounds: int):
    """Register a user with EMAIL.

    Examples:
        cashcount user create alice@example.com
    """
    db = ctx.obj["db"]
    # Registration never signs tokens, so no secret is needed here
    service = UserService(db, secret="", bcrypt_rounds=rounds)

    try:
        profile = service.register(email, password)
        click.echo(f"Created user '{profile.email}' (ID: {profile.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    db = ctx.obj["db"]

    users = db.list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 60)
    for user in users:
        click.echo(f"ID: {user.id:3d} | {user.email}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
