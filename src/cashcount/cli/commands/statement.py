"""Statement commands."""

import click
from cashcount.cli.error_handling import handle_domain_error
from cashcount.domain.entities import StatementView
from cashcount.domain.statement import StatementService


def format_statement(view: StatementView) -> list[str]:
    """Render one statement and its breakdown as output lines."""
    s = view.statement
    lines = [
        f"ID: {s.id:4d} | {s.date} | {s.store_name:20s} | Total: {s.total_amount} | User: {s.owner_id}"
    ]
    if s.notes:
        lines.append(f"      Notes: {s.notes}")
    for line in view.lines:
        lines.append(f"      {line.value:>8} x {line.quantity:<5d} = {line.total}")
    return lines


@click.group()
def statement_group():
    """Inspect and manage statements."""
    pass


@statement_group.command("list")
@click.option("--user", "user_id", type=int, help="Only statements owned by this user ID")
@click.pass_context
def list_statements(ctx, user_id: int | None):
    """List statements, newest first, with their denomination breakdown."""
    db = ctx.obj["db"]
    service = StatementService(db)

    views = service.list_statements(owner_id=user_id)
    if not views:
        click.echo("No statements found.")
        return

    click.echo("\nStatements:")
    click.echo("-" * 80)
    for view in views:
        for line in format_statement(view):
            click.echo(line)


@statement_group.command("show")
@click.argument("statement_id", type=int)
@click.pass_context
def show_statement(ctx, statement_id: int):
    """Show one statement with its breakdown."""
    db = ctx.obj["db"]
    service = StatementService(db)

    try:
        view = service.get_statement_view(statement_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    for line in format_statement(view):
        click.echo(line)


@statement_group.command("delete")
@click.argument("statement_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_statement(ctx, statement_id: int, yes: bool):
    """Delete a statement and its breakdown lines."""
    db = ctx.obj["db"]
    service = StatementService(db)

    statement = service.get_statement(statement_id)
    if statement is None:
        click.echo(f"Error: Statement {statement_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete statement {statement_id} ({statement.store_name}, {statement.date})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_statement(statement_id)
        click.echo(f"Deleted statement {statement_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register statement commands with main CLI."""
    cli.add_command(statement_group, name="statement")
