"""Denomination catalog commands."""

import click
from cashcount.cli.error_handling import handle_domain_error
from cashcount.domain.denomination import DEFAULT_DENOMINATIONS, DenominationService
from cashcount.utils.amount_parser import parse_amount


@click.group()
def denomination_group():
    """Manage the denomination catalog."""
    pass


@denomination_group.command("list")
@click.pass_context
def list_denominations(ctx):
    """List all denominations, highest value first."""
    db = ctx.obj["db"]
    service = DenominationService(db)

    denominations = service.list_all()
    if not denominations:
        click.echo("No denominations found. Run 'init-denominations' to create the default catalog.")
        return

    click.echo("\nDenominations:")
    click.echo("-" * 30)
    for d in denominations:
        click.echo(f"ID: {d.id:3d} | Value: {d.value}")


@denomination_group.command("add")
@click.argument("value")
@click.option("--id", "denomination_id", type=int, help="Explicit denomination ID")
@click.pass_context
def add_denomination(ctx, value: str, denomination_id: int | None):
    """Add a denomination with VALUE to the catalog.

    Examples:
        cashcount denomination add 500
        cashcount denomination add 0.50 --id 11
    """
    db = ctx.obj["db"]
    service = DenominationService(db)

    try:
        parsed = parse_amount(value)
        new_id = service.add_denomination(parsed, denomination_id=denomination_id)
        click.echo(f"Added denomination {parsed} (ID: {new_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.command("init-denominations")
@click.option("--force", is_flag=True, help="Replace the existing catalog (refused while statements use it)")
@click.pass_context
def init_denominations(ctx, force: bool):
    """Initialize database with the default denomination catalog."""
    db = ctx.obj["db"]
    service = DenominationService(db)

    if service.list_all() and not force:
        click.echo("Denominations already exist. Use --force to overwrite.")
        return

    try:
        created = service.seed_defaults(force=force)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    values = ", ".join(str(v) for v in DEFAULT_DENOMINATIONS)
    click.echo(f"Successfully created {created} denominations: {values}")


def register_commands(cli):
    """Register denomination commands with main CLI."""
    cli.add_command(denomination_group, name="denomination")
    cli.add_command(init_denominations)
