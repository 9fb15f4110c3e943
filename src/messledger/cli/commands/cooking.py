"""Cooking rota commands."""

import click
from messledger.cli.context import get_actor, get_services
from messledger.cli.error_handling import handle_domain_error
from messledger.domain.errors import DomainError
from messledger.utils.month import parse_month


@click.group()
def cooking_group():
    """Manage the cooking rota."""
    pass


@cooking_group.command("assign")
@click.argument("date", metavar="DATE")
@click.argument("member", metavar="MEMBER")
@click.pass_context
def assign_cook(ctx, date: str, member: str):
    """Record that MEMBER cooks on DATE."""
    services = get_services(ctx)
    try:
        record = services.cooking.assign_cook(get_actor(ctx), date=date, member_key=member)
        click.echo(f"{record.member_name} cooks on {record.date} (ID: {record.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@cooking_group.command("list")
@click.option("--month", "-m", help="Only this month")
@click.option("--date", "-d", help="Only this date")
@click.pass_context
def list_cooks(ctx, month, date):
    """List cooking records, newest first."""
    services = get_services(ctx)
    try:
        if date is not None:
            records = services.cooking.records_for_date(date)
        else:
            records = services.cooking.list_records(month=parse_month(month) if month else None)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not records:
        click.echo("No cooking records found.")
        return

    click.echo("\nCooking:")
    click.echo("-" * 50)
    for record in records:
        click.echo(f"ID: {record.id:4d} | {record.date} | {record.member_name}")


@cooking_group.command("remove")
@click.argument("record_id", type=int, metavar="RECORD_ID")
@click.pass_context
def remove_cook(ctx, record_id: int):
    """Remove a cooking record."""
    services = get_services(ctx)
    try:
        services.cooking.remove_record(get_actor(ctx), record_id)
        click.echo(f"Removed cooking record {record_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register cooking commands with main CLI."""
    cli.add_command(cooking_group, name="cooking")
