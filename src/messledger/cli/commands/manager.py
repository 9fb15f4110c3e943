"""Manager rota commands."""

import click
from messledger.cli.context import get_actor, get_services
from messledger.cli.error_handling import handle_domain_error
from messledger.domain.errors import DomainError
from messledger.utils.month import parse_month


@click.group()
def manager_group():
    """Manage the daily manager rota."""
    pass


@manager_group.command("assign")
@click.argument("date", metavar="DATE")
@click.argument("member", metavar="MEMBER")
@click.pass_context
def assign_manager(ctx, date: str, member: str):
    """Make MEMBER the manager for DATE."""
    services = get_services(ctx)
    try:
        record = services.managers.assign_manager(get_actor(ctx), date=date, member_key=member)
        click.echo(f"{record.member_name} is manager on {record.date} (ID: {record.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@manager_group.command("list")
@click.option("--month", "-m", help="Only this month")
@click.option("--date", "-d", help="Only this date")
@click.pass_context
def list_managers(ctx, month, date):
    """List manager records, newest first."""
    services = get_services(ctx)
    try:
        if date is not None:
            records = services.managers.records_for_date(date)
        else:
            records = services.managers.list_records(month=parse_month(month) if month else None)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not records:
        click.echo("No manager records found.")
        return

    click.echo("\nManagers:")
    click.echo("-" * 50)
    for record in records:
        click.echo(f"ID: {record.id:4d} | {record.date} | {record.member_name}")


@manager_group.command("remove")
@click.argument("record_id", type=int, metavar="RECORD_ID")
@click.pass_context
def remove_manager(ctx, record_id: int):
    """Remove a manager record."""
    services = get_services(ctx)
    try:
        services.managers.remove_record(get_actor(ctx), record_id)
        click.echo(f"Removed manager record {record_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register manager commands with main CLI."""
    cli.add_command(manager_group, name="manager")
