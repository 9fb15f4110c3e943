"""Market duty commands."""

import click
from messledger.cli.context import get_actor, get_services
from messledger.cli.error_handling import handle_domain_error
from messledger.domain.errors import DomainError
from messledger.utils.month import parse_month


@click.group()
def duty_group():
    """Request, assign and approve market duty."""
    pass


@duty_group.command("request")
@click.argument("date", metavar="DATE")
@click.option("--member", help="Member requesting (administrator only; defaults to yourself)")
@click.pass_context
def request_duty(ctx, date: str, member):
    """Ask to do the market on DATE.

    Examples:
        messledger --as rahul duty request 2026-02-14
    """
    services = get_services(ctx)
    try:
        duty = services.duties.request_duty(get_actor(ctx), date=date, member_key=member)
        click.echo(f"Requested market duty on {duty.date} (ID: {duty.id}); waiting for approval")
    except DomainError as e:
        handle_domain_error(ctx, e)


@duty_group.command("assign")
@click.argument("date", metavar="DATE")
@click.argument("member", metavar="MEMBER")
@click.pass_context
def assign_duty(ctx, date: str, member: str):
    """Assign MEMBER to the market on DATE, replacing other requests."""
    services = get_services(ctx)
    try:
        duty = services.duties.assign_duty(get_actor(ctx), date=date, member_key=member)
        click.echo(f"Assigned market duty on {duty.date} to member {duty.assigned_member_id} (ID: {duty.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@duty_group.command("approve")
@click.argument("duty_id", type=int, metavar="DUTY_ID")
@click.pass_context
def approve_duty(ctx, duty_id: int):
    """Approve a request; other requests for the same date are dropped."""
    services = get_services(ctx)
    try:
        duty = services.duties.approve(get_actor(ctx), duty_id)
        click.echo(f"Approved market duty {duty.id} on {duty.date}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@duty_group.command("reject")
@click.argument("duty_id", type=int, metavar="DUTY_ID")
@click.pass_context
def reject_duty(ctx, duty_id: int):
    """Reject (delete) a request."""
    services = get_services(ctx)
    try:
        services.duties.reject(get_actor(ctx), duty_id)
        click.echo(f"Rejected market duty {duty_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@duty_group.command("list")
@click.option("--month", "-m", help="Only this month")
@click.option("--date", "-d", help="Only this date")
@click.pass_context
def list_duties(ctx, month, date):
    """Show the market duty calendar."""
    services = get_services(ctx)
    try:
        duties = services.duties.list_duties(month=parse_month(month) if month else None, date=date)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not duties:
        click.echo("No market duties found.")
        return

    names = {m.key: m.name for m in services.members.list_members()}
    click.echo("\nMarket duty:")
    click.echo("-" * 70)
    for duty in duties:
        name = names.get(duty.assigned_member_id, duty.assigned_member_id)
        click.echo(
            f"ID: {duty.id:4d} | {duty.date} | {name:20s} | {duty.status.value:8s} | {duty.request_type.value}"
        )


def register_commands(cli):
    """Register market duty commands with main CLI."""
    cli.add_command(duty_group, name="duty")
