"""Month maintenance commands."""

import click
from messledger.cli.context import get_actor, get_services
from messledger.cli.error_handling import handle_domain_error
from messledger.domain.entities import MonthClearReport
from messledger.domain.errors import DomainError
from messledger.utils.month import parse_month


@click.group()
def month_group():
    """Preview or clear a month's records."""
    pass


def _print_counts(report: MonthClearReport) -> None:
    for name, count in report.counts.items():
        click.echo(f"  {name.replace('_', ' '):16s} {count:6d}")
    click.echo(f"  {'total':16s} {report.total:6d}")


@month_group.command("preview")
@click.argument("month", metavar="MONTH")
@click.pass_context
def preview_month(ctx, month: str):
    """Show how many records a clear of MONTH would delete."""
    services = get_services(ctx)
    try:
        report = services.month_clear.preview(get_actor(ctx), parse_month(month))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Records for {report.month}:")
    _print_counts(report)


@month_group.command("clear")
@click.argument("month", metavar="MONTH")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_month(ctx, month: str, yes: bool):
    """Delete MONTH's meals, guest meals, expenses and rota records.

    Members, settlement rows and notifications are kept.
    """
    services = get_services(ctx)
    actor = get_actor(ctx)
    try:
        preview = services.month_clear.preview(actor, parse_month(month))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if preview.total == 0:
        click.echo(f"Nothing to clear for {preview.month}.")
        return
    _print_counts(preview)
    if not yes and not click.confirm(f"Delete {preview.total} records for {preview.month}?"):
        click.echo("Cancelled.")
        return

    try:
        report = services.month_clear.clear(actor, preview.month)
        click.echo(f"Cleared {report.total} records for {report.month}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register month commands with main CLI."""
    cli.add_command(month_group, name="month")
