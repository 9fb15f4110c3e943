"""Monthly bill commands."""

import click
from messledger.cli.context import get_actor, get_services
from messledger.cli.error_handling import handle_domain_error
from messledger.domain.errors import DomainError
from messledger.utils.month import parse_month


def _balance_text(balance) -> str:
    direction = "To Pay" if balance >= 0 else "To Receive"
    return f"{abs(round(balance))} {direction}"


@click.group()
def bill_group():
    """Compute and send the monthly bill."""
    pass


@bill_group.command("show")
@click.argument("month", metavar="MONTH")
@click.pass_context
def show_bill(ctx, month: str):
    """Compute the bill for MONTH from approved expenses and meals."""
    services = get_services(ctx)
    try:
        bill = services.bills.build_bill(get_actor(ctx), parse_month(month))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nBill for {bill.month}")
    click.echo("-" * 40)
    for name, amount in bill.shared_bills.items():
        click.echo(f"{name:12s} {amount:>12.2f}")
    click.echo(f"{'Per head':12s} {bill.per_head:>12.2f}")
    click.echo("-" * 40)
    click.echo(f"{'Market':12s} {bill.total_market:>12.2f}")
    click.echo(f"{'Rice':12s} {bill.rice:>12.2f}")
    click.echo(f"{'Guest adj.':12s} {bill.guest_income:>12.2f}")
    click.echo(f"{'Total meals':12s} {bill.total_meals:>12d}")
    click.echo(f"{'Meal charge':12s} {bill.meal_charge:>12.2f}")

    if not bill.members:
        return
    click.echo("")
    click.echo(
        f"{'Member':20s} | {'Meals':>7s} | {'Meal cost':>9s} | {'Fixed':>8s} | {'Guest':>7s} | "
        f"{'Market':>8s} | {'Deposit':>8s} | Balance"
    )
    click.echo("-" * 100)
    for line in bill.members:
        meals = f"{line.meals}" + (f"({line.effective_meals})" if line.below_minimum else "")
        click.echo(
            f"{line.member_name:20s} | {meals:>7s} | {line.meal_cost:>9.2f} | {line.fixed_cost:>8.2f} | "
            f"{line.guest_cost:>7.2f} | {line.market_expense:>8.2f} | {line.deposit:>8.2f} | "
            f"{_balance_text(line.balance)}"
        )


@bill_group.command("notify")
@click.argument("month", metavar="MONTH")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def notify_bill(ctx, month: str, yes: bool):
    """Send every member a payment notification for MONTH's balance."""
    services = get_services(ctx)
    actor = get_actor(ctx)
    try:
        bill = services.bills.build_bill(actor, parse_month(month))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not bill.members:
        click.echo("No members to notify.")
        return
    if not yes and not click.confirm(f"Send payment notifications to {len(bill.members)} members?"):
        click.echo("Cancelled.")
        return

    try:
        sent = services.notifications.send_payment_dues(actor, services.bills.payment_dues(bill))
        click.echo(f"Sent {sent} payment notification{'s' if sent != 1 else ''}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register bill commands with main CLI."""
    cli.add_command(bill_group, name="bill")
