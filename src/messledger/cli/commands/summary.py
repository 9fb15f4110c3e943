"""Monthly summary and settlement commands."""

import click
from messledger.cli.context import get_actor, get_services
from messledger.cli.error_handling import handle_domain_error
from messledger.domain.entities import ExpenseCategory, PaymentStatus, PaymentUpdate
from messledger.domain.errors import DomainError
from messledger.utils.month import parse_month

# Short column headers for the category breakdown
CATEGORY_LABELS = {
    ExpenseCategory.MARKET.value: "Market",
    ExpenseCategory.SPICES.value: "Spices",
    ExpenseCategory.RICE.value: "Rice",
    ExpenseCategory.OTHERS.value: "Others",
    ExpenseCategory.GAS.value: "Gas",
    ExpenseCategory.PAPER.value: "Paper",
    ExpenseCategory.WIFI.value: "Wifi",
    ExpenseCategory.ELECTRIC.value: "Elec",
    ExpenseCategory.DIDI.value: "Didi",
    ExpenseCategory.HOUSE_RENT.value: "Rent",
    ExpenseCategory.DEPOSIT.value: "Deposit",
}


@click.group()
def summary_group():
    """Monthly ledger, invoices and settlement."""
    pass


@summary_group.command("show")
@click.argument("month", metavar="MONTH")
@click.pass_context
def show_summary(ctx, month: str):
    """Show the ledger for MONTH (YYYY-MM, 'this month', 'last month').

    Missing settlement rows are created with pending status.
    """
    services = get_services(ctx)
    try:
        ledger = services.summaries.month_summary(get_actor(ctx), parse_month(month))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nSummary for {ledger.month}")
    if ledger.managers:
        click.echo(f"Managers: {', '.join(ledger.managers)}")
    if not ledger.members:
        click.echo("No members found.")
        return

    header = f"{'Member':20s} | " + " | ".join(f"{label:>8s}" for label in CATEGORY_LABELS.values())
    header += f" | {'Meals':>5s} | {'Guest':>5s} | {'Duty':>4s} | Status"
    click.echo(header)
    click.echo("-" * len(header))
    for line in ledger.members:
        amounts = " | ".join(f"{line.expenses[key]:>8.2f}" for key in CATEGORY_LABELS)
        click.echo(
            f"{line.member_name:20s} | {amounts} | {line.regular_meals:5d} | {line.guest_meals:5d} | "
            f"{line.duty_days:4d} | {line.payment_status.value}"
        )


@summary_group.command("pay")
@click.argument("month", metavar="MONTH")
@click.argument("member", metavar="MEMBER")
@click.option(
    "--status",
    type=click.Choice([s.value for s in PaymentStatus]),
    required=True,
    help="Settlement status",
)
@click.option("--paid", "amount_paid", default="0", help="Amount paid")
@click.option("--submitted", "submitted_amount", default="0", help="Amount submitted to the mess")
@click.option("--received", "received_amount", default="0", help="Amount received back")
@click.option("--deposit-balance", default="0", help="Deposit balance snapshot")
@click.option("--deposit-date", default="", help="Date of the deposit")
@click.option("--note", default="", help="Free-form note")
@click.pass_context
def record_payment(
    ctx,
    month: str,
    member: str,
    status: str,
    amount_paid: str,
    submitted_amount: str,
    received_amount: str,
    deposit_balance: str,
    deposit_date: str,
    note: str,
):
    """Record MEMBER's settlement for MONTH.

    Every call replaces the whole row: options left out are reset to zero
    or empty.

    Examples:
        messledger summary pay 2026-02 rahul --status clear --paid 1450
        messledger summary pay "last month" 3 --status partial --paid 500 --note "rest on 10th"
    """
    services = get_services(ctx)
    try:
        row = services.settlements.record_payment(
            get_actor(ctx),
            parse_month(month),
            PaymentUpdate(
                member_id=member,
                payment_status=status,
                amount_paid=amount_paid,
                submitted_amount=submitted_amount,
                received_amount=received_amount,
                deposit_balance=deposit_balance,
                deposit_date=deposit_date,
                note=note,
            ),
        )
        click.echo(
            f"Recorded {row.payment_status.value} for {row.member_name} in {row.month}: paid {row.amount_paid:.2f}"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@summary_group.command("admin-expenses")
@click.argument("month", metavar="MONTH")
@click.pass_context
def admin_expenses(ctx, month: str):
    """Show what the administrator paid in MONTH and the per-member share."""
    services = get_services(ctx)
    try:
        report = services.summaries.admin_expenses(get_actor(ctx), parse_month(month))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nAdmin expenses for {report.month} ({report.total_members} members)")
    if report.managers:
        click.echo(f"Managers: {', '.join(report.managers)}")
    if not report.admin_expenses:
        click.echo("No admin expenses found.")
        return

    click.echo("-" * 70)
    for expense in report.admin_expenses:
        click.echo(
            f"{expense.date} | {expense.category.value:9s} | {expense.amount:>9.2f} | "
            f"{expense.status.value:8s} | {expense.description}"
        )
    total = sum(e.amount for e in report.admin_expenses)
    click.echo("-" * 70)
    click.echo(f"Total: {total:.2f}")
    if report.total_members:
        click.echo(f"Per member: {total / report.total_members:.2f}")


@summary_group.command("invoice")
@click.argument("month", metavar="MONTH")
@click.argument("member", metavar="MEMBER")
@click.pass_context
def invoice(ctx, month: str, member: str):
    """Show MEMBER's invoice for MONTH."""
    services = get_services(ctx)
    try:
        inv = services.summaries.invoice(get_actor(ctx), parse_month(month), member)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nInvoice: {inv.member.name} ({inv.member.user_id}) - {inv.month}")
    click.echo(f"Members in mess: {inv.total_members}")
    if inv.managers:
        click.echo(f"Managers: {', '.join(inv.managers)}")

    click.echo("\nExpenses paid:")
    if not inv.member_expenses:
        click.echo("  none")
    for expense in inv.member_expenses:
        click.echo(f"  {expense.date} | {expense.category.value:9s} | {expense.amount:>9.2f} | {expense.status.value}")

    click.echo(f"\nMeals: {len(inv.regular_meals)}")
    click.echo(f"Guest meals: {len(inv.guest_meals)}")

    if inv.payment is None:
        click.echo("Payment: not recorded")
    else:
        click.echo(
            f"Payment: {inv.payment.payment_status.value} | paid {inv.payment.amount_paid:.2f} | "
            f"submitted {inv.payment.submitted_amount:.2f} | received {inv.payment.received_amount:.2f}"
        )
        if inv.payment.note:
            click.echo(f"Note: {inv.payment.note}")


@summary_group.command("totals")
@click.argument("month", metavar="MONTH")
@click.argument("member", metavar="MEMBER")
@click.pass_context
def totals(ctx, month: str, member: str):
    """Show MEMBER's approved spending per category in MONTH."""
    services = get_services(ctx)
    try:
        result = services.summaries.member_totals(get_actor(ctx), parse_month(month), member)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nApproved totals for {result.member_name} in {result.month}")
    click.echo("-" * 30)
    for key, label in CATEGORY_LABELS.items():
        click.echo(f"{label:10s} {result.expenses[key]:>12.2f}")
    click.echo("-" * 30)
    click.echo(f"{'Total':10s} {result.total:>12.2f}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary_group, name="summary")
