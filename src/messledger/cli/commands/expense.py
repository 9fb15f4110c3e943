"""Expense commands."""

import click
from messledger.cli.context import get_actor, get_services
from messledger.cli.error_handling import handle_domain_error
from messledger.domain.entities import Expense, ExpenseCategory, ExpenseStatus
from messledger.domain.errors import DomainError
from messledger.utils.month import parse_month

CATEGORY_CHOICE = click.Choice([c.value for c in ExpenseCategory])
STATUS_CHOICE = click.Choice([s.value for s in ExpenseStatus])


def format_expense(expense: Expense) -> str:
    return (
        f"ID: {expense.id:4d} | {expense.date} | {expense.category.value:9s} | "
        f"{expense.amount:>9.2f} | {expense.status.value:8s} | Paid by: {expense.paid_by:8s} | "
        f"{expense.description}"
    )


@click.group()
def expense_group():
    """Record and approve shared expenses."""
    pass


@expense_group.command("add")
@click.argument("description", metavar="DESCRIPTION")
@click.argument("amount", metavar="AMOUNT")
@click.option("--category", "-c", type=CATEGORY_CHOICE, required=True, help="Expense category")
@click.option("--date", "-d", default="today", show_default=True, help="Expense date")
@click.option("--paid-by", help="Member who paid (defaults to admin, or yourself with --as)")
@click.option("--status", type=STATUS_CHOICE, help="Initial status (administrator only)")
@click.pass_context
def add_expense(ctx, description: str, amount: str, category: str, date: str, paid_by, status):
    """Record an expense.

    Examples:
        messledger expense add "Vegetables" 320 -c market --paid-by rahul
        messledger expense add "Gas cylinder" 1100 -c gas -d 2026-02-03
        messledger --as rahul expense add "Fish" 450 -c market
    """
    services = get_services(ctx)
    try:
        expense = services.expenses.create_expense(
            get_actor(ctx),
            description=description,
            amount=amount,
            category=category,
            date=date,
            paid_by=paid_by,
            status=status,
        )
        click.echo(f"Added {expense.status.value} expense {expense.id}: {expense.amount:.2f} for {expense.category.value}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("list")
@click.option("--month", "-m", help="Month (YYYY-MM, 'this month', 'last month')")
@click.option("--status", type=STATUS_CHOICE, help="Only this status")
@click.option("--paid-by", help="Only this payer (member or 'admin')")
@click.pass_context
def list_expenses(ctx, month, status, paid_by):
    """List expenses."""
    services = get_services(ctx)
    try:
        expenses = services.expenses.list_expenses(
            month=parse_month(month) if month else None,
            status=status,
            paid_by=paid_by,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo("\nExpenses:")
    click.echo("-" * 100)
    for expense in expenses:
        click.echo(format_expense(expense))
    total = sum(e.amount for e in expenses)
    click.echo("-" * 100)
    click.echo(f"Total: {total:.2f}")


@expense_group.command("update")
@click.argument("expense_id", type=int, metavar="EXPENSE_ID")
@click.option("--description", help="New description")
@click.option("--amount", help="New amount")
@click.option("--category", "-c", type=CATEGORY_CHOICE, help="New category")
@click.option("--date", "-d", help="New date")
@click.option("--paid-by", help="New payer")
@click.option("--status", type=STATUS_CHOICE, help="New status")
@click.pass_context
def update_expense(ctx, expense_id: int, description, amount, category, date, paid_by, status):
    """Update fields of an expense; omitted fields are kept."""
    services = get_services(ctx)
    try:
        expense = services.expenses.update_expense(
            get_actor(ctx),
            expense_id,
            description=description,
            amount=amount,
            category=category,
            date=date,
            paid_by=paid_by,
            status=status,
        )
        click.echo(f"Updated expense {expense.id}")
        click.echo(format_expense(expense))
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("approve")
@click.argument("expense_id", type=int, metavar="EXPENSE_ID")
@click.pass_context
def approve_expense(ctx, expense_id: int):
    """Approve an expense."""
    services = get_services(ctx)
    try:
        services.expenses.set_status(get_actor(ctx), expense_id, ExpenseStatus.APPROVED.value)
        click.echo(f"Approved expense {expense_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("reject")
@click.argument("expense_id", type=int, metavar="EXPENSE_ID")
@click.pass_context
def reject_expense(ctx, expense_id: int):
    """Reject an expense. Rejected expenses are excluded from every total."""
    services = get_services(ctx)
    try:
        services.expenses.set_status(get_actor(ctx), expense_id, ExpenseStatus.REJECTED.value)
        click.echo(f"Rejected expense {expense_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("approve-all")
@click.pass_context
def approve_all_expenses(ctx):
    """Approve every pending expense."""
    services = get_services(ctx)
    try:
        count = services.expenses.approve_all(get_actor(ctx))
        click.echo(f"Approved {count} expense{'s' if count != 1 else ''}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("delete")
@click.argument("expense_id", type=int, metavar="EXPENSE_ID")
@click.pass_context
def delete_expense(ctx, expense_id: int):
    """Delete an expense."""
    services = get_services(ctx)
    try:
        services.expenses.delete_expense(get_actor(ctx), expense_id)
        click.echo(f"Deleted expense {expense_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
