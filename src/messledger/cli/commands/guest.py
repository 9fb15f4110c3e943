"""Guest meal commands."""

import click
from messledger.cli.context import get_actor, get_services
from messledger.cli.error_handling import handle_domain_error
from messledger.domain.entities import GuestMealType, MealTime
from messledger.domain.errors import DomainError
from messledger.utils.month import parse_month


@click.group()
def guest_group():
    """Book meals for guests."""
    pass


@guest_group.command("add")
@click.argument("member", metavar="MEMBER")
@click.argument("guest_type", type=click.Choice([t.value for t in GuestMealType]), metavar="DISH")
@click.option(
    "--time",
    "meal_time",
    type=click.Choice([t.value for t in MealTime]),
    default=MealTime.LUNCH.value,
    show_default=True,
)
@click.option("--date", "-d", default="today", show_default=True, help="Meal date")
@click.pass_context
def add_guest_meal(ctx, member: str, guest_type: str, meal_time: str, date: str):
    """Book a guest meal charged to MEMBER.

    DISH is one of fish, egg, veg or meat.

    Examples:
        messledger guest add rahul fish
        messledger guest add 2 meat --time dinner -d yesterday
    """
    services = get_services(ctx)
    try:
        guest_meal = services.guest_meals.add_guest_meal(
            get_actor(ctx),
            date=date,
            member_key=member,
            guest_meal_type=guest_type,
            meal_time=meal_time,
        )
        click.echo(
            f"Booked {guest_meal.guest_meal_type.value} {guest_meal.meal_time.value} for "
            f"{guest_meal.member_name}'s guest on {guest_meal.date} (ID: {guest_meal.id})"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@guest_group.command("list")
@click.option("--date", "-d", help="Only this date")
@click.option("--month", "-m", help="Only this month")
@click.option("--member", help="Only this member")
@click.pass_context
def list_guest_meals(ctx, date, month, member):
    """List guest meals."""
    services = get_services(ctx)
    try:
        guest_meals = services.guest_meals.list_guest_meals(
            date=date,
            month=parse_month(month) if month else None,
            member_key=member,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not guest_meals:
        click.echo("No guest meals found.")
        return

    click.echo("\nGuest meals:")
    click.echo("-" * 70)
    for g in guest_meals:
        click.echo(
            f"ID: {g.id:4d} | {g.date} | {g.member_name:20s} | {g.guest_meal_type.value:5s} | {g.meal_time.value}"
        )


@guest_group.command("remove")
@click.argument("guest_meal_id", type=int, metavar="GUEST_MEAL_ID")
@click.pass_context
def remove_guest_meal(ctx, guest_meal_id: int):
    """Cancel a guest meal."""
    services = get_services(ctx)
    try:
        services.guest_meals.remove_guest_meal(get_actor(ctx), guest_meal_id)
        click.echo(f"Removed guest meal {guest_meal_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register guest meal commands with main CLI."""
    cli.add_command(guest_group, name="guest")
