"""Meal commands."""

import click
from messledger.cli.context import get_actor, get_services
from messledger.cli.error_handling import handle_domain_error
from messledger.domain.entities import GuestMealType, MealTime, MealType
from messledger.domain.errors import DomainError
from messledger.utils.month import parse_month


@click.group()
def meal_group():
    """Record daily meals."""
    pass


@meal_group.command("add")
@click.argument("member", metavar="MEMBER")
@click.option("--date", "-d", default="today", show_default=True, help="Meal date")
@click.option(
    "--type",
    "meal_type",
    type=click.Choice([t.value for t in MealType]),
    default=MealType.LUNCH.value,
    show_default=True,
)
@click.option("--guest-type", type=click.Choice([t.value for t in GuestMealType]), help="Dish, for guest meals")
@click.option("--time", "meal_time", type=click.Choice([t.value for t in MealTime]), help="Meal time, for guest meals")
@click.pass_context
def add_meal(ctx, member: str, date: str, meal_type: str, guest_type, meal_time):
    """Record a meal for MEMBER.

    Examples:
        messledger meal add rahul --type dinner
        messledger meal add 3 -d 2026-02-14 --type guest --guest-type fish --time lunch
    """
    services = get_services(ctx)
    try:
        meal = services.meals.add_meal(
            get_actor(ctx),
            date=date,
            member_key=member,
            meal_type=meal_type,
            guest_meal_type=guest_type,
            meal_time=meal_time,
        )
        click.echo(f"Recorded {meal.meal_type.value} for {meal.member_name} on {meal.date} (ID: {meal.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@meal_group.command("list")
@click.option("--date", "-d", help="Only this date")
@click.option("--month", "-m", help="Only this month")
@click.option("--member", help="Only this member")
@click.pass_context
def list_meals(ctx, date, month, member):
    """List meals."""
    services = get_services(ctx)
    try:
        meals = services.meals.list_meals(
            date=date,
            month=parse_month(month) if month else None,
            member_key=member,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not meals:
        click.echo("No meals found.")
        return

    click.echo("\nMeals:")
    click.echo("-" * 70)
    for meal in meals:
        line = f"ID: {meal.id:4d} | {meal.date} | {meal.member_name:20s} | {meal.meal_type.value}"
        if meal.is_guest and meal.guest_meal_type is not None:
            line += f" ({meal.guest_meal_type.value})"
        click.echo(line)
    click.echo(f"\nTotal: {len(meals)} meal{'s' if len(meals) != 1 else ''}")


@meal_group.command("remove")
@click.argument("meal_id", type=int, required=False, metavar="[MEAL_ID]")
@click.option("--date", "-d", help="Meal date")
@click.option("--member", help="Member")
@click.option("--type", "meal_type", type=click.Choice([MealType.LUNCH.value, MealType.DINNER.value]))
@click.pass_context
def remove_meal(ctx, meal_id, date, member, meal_type):
    """Remove a meal by ID, or by --date, --member and --type."""
    services = get_services(ctx)
    try:
        services.meals.remove_meal(
            get_actor(ctx),
            meal_id=meal_id,
            date=date,
            member_key=member,
            meal_type=meal_type,
        )
        click.echo("Meal removed")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register meal commands with main CLI."""
    cli.add_command(meal_group, name="meal")
