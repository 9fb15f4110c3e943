"""Member management commands."""

import click
from messledger.cli.context import get_actor, get_services
from messledger.cli.error_handling import handle_domain_error
from messledger.domain.auth import require_admin
from messledger.domain.entities import ADMIN_KEY, Role
from messledger.domain.errors import DomainError
from messledger.utils.month import parse_month


@click.group()
def member_group():
    """Manage mess members."""
    pass


@member_group.command("add")
@click.argument("user_id", metavar="USER_ID")
@click.argument("name", metavar="NAME")
@click.option("--deposit", default="0", help="Opening deposit")
@click.option("--email", help="Email address")
@click.option("--mobile", help="Mobile number")
@click.option("--joined", help="Joining date")
@click.option("--dob", help="Date of birth")
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.MEMBER.value,
    show_default=True,
)
@click.pass_context
def add_member(ctx, user_id: str, name: str, deposit: str, email, mobile, joined, dob, role: str):
    """Add a member.

    USER_ID is the external login identifier and must be unique.

    Examples:
        messledger member add rahul "Rahul Das"
        messledger member add priya "Priya Sen" --deposit 2000 --mobile 9800000000
    """
    services = get_services(ctx)
    try:
        member = services.members.create_member(
            get_actor(ctx),
            user_id=user_id,
            name=name,
            role=role,
            deposit=deposit,
            email=email,
            mobile=mobile,
            joined_at=joined,
            date_of_birth=dob,
        )
        click.echo(f"Added member '{member.name}' (ID: {member.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@member_group.command("list")
@click.option("--month", help="Count meals only in this month (YYYY-MM, 'this month', ...)")
@click.pass_context
def list_members(ctx, month: str | None):
    """List members with meal counts and deposits."""
    services = get_services(ctx)
    overview = services.members.member_overview(month=parse_month(month) if month else None)
    if not overview:
        click.echo("No members found.")
        return

    click.echo("\nMembers:")
    click.echo("-" * 70)
    for line in overview:
        click.echo(
            f"ID: {line.member_id:>4} | {line.name:20s} | User: {line.user_id:12s} | "
            f"Meals: {line.total_meals:3d} | Deposit: {line.deposit:>9.2f}"
        )


@member_group.command("update")
@click.argument("member", metavar="MEMBER")
@click.option("--name", help="New display name")
@click.option("--email", help="New email address")
@click.option("--mobile", help="New mobile number")
@click.option("--deposit", help="New deposit")
@click.option("--dob", help="New date of birth")
@click.pass_context
def update_member(ctx, member: str, name, email, mobile, deposit, dob):
    """Update a member's profile.

    MEMBER can be a member ID or user ID.
    """
    fields = {
        "name": name,
        "email": email,
        "mobile": mobile,
        "deposit": deposit,
        "date_of_birth": dob,
    }
    fields = {key: value for key, value in fields.items() if value is not None}
    if not fields:
        click.echo("Error: Nothing to update", err=True)
        ctx.exit(1)

    services = get_services(ctx)
    try:
        updated = services.members.update_member(get_actor(ctx), member, **fields)
        click.echo(f"Updated member '{updated.name}' (ID: {updated.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@member_group.command("delete")
@click.argument("member", metavar="MEMBER")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_member(ctx, member: str, yes: bool):
    """Delete a member. Their meals and expenses are kept."""
    services = get_services(ctx)
    try:
        target = services.members.require_member(member)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not yes and not click.confirm(f"Are you sure you want to delete member '{target.name}' (ID: {target.id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        services.members.delete_member(get_actor(ctx), target.key)
        click.echo(f"Deleted member '{target.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@member_group.command("token")
@click.argument("member", metavar="MEMBER")
@click.pass_context
def issue_token(ctx, member: str):
    """Issue an API bearer token.

    MEMBER is a member ID or user ID, or 'admin' for the administrator.
    """
    from messledger.api.security import create_access_token

    try:
        require_admin(get_actor(ctx))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    settings = ctx.obj["settings"]
    if member == ADMIN_KEY:
        token = create_access_token(ADMIN_KEY, Role.ADMIN.value, "Admin", settings=settings)
    else:
        try:
            target = get_services(ctx).members.require_member(member)
        except DomainError as e:
            handle_domain_error(ctx, e)
            return
        role = (target.role or Role.MEMBER).value
        token = create_access_token(target.key, role, target.name, settings=settings)
    click.echo(token)


def register_commands(cli):
    """Register member commands with main CLI."""
    cli.add_command(member_group, name="member")
