"""Notification commands."""

import click
from messledger.cli.context import get_actor, get_services
from messledger.cli.error_handling import handle_domain_error
from messledger.domain.errors import DomainError


@click.group()
def notify_group():
    """Send and read notifications."""
    pass


@notify_group.command("send")
@click.argument("target", metavar="TARGET")
@click.argument("message", metavar="MESSAGE")
@click.option("--type", "notification_type", help="Notification type tag")
@click.pass_context
def send_notification(ctx, target: str, message: str, notification_type):
    """Send MESSAGE to TARGET (a member, 'admin', or 'all').

    Examples:
        messledger notify send all "Gas cylinder arrives tomorrow"
        messledger notify send rahul "Please clear your dues" --type reminder
    """
    services = get_services(ctx)
    try:
        notification = services.notifications.send(
            get_actor(ctx), target, message, type=notification_type
        )
        click.echo(f"Sent notification {notification.id} to {notification.user_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@notify_group.command("list")
@click.option("--member", help="Show this member's inbox (administrator only)")
@click.option("--all", "show_all", is_flag=True, help="Show every notification (administrator only)")
@click.pass_context
def list_notifications(ctx, member, show_all: bool):
    """Show your notifications, newest first."""
    services = get_services(ctx)
    actor = get_actor(ctx)
    try:
        if show_all:
            notifications = services.notifications.list_all(actor)
        elif member is not None:
            notifications = services.notifications.list_for_user(actor, member)
        else:
            notifications = services.notifications.list_for(actor)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not notifications:
        click.echo("No notifications.")
        return

    for n in notifications:
        flags = " " if n.is_read else "*"
        if n.payment_amount is not None:
            flags += " [paid]" if n.is_paid else " [unpaid]"
        click.echo(f"{flags} ID: {n.id:4d} | {n.date} | {n.user_id:6s} | {n.type or '-':18s} | {n.message}")


@notify_group.command("read-all")
@click.pass_context
def mark_all_read(ctx):
    """Mark all your notifications as read."""
    services = get_services(ctx)
    try:
        count = services.notifications.mark_all_read(get_actor(ctx))
        click.echo(f"Marked {count} notification{'s' if count != 1 else ''} as read")
    except DomainError as e:
        handle_domain_error(ctx, e)


@notify_group.command("mark-paid")
@click.argument("notification_id", type=int, metavar="NOTIFICATION_ID")
@click.pass_context
def mark_paid(ctx, notification_id: int):
    """Mark a payment notification as paid."""
    services = get_services(ctx)
    try:
        services.notifications.mark_paid(get_actor(ctx), notification_id)
        click.echo(f"Marked notification {notification_id} as paid")
    except DomainError as e:
        handle_domain_error(ctx, e)


@notify_group.command("delete")
@click.argument("notification_id", type=int, metavar="NOTIFICATION_ID")
@click.pass_context
def delete_notification(ctx, notification_id: int):
    """Delete a notification."""
    services = get_services(ctx)
    try:
        services.notifications.delete(get_actor(ctx), notification_id)
        click.echo(f"Deleted notification {notification_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register notification commands with main CLI."""
    cli.add_command(notify_group, name="notify")
