"""CLI helpers for building services and resolving the acting user."""

from __future__ import annotations

import click

from messledger.domain.entities import Actor, Role
from messledger.domain.errors import DomainError
from messledger.domain.services import Services, build_services


def get_services(ctx: click.Context) -> Services:
    """Return the service bundle for the command's database, building it once."""
    obj = ctx.find_root().obj
    if "services" not in obj:
        obj["services"] = build_services(obj["db"], settings=obj.get("settings"))
    return obj["services"]


def get_actor(ctx: click.Context) -> Actor:
    """Resolve who the command runs as, or exit with a CLI error.

    Commands run as the administrator unless ``--as`` names a member.
    """
    obj = ctx.find_root().obj
    as_user = obj.get("as_user")
    if as_user is None:
        return Actor.admin()

    try:
        member = get_services(ctx).members.require_member(as_user)
    except DomainError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
    return Actor(id=member.key, role=member.role or Role.MEMBER, name=member.name)
