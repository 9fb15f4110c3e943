"""Role checks shared by domain services."""

from messledger.domain import errors
from messledger.domain.entities import Actor, Member


def require_admin(actor: Actor) -> None:
    """Raise AuthorizationError unless the actor is an administrator."""
    if not actor.is_admin:
        raise errors.AuthorizationError(errors.admin_only())


def require_self_or_admin(actor: Actor, member: Member, what: str) -> None:
    """Allow administrators, or members acting on their own records.

    Args:
        actor: Caller
        member: Owner of the records being touched
        what: Record kind used in the error message (e.g. "meals")

    Raises:
        AuthorizationError: If a member targets someone else
    """
    if actor.is_admin:
        return
    if not member.matches(actor.id):
        raise errors.AuthorizationError(errors.own_records_only(what))
