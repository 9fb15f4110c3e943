"""Notification domain service."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Sequence

from messledger.database.base import Database
from messledger.domain import errors
from messledger.domain.auth import require_admin
from messledger.domain.entities import ADMIN_KEY, BROADCAST_KEY, Actor, Notification, PaymentDue
from messledger.domain.member import MemberService
from messledger.utils.member_resolver import member_reference_keys

logger = logging.getLogger(__name__)

PAYMENT_NOTIFICATION = "payment"


def payment_due_message(amount: Decimal) -> str:
    """Render the bulk payment message for a signed balance."""
    direction = "to pay" if amount >= 0 else "to receive"
    rounded = abs(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"Payment Due: ₹{rounded} {direction} for this month's mess expenses."


class NotificationService:
    """Service for member and admin notifications."""

    def __init__(self, db: Database, members: MemberService):
        self.db = db
        self.members = members

    def inbox_keys(self, actor: Actor) -> tuple[str, ...]:
        """Every target key whose notifications the actor may read."""
        if actor.is_admin:
            return (ADMIN_KEY, BROADCAST_KEY)
        member = self.members.require_member(actor.id)
        return member_reference_keys(member) + (BROADCAST_KEY,)

    def list_for(self, actor: Actor) -> list[Notification]:
        """List the actor's notifications plus broadcasts, newest first."""
        return self.db.list_notifications(self.inbox_keys(actor))

    def list_for_user(self, actor: Actor, user_id: str) -> list[Notification]:
        """List a member's notifications. Members may only read their own."""
        member = self.members.require_member(user_id)
        if not actor.is_admin and not member.matches(actor.id):
            raise errors.AuthorizationError(errors.own_records_only("notifications"))
        return self.db.list_notifications(member_reference_keys(member) + (BROADCAST_KEY,))

    def list_all(self, actor: Actor) -> list[Notification]:
        require_admin(actor)
        return self.db.list_notifications()

    def notify(
        self,
        user_id: str,
        message: str,
        type: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        payment_amount: Optional[Decimal] = None,
    ) -> int:
        """Deliver a notification on behalf of the system. Returns its ID."""
        notification_id = self.db.create_notification(
            user_id=user_id,
            message=message,
            type=type,
            details=details,
            payment_amount=payment_amount,
        )
        logger.info("Notified %s (%s): %s", user_id, type or "general", message)
        return notification_id

    def send(
        self,
        actor: Actor,
        user_id: str,
        message: str,
        type: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> Notification:
        """Send a notification.

        Administrators may address anyone (a member, 'admin' or 'all');
        members may only write to the administrator.
        """
        message = (message or "").strip()
        if not message:
            raise errors.ValidationError("Message is required")

        if user_id in (ADMIN_KEY, BROADCAST_KEY):
            target = user_id
        else:
            target = self.members.require_member(user_id).key
        if not actor.is_admin and target != ADMIN_KEY:
            raise errors.AuthorizationError(errors.admin_only())

        notification_id = self.notify(target, message, type=type, details=details)
        return self.get(notification_id)

    def send_payment_dues(self, actor: Actor, dues: Sequence[PaymentDue]) -> int:
        """Send one payment notification per member balance. Returns the count sent."""
        require_admin(actor)
        sent = 0
        for due in dues:
            member = self.members.require_member(due.user_id)
            self.notify(
                member.key,
                payment_due_message(due.amount),
                type=PAYMENT_NOTIFICATION,
                details={"memberName": due.member_name or member.name},
                payment_amount=due.amount,
            )
            sent += 1
        logger.info("Sent %d payment notification(s)", sent)
        return sent

    def get(self, notification_id: int) -> Notification:
        notification = self.db.get_notification(notification_id)
        if notification is None:
            raise errors.NotFoundError(errors.notification_not_found(notification_id))
        return notification

    def mark_all_read(self, actor: Actor) -> int:
        """Mark the actor's own notifications read. Broadcasts are left alone."""
        keys = tuple(key for key in self.inbox_keys(actor) if key != BROADCAST_KEY)
        return self.db.mark_notifications_read(keys)

    def update_flags(
        self,
        actor: Actor,
        notification_id: int,
        is_read: Optional[bool] = None,
        status: Optional[str] = None,
        is_paid: Optional[bool] = None,
    ) -> Notification:
        """Flip the read/paid flags or status. Nothing else is editable."""
        self._require_owner(actor, notification_id)
        self.db.update_notification_flags(notification_id, is_read=is_read, status=status, is_paid=is_paid)
        return self.get(notification_id)

    def mark_paid(self, actor: Actor, notification_id: int) -> Notification:
        """Mark a payment notification as settled."""
        notification = self._require_owner(actor, notification_id)
        if notification.type != PAYMENT_NOTIFICATION:
            raise errors.ValidationError(f"Notification {notification_id} is not a payment request")
        self.db.update_notification_flags(notification_id, is_read=True, is_paid=True)
        logger.info("Payment notification %s marked paid", notification_id)
        return self.get(notification_id)

    def delete(self, actor: Actor, notification_id: int) -> None:
        self._require_owner(actor, notification_id)
        self.db.delete_notification(notification_id)
        logger.info("Deleted notification %s", notification_id)

    def _require_owner(self, actor: Actor, notification_id: int) -> Notification:
        """Members own their direct notifications; broadcasts belong to the administrator."""
        notification = self.get(notification_id)
        if actor.is_admin:
            return notification
        if notification.user_id == BROADCAST_KEY or notification.user_id not in self.inbox_keys(actor):
            raise errors.AuthorizationError(errors.own_records_only("notifications"))
        return notification
