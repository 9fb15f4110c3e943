"""Market duty domain service.

A date has at most one approved market duty. Members request dates
(``pending``); the administrator approves one request, which removes every
other record for that date, or assigns a member directly. Rejected
requests are deleted.
"""

import logging
from typing import Optional

from messledger.database.base import Database
from messledger.domain import errors
from messledger.domain.auth import require_admin, require_self_or_admin
from messledger.domain.entities import (
    ADMIN_KEY,
    Actor,
    DutyRequestType,
    DutyStatus,
    MarketDuty,
)
from messledger.domain.member import MemberService
from messledger.domain.notification import NotificationService
from messledger.domain.validation import date_key

logger = logging.getLogger(__name__)

MARKET_REQUEST = "market_request"
MARKET_APPROVED = "market_approved"
MARKET_REJECTED = "market_rejected"


class MarketDutyService:
    """Service for the market duty request/approval workflow."""

    def __init__(
        self,
        db: Database,
        members: MemberService,
        notifications: NotificationService,
        manager_target: str = ADMIN_KEY,
    ):
        """Initialize market duty service.

        Args:
            db: Database instance
            members: Member service
            notifications: Notification service used for request/approval alerts
            manager_target: Notification key that receives new requests
        """
        self.db = db
        self.members = members
        self.notifications = notifications
        self.manager_target = manager_target

    def list_duties(self, month: Optional[str] = None, date: Optional[str] = None) -> list[MarketDuty]:
        if date is not None:
            date = date_key(date)
        return self.db.list_market_duties(month=month, date=date)

    def get_duty(self, duty_id: int) -> MarketDuty:
        duty = self.db.get_market_duty(duty_id)
        if duty is None:
            raise errors.NotFoundError(errors.duty_not_found(duty_id))
        return duty

    def request_duty(self, actor: Actor, date: str, member_key: Optional[str] = None) -> MarketDuty:
        """Ask to do the market on a date.

        Raises:
            AuthorizationError: If a member requests on someone else's behalf
            ConflictError: If the member already has a record for the date
        """
        date = date_key(date)
        member = self.members.require_member(member_key or actor.id)
        require_self_or_admin(actor, member, "market requests")

        duty_id = self.db.create_market_duty(
            date=date,
            assigned_member_id=member.key,
            status=DutyStatus.PENDING.value,
            request_type=DutyRequestType.REQUEST.value,
        )
        logger.info("Market duty %s requested by %s for %s", duty_id, member.name, date)

        self.notifications.notify(
            self.manager_target,
            f"New Market Request for {date}",
            type=MARKET_REQUEST,
            details={"date": date, "requesterId": member.key},
        )
        return self.get_duty(duty_id)

    def assign_duty(self, actor: Actor, date: str, member_key: str) -> MarketDuty:
        """Assign a member directly, replacing every other record for the date."""
        require_admin(actor)
        date = date_key(date)
        member = self.members.require_member(member_key)

        duty_id = self.db.assign_market_duty(date, member.key)
        logger.info("Market duty on %s assigned to %s", date, member.name)
        return self.get_duty(duty_id)

    def approve(self, actor: Actor, duty_id: int) -> MarketDuty:
        """Approve a request; competing records and request alerts for the date go away.

        Raises:
            NotFoundError: If the record no longer exists, for example because
                a competing request for the same date was approved first
        """
        require_admin(actor)
        duty = self.get_duty(duty_id)

        self.db.approve_market_duty(duty_id)
        logger.info("Market duty %s on %s approved", duty_id, duty.date)

        self.notifications.notify(
            duty.assigned_member_id,
            f"Your market request for {duty.date} is APPROVED.",
            type=MARKET_APPROVED,
            details={"date": duty.date},
        )
        return self.get_duty(duty_id)

    def reject(self, actor: Actor, duty_id: int) -> None:
        """Reject (delete) a record.

        Members may withdraw their own pending requests. The assignee is
        told when an administrator rejects their request.
        """
        duty = self.get_duty(duty_id)
        if not actor.is_admin:
            member = self.members.require_member(actor.id)
            if not member.matches(duty.assigned_member_id):
                raise errors.AuthorizationError(errors.own_records_only("market requests"))
            if duty.status != DutyStatus.PENDING:
                raise errors.AuthorizationError(errors.admin_only())

        self.db.delete_market_duty(duty_id)
        logger.info("Market duty %s on %s rejected", duty_id, duty.date)

        if actor.is_admin and duty.assigned_member_id != actor.id:
            self.notifications.notify(
                duty.assigned_member_id,
                f"Your market request for {duty.date} was REJECTED. Please choose another date.",
                type=MARKET_REJECTED,
                details={"date": duty.date},
            )
