"""Cooking duty domain service."""

import logging
from typing import Optional

from messledger.database.base import Database
from messledger.domain import errors
from messledger.domain.auth import require_admin
from messledger.domain.entities import Actor, CookingRecord
from messledger.domain.member import MemberService
from messledger.domain.notification import NotificationService
from messledger.domain.validation import date_key

logger = logging.getLogger(__name__)

COOKING_ASSIGNMENT = "cooking_assignment"


class CookingService:
    """Service for the cooking rota."""

    def __init__(self, db: Database, members: MemberService, notifications: NotificationService):
        self.db = db
        self.members = members
        self.notifications = notifications

    def list_records(self, month: Optional[str] = None) -> list[CookingRecord]:
        return self.db.list_cooking_records(month=month)

    def records_for_date(self, date: str) -> list[CookingRecord]:
        return self.db.list_cooking_records(date=date_key(date))

    def get_record(self, record_id: int) -> CookingRecord:
        record = self.db.get_cooking_record(record_id)
        if record is None:
            raise errors.NotFoundError(errors.cooking_record_not_found(record_id))
        return record

    def assign_cook(self, actor: Actor, date: str, member_key: str) -> CookingRecord:
        """Record that a member cooks on a date.

        The member is told about the assignment unless they made it.

        Raises:
            ConflictError: If the member already cooks on that date
        """
        require_admin(actor)
        date = date_key(date)
        member = self.members.require_member(member_key)

        record_id = self.db.create_cooking_record(member.key, member.name, date)
        logger.info("%s assigned cooking duty for %s", member.name, date)

        if not member.matches(actor.id):
            assigned_by = actor.name or actor.id
            self.notifications.notify(
                member.key,
                f"You have been assigned cooking duty for {date} by {assigned_by}",
                type=COOKING_ASSIGNMENT,
                details={"date": date, "assignedBy": assigned_by},
            )

        return self.get_record(record_id)

    def remove_record(self, actor: Actor, record_id: int) -> None:
        require_admin(actor)
        record = self.get_record(record_id)
        self.db.delete_cooking_record(record_id)
        logger.info("Removed cooking record %s (%s on %s)", record_id, record.member_name, record.date)
