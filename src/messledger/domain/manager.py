"""Manager duty domain service."""

import logging
from typing import Optional

from messledger.database.base import Database
from messledger.domain import errors
from messledger.domain.auth import require_admin
from messledger.domain.entities import Actor, ManagerRecord
from messledger.domain.member import MemberService
from messledger.domain.notification import NotificationService
from messledger.domain.validation import date_key

logger = logging.getLogger(__name__)

MANAGER_ASSIGNMENT = "manager_assignment"


class ManagerService:
    """Service for the daily manager rota."""

    def __init__(self, db: Database, members: MemberService, notifications: NotificationService):
        self.db = db
        self.members = members
        self.notifications = notifications

    def list_records(self, month: Optional[str] = None) -> list[ManagerRecord]:
        """List manager records, newest first."""
        return self.db.list_manager_records(month=month, newest_first=True)

    def records_for_date(self, date: str) -> list[ManagerRecord]:
        return self.db.list_manager_records(date=date_key(date))

    def get_record(self, record_id: int) -> ManagerRecord:
        record = self.db.get_manager_record(record_id)
        if record is None:
            raise errors.NotFoundError(errors.manager_record_not_found(record_id))
        return record

    def assign_manager(self, actor: Actor, date: str, member_key: str) -> ManagerRecord:
        """Make a member the manager for a date.

        The member is notified unless they assigned themselves.

        Raises:
            ConflictError: If the member already manages that date
        """
        require_admin(actor)
        date = date_key(date)
        member = self.members.require_member(member_key)

        record_id = self.db.create_manager_record(member.key, member.name, date)
        logger.info("%s assigned as manager for %s", member.name, date)

        if not member.matches(actor.id):
            assigned_by = actor.name or actor.id
            self.notifications.notify(
                member.key,
                f"You have been assigned as Manager for {date} by {assigned_by}",
                type=MANAGER_ASSIGNMENT,
                details={"date": date, "assignedBy": assigned_by},
            )

        return self.get_record(record_id)

    def remove_record(self, actor: Actor, record_id: int) -> None:
        require_admin(actor)
        record = self.get_record(record_id)
        self.db.delete_manager_record(record_id)
        logger.info("Removed manager record %s (%s on %s)", record_id, record.member_name, record.date)
