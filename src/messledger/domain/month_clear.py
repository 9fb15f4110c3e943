"""Clearing a finished month's day-to-day records."""

import logging

from messledger.database.base import Database
from messledger.domain import errors
from messledger.domain.auth import require_admin
from messledger.domain.entities import Actor, MonthClearReport
from messledger.utils.month import is_month_key

logger = logging.getLogger(__name__)


class MonthClearService:
    """Preview and delete one month of meals, expenses and rota records.

    Members, settlement rows and notifications survive a clear.
    """

    def __init__(self, db: Database):
        self.db = db

    def _check_month(self, month: str) -> str:
        month = (month or "").strip()
        if not is_month_key(month):
            raise errors.ValidationError("Valid month (YYYY-MM) is required")
        return month

    def preview(self, actor: Actor, month: str) -> MonthClearReport:
        """Count what a clear of the month would delete."""
        require_admin(actor)
        month = self._check_month(month)
        return MonthClearReport(month=month, counts=self.db.count_month_records(month))

    def clear(self, actor: Actor, month: str) -> MonthClearReport:
        """Delete the month's records; returns what was deleted."""
        require_admin(actor)
        month = self._check_month(month)
        report = MonthClearReport(month=month, counts=self.db.clear_month(month))
        logger.info("Cleared %d record(s) for %s", report.total, month)
        return report
