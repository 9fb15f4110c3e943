"""Settlement ledger domain service.

One ``MonthlySummary`` row per (month, member) records what the
administrator entered about a member's settlement. Rows are created lazily
with pending/zero defaults and fully overwritten on every payment update.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from messledger.database.base import Database
from messledger.domain import errors
from messledger.domain.auth import require_admin
from messledger.domain.entities import (
    Actor,
    Member,
    MonthlySummary,
    PaymentStatus,
    PaymentUpdate,
)
from messledger.domain.member import MemberService
from messledger.domain.validation import choice, money
from messledger.utils.member_resolver import member_reference_keys

logger = logging.getLogger(__name__)


class SettlementService:
    """Service for the per-member monthly settlement rows."""

    def __init__(self, db: Database, members: MemberService):
        self.db = db
        self.members = members

    def ensure_settlement_rows(self, month: str, members: Sequence[Member]) -> int:
        """Insert a default row for every member that has none yet.

        Safe to call concurrently: a row inserted by another writer between
        the check and the insert is logged and skipped.

        Returns:
            Number of rows created
        """
        existing = {row.member_id for row in self.db.list_monthly_summaries(month)}
        created = 0
        for member in members:
            if existing.intersection(member_reference_keys(member)):
                continue
            try:
                self.db.create_monthly_summary(MonthlySummary.default(month, member))
            except errors.ConflictError as e:
                logger.warning("Skipped settlement row for %s in %s: %s", member.key, month, e)
                continue
            created += 1
        if created:
            logger.info("Created %d settlement row(s) for %s", created, month)
        return created

    def create_settlement_row(self, actor: Actor, month: str, member_key: str) -> MonthlySummary:
        """Explicitly create a member's default row.

        Raises:
            ConflictError: If the row already exists
        """
        require_admin(actor)
        member = self.members.require_member(member_key)
        if self.db.get_monthly_summary(month, member_reference_keys(member)) is not None:
            raise errors.ConflictError(errors.duplicate_settlement_row(month, member.key))

        row = MonthlySummary.default(month, member)
        row_id = self.db.create_monthly_summary(row)
        logger.info("Created settlement row for %s in %s", member.key, month)
        return replace(row, id=row_id)

    def get_settlement_row(self, month: str, member_key: str) -> Optional[MonthlySummary]:
        member = self.members.require_member(member_key)
        return self.db.get_monthly_summary(month, member_reference_keys(member))

    def record_payment(self, actor: Actor, month: str, payment: PaymentUpdate) -> MonthlySummary:
        """Record a member's settlement for a month.

        Every call replaces all financial fields; anything not supplied
        reverts to zero or empty.

        Raises:
            AuthorizationError: If the actor is not an administrator
            ValidationError: If member or status is missing or invalid
            NotFoundError: If the member does not exist
        """
        require_admin(actor)
        if not payment.member_id:
            raise errors.ValidationError("Member ID is required")
        if not payment.payment_status:
            raise errors.ValidationError("Payment status is required")
        status = choice("payment status", payment.payment_status, PaymentStatus)

        member = self.members.require_member(payment.member_id)
        # Legacy rows keyed by external id keep their key
        existing = self.db.get_monthly_summary(month, member_reference_keys(member))
        row_key = existing.member_id if existing is not None else member.key

        summary = MonthlySummary(
            id=None,
            month=month,
            member_id=row_key,
            member_name=payment.member_name or member.name,
            payment_status=PaymentStatus(status),
            amount_paid=money(payment.amount_paid or 0),
            submitted_amount=money(payment.submitted_amount or 0),
            received_amount=money(payment.received_amount or 0),
            deposit_balance=money(payment.deposit_balance or 0),
            deposit_date=payment.deposit_date or "",
            note=payment.note or "",
            updated_at=None,
        )
        saved = self.db.upsert_monthly_summary(summary)
        logger.info("Recorded %s payment for %s in %s", status, member.key, month)
        return saved
