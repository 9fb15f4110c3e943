"""Expense domain service."""

import logging
from decimal import Decimal
from typing import Any, Optional

from messledger.database.base import Database
from messledger.domain import errors
from messledger.domain.auth import require_admin
from messledger.domain.entities import (
    ADMIN_KEY,
    Actor,
    Expense,
    ExpenseCategory,
    ExpenseStatus,
)
from messledger.domain.member import MemberService
from messledger.domain.validation import choice, date_key, money
from messledger.utils.member_resolver import member_reference_keys

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for recording and approving shared expenses."""

    def __init__(self, db: Database, members: MemberService):
        """Initialize expense service.

        Args:
            db: Database instance
            members: Member service used to resolve payers
        """
        self.db = db
        self.members = members

    def list_expenses(
        self,
        month: Optional[str] = None,
        status: Optional[str] = None,
        paid_by: Optional[str] = None,
    ) -> list[Expense]:
        """List expenses, optionally by month, status and payer.

        A payer filter matches every stored form of the member's reference
        (canonical key, external id or name), or the literal 'admin'.
        """
        if status is not None:
            status = choice("status", status, ExpenseStatus)

        payer_keys = None
        if paid_by is not None:
            if paid_by == ADMIN_KEY:
                payer_keys = (ADMIN_KEY,)
            else:
                member = self.members.require_member(paid_by, by_name=True)
                payer_keys = member_reference_keys(member, include_name=True)

        return self.db.list_expenses(month=month, status=status, paid_by=payer_keys)

    def get_expense(self, expense_id: int) -> Expense:
        expense = self.db.get_expense(expense_id)
        if expense is None:
            raise errors.NotFoundError(errors.expense_not_found(expense_id))
        return expense

    def create_expense(
        self,
        actor: Actor,
        description: str,
        amount: Decimal | str,
        category: str,
        date: str,
        paid_by: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Expense:
        """Record an expense.

        Members always create pending expenses paid by themselves; they may
        not book an expense against the admin. Administrator entries default
        to 'approved' and to the admin as payer.

        Raises:
            ValidationError: If a field is missing or malformed
            NotFoundError: If the payer is not a known member
        """
        description = (description or "").strip()
        if not description:
            raise errors.ValidationError("Description is required")
        amount = money(amount, positive=True)
        category = choice("category", category, ExpenseCategory)
        date = date_key(date)

        if actor.is_admin:
            status = choice("status", status or ExpenseStatus.APPROVED.value, ExpenseStatus)
            if paid_by is None or paid_by == ADMIN_KEY:
                payer = ADMIN_KEY
            else:
                payer = self.members.resolve_member_key(paid_by)
        else:
            status = ExpenseStatus.PENDING.value
            payer = self.members.require_member(actor.id).key

        expense_id = self.db.create_expense(
            description=description,
            amount=amount,
            category=category,
            paid_by=payer,
            date=date,
            status=status,
        )
        logger.info("Created %s expense %s: %s %s by %s", status, expense_id, category, amount, payer)
        return self.get_expense(expense_id)

    def update_expense(self, actor: Actor, expense_id: int, **fields: Any) -> Expense:
        """Update the provided expense fields, leaving the rest untouched."""
        require_admin(actor)
        self.get_expense(expense_id)

        changes = {name: value for name, value in fields.items() if value is not None}
        if "description" in changes:
            changes["description"] = changes["description"].strip()
            if not changes["description"]:
                raise errors.ValidationError("Description is required")
        if "amount" in changes:
            changes["amount"] = money(changes["amount"], positive=True)
        if "category" in changes:
            changes["category"] = choice("category", changes["category"], ExpenseCategory)
        if "status" in changes:
            changes["status"] = choice("status", changes["status"], ExpenseStatus)
        if "date" in changes:
            changes["date"] = date_key(changes["date"])
        if "paid_by" in changes and changes["paid_by"] != ADMIN_KEY:
            changes["paid_by"] = self.members.resolve_member_key(changes["paid_by"])

        if changes:
            self.db.update_expense(expense_id, **changes)
            logger.info("Updated expense %s: %s", expense_id, ", ".join(sorted(changes)))
        return self.get_expense(expense_id)

    def set_status(self, actor: Actor, expense_id: int, status: str) -> Expense:
        """Approve or reject an expense."""
        return self.update_expense(actor, expense_id, status=status)

    def approve_all(self, actor: Actor) -> int:
        """Approve every pending expense. Returns the number approved."""
        require_admin(actor)
        count = self.db.approve_pending_expenses()
        logger.info("Approved %d pending expense(s)", count)
        return count

    def delete_expense(self, actor: Actor, expense_id: int) -> None:
        require_admin(actor)
        self.db.delete_expense(expense_id)
        logger.info("Deleted expense %s", expense_id)
