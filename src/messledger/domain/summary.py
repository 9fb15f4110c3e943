"""Monthly summary (aggregation) domain service.

Builds the per-member ledger for a month from every record store. Month
keys are matched as string prefixes, so a malformed key yields a ledger of
members with nothing in it rather than an error.

Historical rows reference members inconsistently: expenses may name the
payer by canonical key, external user id or display name; meals and
settlement rows by canonical key or external user id. All forms are matched.
"""

import logging
from decimal import Decimal
from typing import Iterable, Sequence

from messledger.database.base import Database
from messledger.domain.auth import require_admin, require_self_or_admin
from messledger.domain.entities import (
    ADMIN_KEY,
    Actor,
    AdminExpenseReport,
    DutyStatus,
    Expense,
    ExpenseCategory,
    ExpenseStatus,
    Invoice,
    ManagerRecord,
    MemberLedger,
    MemberTotals,
    MonthLedger,
    MonthlySummary,
)
from messledger.domain.member import MemberService
from messledger.domain.settlement import SettlementService
from messledger.utils.member_resolver import member_reference_keys

logger = logging.getLogger(__name__)


def category_breakdown(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Sum expenses per category. Every category is present, zero if unused."""
    totals = {category.value: Decimal("0") for category in ExpenseCategory}
    for expense in expenses:
        totals[expense.category.value] += expense.amount
    return totals


def distinct_managers(records: Sequence[ManagerRecord]) -> tuple[str, ...]:
    """Reduce manager records to distinct names; a later name wins per member."""
    names: dict[str, str] = {}
    for record in records:
        names[record.member_id] = record.member_name
    return tuple(dict.fromkeys(names.values()))


class SummaryService:
    """Service for building monthly ledgers, invoices and admin reports."""

    def __init__(self, db: Database, members: MemberService, settlements: SettlementService):
        """Initialize summary service.

        Args:
            db: Database instance
            members: Member service
            settlements: Settlement service that materializes ledger rows
        """
        self.db = db
        self.members = members
        self.settlements = settlements

    def compute_ledger(self, month: str) -> MonthLedger:
        """Aggregate a month without writing anything.

        Members without a stored settlement row get pending/zero defaults.

        Args:
            month: Month key (YYYY-MM)

        Returns:
            MonthLedger with one entry per current member
        """
        members = self.members.list_members()
        expenses = self.db.list_expenses(month=month, exclude_status=ExpenseStatus.REJECTED.value)
        regular_meals = self.db.list_meals(month=month, is_guest=False)
        guest_meal_keys = [g.member_id for g in self.db.list_guest_meals(month=month)]
        guest_meal_keys += [m.member_id for m in self.db.list_meals(month=month, is_guest=True)]
        approved_duties = [
            d for d in self.db.list_market_duties(month=month) if d.status == DutyStatus.APPROVED
        ]
        settlement_rows = self.db.list_monthly_summaries(month)
        managers = distinct_managers(self.db.list_manager_records(month=month))

        ledger = []
        for member in members:
            meal_keys = member_reference_keys(member)
            row = self._find_row(settlement_rows, meal_keys)
            persisted = row is not None
            if row is None:
                row = MonthlySummary.default(month, member)

            ledger.append(
                MemberLedger(
                    member_id=member.key,
                    user_id=member.user_id,
                    member_name=member.name,
                    expenses=category_breakdown(
                        e for e in expenses if member.matches(e.paid_by, by_name=True)
                    ),
                    regular_meals=sum(1 for meal in regular_meals if meal.member_id in meal_keys),
                    guest_meals=sum(1 for key in guest_meal_keys if key in meal_keys),
                    duty_days=sum(1 for d in approved_duties if d.assigned_member_id in meal_keys),
                    payment_status=row.payment_status,
                    amount_paid=row.amount_paid,
                    submitted_amount=row.submitted_amount,
                    received_amount=row.received_amount,
                    deposit_balance=row.deposit_balance,
                    deposit_date=row.deposit_date,
                    deposit_balance_locked=persisted,
                    note=row.note,
                    deposit=member.deposit,
                )
            )

        return MonthLedger(month=month, managers=managers, members=tuple(ledger))

    def month_summary(self, actor: Actor, month: str) -> MonthLedger:
        """Admin view of a month: materialize missing settlement rows, then aggregate."""
        require_admin(actor)
        self.settlements.ensure_settlement_rows(month, self.members.list_members())
        ledger = self.compute_ledger(month)
        logger.debug("Built ledger for %s with %d member(s)", month, len(ledger.members))
        return ledger

    def admin_expenses(self, actor: Actor, month: str) -> AdminExpenseReport:
        """Expenses the administrator paid in a month, for splitting across members."""
        require_admin(actor)
        expenses = self.db.list_expenses(
            month=month,
            exclude_status=ExpenseStatus.REJECTED.value,
            paid_by=(ADMIN_KEY,),
        )
        return AdminExpenseReport(
            month=month,
            total_members=len(self.members.list_members()),
            managers=distinct_managers(self.db.list_manager_records(month=month)),
            admin_expenses=tuple(expenses),
        )

    def invoice(self, actor: Actor, month: str, member_key: str) -> Invoice:
        """Collect one member's records for a month.

        Raises:
            NotFoundError: If the member does not exist
        """
        require_admin(actor)
        member = self.members.require_member(member_key)
        keys = member_reference_keys(member)

        guest_meals: list = list(self.db.list_guest_meals(month=month, member_ids=keys))
        guest_meals += self.db.list_meals(month=month, is_guest=True, member_ids=keys)

        return Invoice(
            month=month,
            member=member,
            total_members=len(self.members.list_members()),
            managers=distinct_managers(self.db.list_manager_records(month=month)),
            member_expenses=tuple(
                self.db.list_expenses(
                    month=month,
                    exclude_status=ExpenseStatus.REJECTED.value,
                    paid_by=member_reference_keys(member, include_name=True),
                )
            ),
            regular_meals=tuple(self.db.list_meals(month=month, is_guest=False, member_ids=keys)),
            guest_meals=tuple(sorted(guest_meals, key=lambda g: g.date)),
            payment=self.db.get_monthly_summary(month, keys),
        )

    def member_totals(self, actor: Actor, month: str, member_key: str) -> MemberTotals:
        """Approved-only category totals for one member, as members see them."""
        member = self.members.require_member(member_key)
        require_self_or_admin(actor, member, "totals")

        expenses = self.db.list_expenses(
            month=month,
            status=ExpenseStatus.APPROVED.value,
            paid_by=member_reference_keys(member, include_name=True),
        )
        return MemberTotals(
            month=month,
            member_id=member.key,
            member_name=member.name,
            expenses=category_breakdown(expenses),
        )

    @staticmethod
    def _find_row(rows: Sequence[MonthlySummary], keys: Sequence[str]) -> MonthlySummary | None:
        for row in rows:
            if row.member_id in keys:
                return row
        return None
