"""Monthly bill calculator.

Splits a month's approved spending across members:

- meal charge = (market + rice - guest income) / total effective meals
- effective meals = max(minimum meals, meals eaten)
- fixed cost = shared bills / number of members
- balance = meal cost + fixed cost + guest cost - (deposit + market spend)

A positive balance is owed by the member, a negative one is owed to them.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from messledger.database.base import Database
from messledger.domain.auth import require_admin
from messledger.domain.entities import (
    Actor,
    Expense,
    ExpenseCategory,
    ExpenseStatus,
    MemberBill,
    MonthBill,
    PaymentDue,
)
from messledger.domain.member import MemberService
from messledger.utils.member_resolver import member_reference_keys

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

MEAL_CATEGORIES = (ExpenseCategory.MARKET, ExpenseCategory.RICE)
SHARED_CATEGORIES = (
    ExpenseCategory.SPICES,
    ExpenseCategory.OTHERS,
    ExpenseCategory.GAS,
    ExpenseCategory.PAPER,
    ExpenseCategory.WIFI,
    ExpenseCategory.ELECTRIC,
    ExpenseCategory.DIDI,
    ExpenseCategory.HOUSE_RENT,
)


def _cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _sum_category(expenses: list[Expense], category: ExpenseCategory) -> Decimal:
    return sum((e.amount for e in expenses if e.category == category), Decimal("0"))


class BillService:
    """Service for computing what each member owes for a month."""

    def __init__(
        self,
        db: Database,
        members: MemberService,
        min_meals: int = 40,
        guest_meal_prices: Optional[Mapping[str, Decimal]] = None,
    ):
        """Initialize bill service.

        Args:
            db: Database instance
            members: Member service
            min_meals: Minimum meals every member pays for
            guest_meal_prices: Price per guest meal type
        """
        self.db = db
        self.members = members
        self.min_meals = min_meals
        self.guest_meal_prices = dict(guest_meal_prices or {})

    def guest_price(self, guest_meal_type: Optional[str]) -> Decimal:
        if guest_meal_type is None:
            return Decimal("0")
        return Decimal(self.guest_meal_prices.get(guest_meal_type, 0))

    def build_bill(self, actor: Actor, month: str) -> MonthBill:
        """Compute the month's bill from approved expenses and recorded meals."""
        require_admin(actor)

        members = self.members.list_members()
        expenses = self.db.list_expenses(month=month, status=ExpenseStatus.APPROVED.value)
        regular_meals = self.db.list_meals(month=month, is_guest=False)

        # Guest meals live in both stores
        guest_charges = [
            (g.member_id, self.guest_price(g.guest_meal_type.value if g.guest_meal_type else None))
            for g in self.db.list_guest_meals(month=month)
        ]
        guest_charges += [
            (m.member_id, self.guest_price(m.guest_meal_type.value if m.guest_meal_type else None))
            for m in self.db.list_meals(month=month, is_guest=True)
        ]

        total_market = _sum_category(expenses, ExpenseCategory.MARKET)
        rice = _sum_category(expenses, ExpenseCategory.RICE)
        guest_income = sum((price for _, price in guest_charges), Decimal("0"))
        shared_bills = {c.value: _sum_category(expenses, c) for c in SHARED_CATEGORIES}
        per_head = sum(shared_bills.values(), Decimal("0")) / (len(members) or 1)

        meal_counts = {}
        for member in members:
            keys = member_reference_keys(member)
            meal_counts[member.key] = sum(1 for meal in regular_meals if meal.member_id in keys)
        total_meals = sum(max(self.min_meals, count) for count in meal_counts.values())
        meal_charge = (total_market + rice - guest_income) / (total_meals or 1)

        member_bills = []
        for member in members:
            keys = member_reference_keys(member)
            meals = meal_counts[member.key]
            effective_meals = max(self.min_meals, meals)
            meal_cost = meal_charge * effective_meals
            guest_cost = sum((price for key, price in guest_charges if key in keys), Decimal("0"))
            market_expense = sum(
                (
                    e.amount
                    for e in expenses
                    if e.category == ExpenseCategory.MARKET and member.matches(e.paid_by, by_name=True)
                ),
                Decimal("0"),
            )
            total = meal_cost + per_head + guest_cost
            balance = total - (member.deposit + market_expense)
            member_bills.append(
                MemberBill(
                    member_id=member.key,
                    member_name=member.name,
                    meals=meals,
                    effective_meals=effective_meals,
                    below_minimum=meals < self.min_meals,
                    meal_cost=_cents(meal_cost),
                    fixed_cost=_cents(per_head),
                    guest_cost=_cents(guest_cost),
                    deposit=_cents(member.deposit),
                    market_expense=_cents(market_expense),
                    total=_cents(total),
                    balance=_cents(balance),
                )
            )

        logger.info("Computed bill for %s: meal charge %s over %d meal(s)", month, _cents(meal_charge), total_meals)
        return MonthBill(
            month=month,
            total_market=_cents(total_market),
            rice=_cents(rice),
            guest_income=_cents(guest_income),
            total_meals=total_meals,
            meal_charge=_cents(meal_charge),
            shared_bills={name: _cents(amount) for name, amount in shared_bills.items()},
            per_head=_cents(per_head),
            members=tuple(member_bills),
        )

    @staticmethod
    def payment_dues(bill: MonthBill) -> list[PaymentDue]:
        """Turn a bill into one payment request per member."""
        return [
            PaymentDue(user_id=line.member_id, member_name=line.member_name, amount=line.balance)
            for line in bill.members
        ]
