"""Domain model entities for messledger.

These are pure data classes representing business concepts, independent of
database schema. Foreign keys to members are plain strings because historical
rows reference members by internal id, external user id or display name.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

ADMIN_KEY = "admin"
BROADCAST_KEY = "all"


class Role(str, Enum):
    """Member role."""

    MEMBER = "member"
    ADMIN = "admin"


class ExpenseCategory(str, Enum):
    """Closed set of expense categories.

    Values are the stored strings, so ``DIDI`` (helper wage) and
    ``HOUSE_RENT`` keep their historical spelling.
    """

    MARKET = "market"
    SPICES = "spices"
    RICE = "rice"
    OTHERS = "others"
    GAS = "gas"
    PAPER = "paper"
    WIFI = "wifi"
    ELECTRIC = "electric"
    DIDI = "didi"
    HOUSE_RENT = "houseRent"
    DEPOSIT = "deposit"


class ExpenseStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class MealType(str, Enum):
    LUNCH = "lunch"
    DINNER = "dinner"
    GUEST = "guest"


class GuestMealType(str, Enum):
    FISH = "fish"
    EGG = "egg"
    VEG = "veg"
    MEAT = "meat"


class MealTime(str, Enum):
    LUNCH = "lunch"
    DINNER = "dinner"


class DutyStatus(str, Enum):
    """Market duty status. Rejected records are deleted, never stored."""

    PENDING = "pending"
    APPROVED = "approved"


class DutyRequestType(str, Enum):
    REQUEST = "request"
    MANUAL_ASSIGN = "manual_assign"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    CLEAR = "clear"


@dataclass(frozen=True)
class Actor:
    """Authenticated caller of a domain operation."""

    id: str
    role: Role
    name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def admin(cls, name: str = "Admin") -> "Actor":
        """Return the built-in mess administrator."""
        return cls(id=ADMIN_KEY, role=Role.ADMIN, name=name)


@dataclass(frozen=True)
class Member:
    """Mess member domain entity."""

    id: int
    user_id: str
    name: str
    role: Optional[Role]
    deposit: Decimal
    email: Optional[str]
    mobile: Optional[str]
    joined_at: Optional[str]
    date_of_birth: Optional[str]
    created_at: datetime

    @property
    def key(self) -> str:
        """Canonical key used by records that reference this member."""
        return str(self.id)

    def matches(self, candidate: Optional[str], by_name: bool = False) -> bool:
        """Check whether a stored member reference points at this member.

        Records may hold the canonical key or the external user id; expense
        payers may also hold the display name (``by_name``).
        """
        if candidate is None:
            return False
        if candidate == self.key or candidate == self.user_id:
            return True
        return by_name and candidate == self.name


@dataclass(frozen=True)
class Expense:
    """Shared expense domain entity."""

    id: int
    description: str
    amount: Decimal
    category: ExpenseCategory
    paid_by: str
    date: str
    status: ExpenseStatus
    created_at: datetime


@dataclass(frozen=True)
class Meal:
    """Meal domain entity. Guest rows here are the legacy guest representation."""

    id: int
    date: str
    member_id: str
    member_name: str
    meal_type: MealType
    is_guest: bool
    guest_meal_type: Optional[GuestMealType]
    meal_time: Optional[MealTime]
    created_at: datetime


@dataclass(frozen=True)
class GuestMeal:
    """Guest meal domain entity from the dedicated guest meal store."""

    id: int
    date: str
    member_id: str
    member_name: str
    guest_meal_type: GuestMealType
    meal_time: MealTime
    created_at: datetime


@dataclass(frozen=True)
class MarketDuty:
    """Market (grocery) duty assignment or request."""

    id: int
    date: str
    assigned_member_id: str
    status: DutyStatus
    request_type: DutyRequestType


@dataclass(frozen=True)
class ManagerRecord:
    """Manager duty record for a single day."""

    id: int
    member_id: str
    member_name: str
    date: str
    created_at: datetime


@dataclass(frozen=True)
class CookingRecord:
    """Cooking duty record for a single day."""

    id: int
    member_id: str
    member_name: str
    date: str
    cooked: bool
    created_at: datetime


@dataclass(frozen=True)
class MonthlySummary:
    """Settlement ledger row for one member in one month."""

    id: Optional[int]
    month: str
    member_id: str
    member_name: str
    payment_status: PaymentStatus
    amount_paid: Decimal
    submitted_amount: Decimal
    received_amount: Decimal
    deposit_balance: Decimal
    deposit_date: str
    note: str
    updated_at: Optional[datetime]

    @classmethod
    def default(cls, month: str, member: Member) -> "MonthlySummary":
        """Return an unsaved row with pending/zero defaults."""
        return cls(
            id=None,
            month=month,
            member_id=member.key,
            member_name=member.name,
            payment_status=PaymentStatus.PENDING,
            amount_paid=Decimal("0"),
            submitted_amount=Decimal("0"),
            received_amount=Decimal("0"),
            deposit_balance=Decimal("0"),
            deposit_date="",
            note="",
            updated_at=None,
        )


@dataclass(frozen=True)
class Notification:
    """Notification domain entity."""

    id: int
    user_id: str
    message: str
    date: str
    is_read: bool
    type: Optional[str]
    details: dict[str, Any]
    status: Optional[str]
    payment_amount: Optional[Decimal]
    is_paid: bool


@dataclass(frozen=True)
class PaymentUpdate:
    """Admin-entered settlement payload. Every call replaces all fields."""

    member_id: Optional[str]
    payment_status: Optional[str]
    member_name: Optional[str] = None
    amount_paid: Decimal = Decimal("0")
    submitted_amount: Decimal = Decimal("0")
    received_amount: Decimal = Decimal("0")
    deposit_balance: Decimal = Decimal("0")
    deposit_date: str = ""
    note: str = ""


@dataclass(frozen=True)
class PaymentDue:
    """Amount a member owes (positive) or receives (negative)."""

    user_id: str
    member_name: str
    amount: Decimal


@dataclass(frozen=True)
class MemberLedger:
    """Per-member row of the monthly aggregate."""

    member_id: str
    user_id: str
    member_name: str
    expenses: dict[str, Decimal]
    regular_meals: int
    guest_meals: int
    duty_days: int
    payment_status: PaymentStatus
    amount_paid: Decimal
    submitted_amount: Decimal
    received_amount: Decimal
    deposit_balance: Decimal
    deposit_date: str
    deposit_balance_locked: bool
    note: str
    deposit: Decimal


@dataclass(frozen=True)
class MonthLedger:
    """Aggregated ledger for a month."""

    month: str
    managers: tuple[str, ...]
    members: tuple[MemberLedger, ...]


@dataclass(frozen=True)
class MemberTotals:
    """Approved-only per-category totals for one member."""

    month: str
    member_id: str
    member_name: str
    expenses: dict[str, Decimal]

    @property
    def total(self) -> Decimal:
        return sum(self.expenses.values(), Decimal("0"))


@dataclass(frozen=True)
class AdminExpenseReport:
    """Expenses paid by the admin for a month, with context for splitting."""

    month: str
    total_members: int
    managers: tuple[str, ...]
    admin_expenses: tuple[Expense, ...]


@dataclass(frozen=True)
class Invoice:
    """Everything needed to render one member's monthly invoice."""

    month: str
    member: Member
    total_members: int
    managers: tuple[str, ...]
    member_expenses: tuple[Expense, ...]
    regular_meals: tuple[Meal, ...]
    guest_meals: tuple[Any, ...]
    payment: Optional[MonthlySummary]


@dataclass(frozen=True)
class MemberOverview:
    """Roster line: member, regular meals eaten and running deposit."""

    member_id: str
    user_id: str
    name: str
    total_meals: int
    deposit: Decimal


@dataclass(frozen=True)
class MemberBill:
    """One member's computed share of the monthly bill."""

    member_id: str
    member_name: str
    meals: int
    effective_meals: int
    below_minimum: bool
    meal_cost: Decimal
    fixed_cost: Decimal
    guest_cost: Decimal
    deposit: Decimal
    market_expense: Decimal
    total: Decimal
    balance: Decimal


@dataclass(frozen=True)
class MonthBill:
    """Monthly bill computed from approved money movement."""

    month: str
    total_market: Decimal
    rice: Decimal
    guest_income: Decimal
    total_meals: int
    meal_charge: Decimal
    shared_bills: dict[str, Decimal]
    per_head: Decimal
    members: tuple[MemberBill, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MonthClearReport:
    """Per-table row counts for one month's day-to-day records."""

    month: str
    counts: dict[str, int]

    @property
    def total(self) -> int:
        return sum(self.counts.values())
