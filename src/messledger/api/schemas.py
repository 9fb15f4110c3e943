"""Request and response models for the HTTP API.

Response models are read straight from domain entities; amounts are
rendered as JSON numbers.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from messledger.domain.entities import (
    DutyRequestType,
    DutyStatus,
    ExpenseCategory,
    ExpenseStatus,
    GuestMealType,
    MealTime,
    MealType,
    PaymentStatus,
    Role,
)


class EntityModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Members
class MemberOut(EntityModel):
    id: int
    user_id: str
    name: str
    role: Optional[Role]
    deposit: float
    email: Optional[str]
    mobile: Optional[str]
    joined_at: Optional[str]
    date_of_birth: Optional[str]


class MemberOverviewOut(EntityModel):
    member_id: str
    user_id: str
    name: str
    total_meals: int
    deposit: float


class MemberIn(BaseModel):
    user_id: str
    name: str
    role: Optional[Role] = Role.MEMBER
    deposit: Decimal = Decimal("0")
    email: Optional[str] = None
    mobile: Optional[str] = None
    joined_at: Optional[str] = None
    date_of_birth: Optional[str] = None


class MemberUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    deposit: Optional[Decimal] = None
    date_of_birth: Optional[str] = None


# Expenses
class ExpenseOut(EntityModel):
    id: int
    description: str
    amount: float
    category: ExpenseCategory
    paid_by: str
    date: str
    status: ExpenseStatus


class ExpenseIn(BaseModel):
    description: str
    amount: Decimal
    category: ExpenseCategory
    date: str
    paid_by: Optional[str] = None
    status: Optional[ExpenseStatus] = None


class ExpenseUpdate(BaseModel):
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    category: Optional[ExpenseCategory] = None
    paid_by: Optional[str] = None
    date: Optional[str] = None
    status: Optional[ExpenseStatus] = None


# Meals
class MealOut(EntityModel):
    id: int
    date: str
    member_id: str
    member_name: str
    meal_type: MealType
    is_guest: bool
    guest_meal_type: Optional[GuestMealType]
    meal_time: Optional[MealTime]


class MealIn(BaseModel):
    date: str
    member_id: str
    meal_type: MealType
    guest_meal_type: Optional[GuestMealType] = None
    meal_time: Optional[MealTime] = None


class GuestMealOut(EntityModel):
    id: int
    date: str
    member_id: str
    member_name: str
    guest_meal_type: Optional[GuestMealType]
    meal_time: Optional[MealTime]


class GuestMealIn(BaseModel):
    date: str
    member_id: str
    guest_meal_type: GuestMealType
    meal_time: MealTime


# Market duty
class MarketDutyOut(EntityModel):
    id: int
    date: str
    assigned_member_id: str
    status: DutyStatus
    request_type: DutyRequestType


class MarketDutyIn(BaseModel):
    date: str
    member_id: Optional[str] = None
    request_type: DutyRequestType = DutyRequestType.REQUEST


class MarketDecision(BaseModel):
    status: str = Field(description="'approved' or 'rejected'")


# Manager records
class ManagerRecordOut(EntityModel):
    id: int
    member_id: str
    member_name: str
    date: str


class ManagerRecordIn(BaseModel):
    date: str
    member_id: str


class CookingRecordOut(EntityModel):
    id: int
    member_id: str
    member_name: str
    date: str
    cooked: bool


class CookingRecordIn(BaseModel):
    date: str
    member_id: str


# Settlement and summaries
class SettlementOut(EntityModel):
    month: str
    member_id: str
    member_name: str
    payment_status: PaymentStatus
    amount_paid: float
    submitted_amount: float
    received_amount: float
    deposit_balance: float
    deposit_date: str
    note: str


class PaymentIn(BaseModel):
    """Settlement payload. Omitted amounts are stored as zero."""

    member_id: Optional[str] = None
    member_name: Optional[str] = None
    payment_status: Optional[str] = None
    amount_paid: Decimal = Decimal("0")
    submitted_amount: Decimal = Decimal("0")
    received_amount: Decimal = Decimal("0")
    deposit_balance: Decimal = Decimal("0")
    deposit_date: str = ""
    note: str = ""


class MemberLedgerOut(EntityModel):
    member_id: str
    user_id: str
    member_name: str
    expenses: dict[str, float]
    regular_meals: int
    guest_meals: int
    duty_days: int
    payment_status: PaymentStatus
    amount_paid: float
    submitted_amount: float
    received_amount: float
    deposit_balance: float
    deposit_date: str
    deposit_balance_locked: bool
    note: str
    deposit: float


class MonthLedgerOut(EntityModel):
    month: str
    managers: list[str]
    members: list[MemberLedgerOut]


class AdminExpenseReportOut(EntityModel):
    month: str
    total_members: int
    managers: list[str]
    admin_expenses: list[ExpenseOut]


class InvoiceOut(EntityModel):
    month: str
    member: MemberOut
    total_members: int
    managers: list[str]
    member_expenses: list[ExpenseOut]
    regular_meals: list[MealOut]
    guest_meals: list[GuestMealOut]
    payment: Optional[SettlementOut]


class MemberTotalsOut(EntityModel):
    month: str
    member_id: str
    member_name: str
    expenses: dict[str, float]
    total: float


class MemberBillOut(EntityModel):
    member_id: str
    member_name: str
    meals: int
    effective_meals: int
    below_minimum: bool
    meal_cost: float
    fixed_cost: float
    guest_cost: float
    deposit: float
    market_expense: float
    total: float
    balance: float


class MonthBillOut(EntityModel):
    month: str
    total_market: float
    rice: float
    guest_income: float
    total_meals: int
    meal_charge: float
    shared_bills: dict[str, float]
    per_head: float
    members: list[MemberBillOut]


# Notifications
class NotificationOut(EntityModel):
    id: int
    user_id: str
    message: str
    date: str
    is_read: bool
    type: Optional[str]
    details: dict[str, Any]
    status: Optional[str]
    payment_amount: Optional[float]
    is_paid: bool


class NotificationIn(BaseModel):
    user_id: str
    message: str
    type: Optional[str] = None
    details: Optional[dict[str, Any]] = None


class NotificationFlags(BaseModel):
    is_read: Optional[bool] = None
    status: Optional[str] = None
    is_paid: Optional[bool] = None


class PaymentDueIn(BaseModel):
    user_id: str
    member_name: str = ""
    amount: Decimal


class PaymentDuesIn(BaseModel):
    dues: list[PaymentDueIn]


class CountOut(BaseModel):
    count: int


class MonthClearOut(BaseModel):
    month: str
    counts: dict[str, int]
    total: int
