"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the string-to-enum
coercion of stored status and category columns.
"""

from decimal import Decimal

from messledger.domain import entities as domain
from messledger.database.models import (
    Member as ORMMember,
    Expense as ORMExpense,
    Meal as ORMMeal,
    GuestMeal as ORMGuestMeal,
    MarketDuty as ORMMarketDuty,
    ManagerRecord as ORMManagerRecord,
    CookingRecord as ORMCookingRecord,
    MonthlySummary as ORMMonthlySummary,
    Notification as ORMNotification,
)


def _money(value) -> Decimal:
    return Decimal(value) if value is not None else Decimal("0")


def member_to_domain(orm_member: ORMMember) -> domain.Member:
    """Convert SQLAlchemy Member model to domain Member entity."""
    return domain.Member(
        id=orm_member.id,
        user_id=orm_member.user_id,
        name=orm_member.name,
        role=domain.Role(orm_member.role) if orm_member.role else None,
        deposit=_money(orm_member.deposit),
        email=orm_member.email,
        mobile=orm_member.mobile,
        joined_at=orm_member.joined_at,
        date_of_birth=orm_member.date_of_birth,
        created_at=orm_member.created_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        description=orm_expense.description,
        amount=_money(orm_expense.amount),
        category=domain.ExpenseCategory(orm_expense.category),
        paid_by=orm_expense.paid_by,
        date=orm_expense.date,
        status=domain.ExpenseStatus(orm_expense.status),
        created_at=orm_expense.created_at,
    )


def meal_to_domain(orm_meal: ORMMeal) -> domain.Meal:
    """Convert SQLAlchemy Meal model to domain Meal entity."""
    return domain.Meal(
        id=orm_meal.id,
        date=orm_meal.date,
        member_id=orm_meal.member_id,
        member_name=orm_meal.member_name,
        meal_type=domain.MealType(orm_meal.meal_type),
        is_guest=bool(orm_meal.is_guest),
        guest_meal_type=domain.GuestMealType(orm_meal.guest_meal_type) if orm_meal.guest_meal_type else None,
        meal_time=domain.MealTime(orm_meal.meal_time) if orm_meal.meal_time else None,
        created_at=orm_meal.created_at,
    )


def guest_meal_to_domain(orm_guest_meal: ORMGuestMeal) -> domain.GuestMeal:
    """Convert SQLAlchemy GuestMeal model to domain GuestMeal entity."""
    return domain.GuestMeal(
        id=orm_guest_meal.id,
        date=orm_guest_meal.date,
        member_id=orm_guest_meal.member_id,
        member_name=orm_guest_meal.member_name,
        guest_meal_type=domain.GuestMealType(orm_guest_meal.guest_meal_type),
        meal_time=domain.MealTime(orm_guest_meal.meal_time),
        created_at=orm_guest_meal.created_at,
    )


def market_duty_to_domain(orm_duty: ORMMarketDuty) -> domain.MarketDuty:
    """Convert SQLAlchemy MarketDuty model to domain MarketDuty entity."""
    return domain.MarketDuty(
        id=orm_duty.id,
        date=orm_duty.date,
        assigned_member_id=orm_duty.assigned_member_id,
        status=domain.DutyStatus(orm_duty.status),
        request_type=domain.DutyRequestType(orm_duty.request_type),
    )


def manager_record_to_domain(orm_record: ORMManagerRecord) -> domain.ManagerRecord:
    """Convert SQLAlchemy ManagerRecord model to domain ManagerRecord entity."""
    return domain.ManagerRecord(
        id=orm_record.id,
        member_id=orm_record.member_id,
        member_name=orm_record.member_name,
        date=orm_record.date,
        created_at=orm_record.created_at,
    )


def cooking_record_to_domain(orm_record: ORMCookingRecord) -> domain.CookingRecord:
    """Convert SQLAlchemy CookingRecord model to domain CookingRecord entity."""
    return domain.CookingRecord(
        id=orm_record.id,
        member_id=orm_record.member_id,
        member_name=orm_record.member_name,
        date=orm_record.date,
        cooked=bool(orm_record.cooked),
        created_at=orm_record.created_at,
    )


def monthly_summary_to_domain(orm_summary: ORMMonthlySummary) -> domain.MonthlySummary:
    """Convert SQLAlchemy MonthlySummary model to domain MonthlySummary entity."""
    return domain.MonthlySummary(
        id=orm_summary.id,
        month=orm_summary.month,
        member_id=orm_summary.member_id,
        member_name=orm_summary.member_name or "",
        payment_status=domain.PaymentStatus(orm_summary.payment_status),
        amount_paid=_money(orm_summary.amount_paid),
        submitted_amount=_money(orm_summary.submitted_amount),
        received_amount=_money(orm_summary.received_amount),
        deposit_balance=_money(orm_summary.deposit_balance),
        deposit_date=orm_summary.deposit_date or "",
        note=orm_summary.note or "",
        updated_at=orm_summary.updated_at,
    )


def notification_to_domain(orm_notification: ORMNotification) -> domain.Notification:
    """Convert SQLAlchemy Notification model to domain Notification entity."""
    payment_amount = orm_notification.payment_amount
    return domain.Notification(
        id=orm_notification.id,
        user_id=orm_notification.user_id,
        message=orm_notification.message,
        date=orm_notification.date,
        is_read=bool(orm_notification.is_read),
        type=orm_notification.type,
        details=dict(orm_notification.details or {}),
        status=orm_notification.status,
        payment_amount=Decimal(payment_amount) if payment_amount is not None else None,
        is_paid=bool(orm_notification.is_paid),
    )
