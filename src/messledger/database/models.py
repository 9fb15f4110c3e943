"""SQLAlchemy models for messledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    Boolean,
    JSON,
    Index,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Member(Base):
    """Mess member model."""

    __tablename__ = "members"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    # NULL role is a legacy member row
    role = Column(String, nullable=True, default="member")
    deposit = Column(Numeric(10, 2), default=0, nullable=False)
    email = Column(String, nullable=True)
    mobile = Column(String, nullable=True)
    joined_at = Column(String, nullable=True)
    date_of_birth = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Expense(Base):
    """Shared expense model."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    description = Column(String, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(String, nullable=False, default="others")
    paid_by = Column(String, nullable=False)
    date = Column(String, nullable=False)
    status = Column(String, nullable=False, default="pending")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        Index("ix_expenses_date_status", "date", "status"),
        Index("ix_expenses_paid_by_date", "paid_by", "date"),
    )


class Meal(Base):
    """Meal model. Rows with is_guest set are legacy guest meals."""

    __tablename__ = "meals"

    id = Column(Integer, primary_key=True)
    date = Column(String, nullable=False)
    member_id = Column(String, nullable=False)
    member_name = Column(String, nullable=False)
    meal_type = Column(String, nullable=False)
    is_guest = Column(Boolean, default=False, nullable=False)
    guest_meal_type = Column(String, nullable=True)
    meal_time = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (Index("ix_meals_date_member_type", "date", "member_id", "meal_type", "is_guest"),)


class GuestMeal(Base):
    """Guest meal model."""

    __tablename__ = "guest_meals"

    id = Column(Integer, primary_key=True)
    date = Column(String, nullable=False)
    member_id = Column(String, nullable=False)
    member_name = Column(String, nullable=False)
    guest_meal_type = Column(String, nullable=False)
    meal_time = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class MarketDuty(Base):
    """Market duty request/assignment model."""

    __tablename__ = "market_duties"

    id = Column(Integer, primary_key=True)
    date = Column(String, nullable=False)
    assigned_member_id = Column(String, nullable=False)
    status = Column(String, nullable=False, default="pending")
    request_type = Column(String, nullable=False, default="request")

    # A member can't request the same date twice; different members can
    __table_args__ = (UniqueConstraint("date", "assigned_member_id", name="uq_duty_date_member"),)


class ManagerRecord(Base):
    """Manager duty record model."""

    __tablename__ = "manager_records"

    id = Column(Integer, primary_key=True)
    member_id = Column(String, nullable=False)
    member_name = Column(String, nullable=False)
    date = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("member_id", "date", name="uq_manager_member_date"),)


class CookingRecord(Base):
    """Cooking duty record model."""

    __tablename__ = "cooking_records"

    id = Column(Integer, primary_key=True)
    member_id = Column(String, nullable=False)
    member_name = Column(String, nullable=False)
    date = Column(String, nullable=False)
    cooked = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("member_id", "date", name="uq_cooking_member_date"),)


class MonthlySummary(Base):
    """Settlement ledger row model."""

    __tablename__ = "monthly_summaries"

    id = Column(Integer, primary_key=True)
    month = Column(String, nullable=False)
    member_id = Column(String, nullable=False)
    member_name = Column(String, nullable=False, default="")
    payment_status = Column(String, nullable=False, default="pending")
    amount_paid = Column(Numeric(10, 2), default=0, nullable=False)
    submitted_amount = Column(Numeric(10, 2), default=0, nullable=False)
    received_amount = Column(Numeric(10, 2), default=0, nullable=False)
    deposit_balance = Column(Numeric(10, 2), default=0, nullable=False)
    deposit_date = Column(String, default="", nullable=False)
    note = Column(String, default="", nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # One record per member per month
    __table_args__ = (UniqueConstraint("month", "member_id", name="uq_summary_month_member"),)


class Notification(Base):
    """Notification model."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False)
    message = Column(String, nullable=False)
    date = Column(String, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    type = Column(String, nullable=True)
    details = Column(JSON, nullable=True)
    status = Column(String, nullable=True)
    payment_amount = Column(Numeric(10, 2), nullable=True)
    is_paid = Column(Boolean, default=False, nullable=False)

    __table_args__ = (Index("ix_notifications_user_read", "user_id", "is_read"),)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
