"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from messledger.domain.entities import (
    Member,
    Expense,
    Meal,
    GuestMeal,
    MarketDuty,
    ManagerRecord,
    CookingRecord,
    MonthlySummary,
    Notification,
)


class Database(ABC):
    """Abstract database interface for messledger.

    Month filters are string prefixes over ``YYYY-MM-DD`` date columns, so a
    malformed month simply matches nothing.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Member operations
    @abstractmethod
    def create_member(
        self,
        user_id: str,
        name: str,
        role: Optional[str] = "member",
        deposit: Decimal = Decimal("0"),
        email: Optional[str] = None,
        mobile: Optional[str] = None,
        joined_at: Optional[str] = None,
        date_of_birth: Optional[str] = None,
    ) -> int:
        """Create a member. Returns member ID.

        Raises:
            ConflictError: If the external user ID is taken
        """
        pass

    @abstractmethod
    def get_member(self, member_id: int) -> Optional[Member]:
        """Get member by internal ID."""
        pass

    @abstractmethod
    def get_member_by_user_id(self, user_id: str) -> Optional[Member]:
        """Get member by external user ID."""
        pass

    @abstractmethod
    def list_members(self, include_admins: bool = False) -> list[Member]:
        """List members with role 'member' or no role (legacy rows)."""
        pass

    @abstractmethod
    def update_member(self, member_id: int, **fields: Any) -> None:
        """Update whitelisted member fields."""
        pass

    @abstractmethod
    def delete_member(self, member_id: int) -> None:
        """Delete a member. Historical records keep their string references."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        description: str,
        amount: Decimal,
        category: str,
        paid_by: str,
        date: str,
        status: str = "pending",
    ) -> int:
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        month: Optional[str] = None,
        status: Optional[str] = None,
        exclude_status: Optional[str] = None,
        paid_by: Optional[Sequence[str]] = None,
    ) -> list[Expense]:
        """List expenses ordered by date.

        Args:
            month: Optional month key; matches dates by string prefix
            status: Optional status to include
            exclude_status: Optional status to exclude
            paid_by: Optional payer keys; any match is included
        """
        pass

    @abstractmethod
    def update_expense(self, expense_id: int, **fields: Any) -> None:
        """Update provided expense fields."""
        pass

    @abstractmethod
    def approve_pending_expenses(self) -> int:
        """Approve every pending expense. Returns number of rows changed."""
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense."""
        pass

    # Meal operations
    @abstractmethod
    def create_meal(
        self,
        date: str,
        member_id: str,
        member_name: str,
        meal_type: str,
        is_guest: bool = False,
        guest_meal_type: Optional[str] = None,
        meal_time: Optional[str] = None,
    ) -> int:
        """Create a meal. Returns meal ID."""
        pass

    @abstractmethod
    def get_meal(self, meal_id: int) -> Optional[Meal]:
        """Get meal by ID."""
        pass

    @abstractmethod
    def find_regular_meal(self, date: str, member_ids: Sequence[str], meal_type: str) -> Optional[Meal]:
        """Find a non-guest meal for any of the member keys on a date."""
        pass

    @abstractmethod
    def list_meals(
        self,
        date: Optional[str] = None,
        month: Optional[str] = None,
        is_guest: Optional[bool] = None,
        member_ids: Optional[Sequence[str]] = None,
    ) -> list[Meal]:
        """List meals ordered by date."""
        pass

    @abstractmethod
    def delete_meal(self, meal_id: int) -> None:
        """Delete a meal."""
        pass

    # Guest meal operations
    @abstractmethod
    def create_guest_meal(
        self, date: str, member_id: str, member_name: str, guest_meal_type: str, meal_time: str
    ) -> int:
        """Create a guest meal. Returns guest meal ID."""
        pass

    @abstractmethod
    def get_guest_meal(self, guest_meal_id: int) -> Optional[GuestMeal]:
        """Get guest meal by ID."""
        pass

    @abstractmethod
    def list_guest_meals(
        self,
        date: Optional[str] = None,
        month: Optional[str] = None,
        member_ids: Optional[Sequence[str]] = None,
    ) -> list[GuestMeal]:
        """List guest meals ordered by date."""
        pass

    @abstractmethod
    def delete_guest_meal(self, guest_meal_id: int) -> None:
        """Delete a guest meal."""
        pass

    # Market duty operations
    @abstractmethod
    def create_market_duty(self, date: str, assigned_member_id: str, status: str, request_type: str) -> int:
        """Create a market duty record. Returns duty ID.

        Raises:
            ConflictError: If the member already has a record for the date
        """
        pass

    @abstractmethod
    def get_market_duty(self, duty_id: int) -> Optional[MarketDuty]:
        """Get market duty by ID."""
        pass

    @abstractmethod
    def list_market_duties(self, month: Optional[str] = None, date: Optional[str] = None) -> list[MarketDuty]:
        """List market duties ordered by date."""
        pass

    @abstractmethod
    def assign_market_duty(self, date: str, assigned_member_id: str) -> int:
        """Replace every record for a date with one approved assignment.

        Runs in a single transaction. Returns the new duty ID.
        """
        pass

    @abstractmethod
    def approve_market_duty(self, duty_id: int) -> None:
        """Approve a duty and drop the other records and request alerts for its date.

        Runs in a single transaction.
        """
        pass

    @abstractmethod
    def delete_market_duty(self, duty_id: int) -> None:
        """Delete a market duty and the request alerts for its date."""
        pass

    # Manager record operations
    @abstractmethod
    def create_manager_record(self, member_id: str, member_name: str, date: str) -> int:
        """Create a manager record. Returns record ID.

        Raises:
            ConflictError: If the member already manages that date
        """
        pass

    @abstractmethod
    def get_manager_record(self, record_id: int) -> Optional[ManagerRecord]:
        """Get manager record by ID."""
        pass

    @abstractmethod
    def list_manager_records(
        self, month: Optional[str] = None, date: Optional[str] = None, newest_first: bool = False
    ) -> list[ManagerRecord]:
        """List manager records ordered by date."""
        pass

    @abstractmethod
    def delete_manager_record(self, record_id: int) -> None:
        """Delete a manager record."""
        pass

    # Cooking record operations
    @abstractmethod
    def create_cooking_record(self, member_id: str, member_name: str, date: str) -> int:
        """Create a cooking record. Returns record ID.

        Raises:
            ConflictError: If the member already cooks on that date
        """
        pass

    @abstractmethod
    def get_cooking_record(self, record_id: int) -> Optional[CookingRecord]:
        """Get cooking record by ID."""
        pass

    @abstractmethod
    def list_cooking_records(self, month: Optional[str] = None, date: Optional[str] = None) -> list[CookingRecord]:
        """List cooking records, newest date first."""
        pass

    @abstractmethod
    def delete_cooking_record(self, record_id: int) -> None:
        """Delete a cooking record."""
        pass

    # Month maintenance
    @abstractmethod
    def count_month_records(self, month: str) -> dict[str, int]:
        """Count the dated records of a month, per table."""
        pass

    @abstractmethod
    def clear_month(self, month: str) -> dict[str, int]:
        """Delete the dated records of a month in one transaction.

        Settlement rows, notifications and members are kept. Returns the
        number of rows deleted per table.
        """
        pass

    # Settlement ledger operations
    @abstractmethod
    def create_monthly_summary(self, summary: MonthlySummary) -> int:
        """Insert a settlement row. Returns row ID.

        Raises:
            ConflictError: If a row for (month, member) already exists
        """
        pass

    @abstractmethod
    def get_monthly_summary(self, month: str, member_ids: Sequence[str]) -> Optional[MonthlySummary]:
        """Get the settlement row for any of the member keys in a month."""
        pass

    @abstractmethod
    def list_monthly_summaries(self, month: str) -> list[MonthlySummary]:
        """List settlement rows for a month."""
        pass

    @abstractmethod
    def upsert_monthly_summary(self, summary: MonthlySummary) -> MonthlySummary:
        """Insert or fully overwrite the settlement row keyed on (month, member)."""
        pass

    # Notification operations
    @abstractmethod
    def create_notification(
        self,
        user_id: str,
        message: str,
        type: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        payment_amount: Optional[Decimal] = None,
        date: Optional[str] = None,
    ) -> int:
        """Create a notification. Returns notification ID."""
        pass

    @abstractmethod
    def get_notification(self, notification_id: int) -> Optional[Notification]:
        """Get notification by ID."""
        pass

    @abstractmethod
    def list_notifications(self, user_ids: Optional[Sequence[str]] = None) -> list[Notification]:
        """List notifications, optionally only those targeting the given keys."""
        pass

    @abstractmethod
    def update_notification_flags(
        self,
        notification_id: int,
        is_read: Optional[bool] = None,
        status: Optional[str] = None,
        is_paid: Optional[bool] = None,
    ) -> None:
        """Flip read/paid flags or status of a notification."""
        pass

    @abstractmethod
    def mark_notifications_read(self, user_ids: Sequence[str]) -> int:
        """Mark all notifications for the keys as read. Returns rows changed."""
        pass

    @abstractmethod
    def delete_notification(self, notification_id: int) -> None:
        """Delete a notification."""
        pass
