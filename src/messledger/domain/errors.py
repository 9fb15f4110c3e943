"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class AuthorizationError(DomainError):
    """Caller is not allowed to perform the operation."""


def member_not_found(member_key: str) -> str:
    """Return message for missing member."""
    return f"Member '{member_key}' not found"


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def meal_not_found() -> str:
    return "Meal not found"


def guest_meal_not_found(guest_meal_id: int) -> str:
    return f"Guest meal {guest_meal_id} not found"


def duty_not_found(duty_id: int) -> str:
    """Return message for missing market duty record."""
    return f"Market duty {duty_id} not found"


def manager_record_not_found(record_id: int) -> str:
    return f"Manager record {record_id} not found"


def cooking_record_not_found(record_id: int) -> str:
    return f"Cooking record {record_id} not found"


def notification_not_found(notification_id: int) -> str:
    return f"Notification {notification_id} not found"


def admin_only() -> str:
    return "Access denied. Admin only."


def own_records_only(what: str) -> str:
    """Return message when a member acts on someone else's records."""
    return f"Access denied. You can only manage your own {what}."


def invalid_choice(field: str, value: object, choices: list[str]) -> str:
    """Return message for a value outside a closed set."""
    return f"Invalid {field} '{value}'. Expected one of: {', '.join(choices)}"


def duplicate_settlement_row(month: str, member_id: str) -> str:
    return f"Settlement row for member {member_id} in {month} already exists"
