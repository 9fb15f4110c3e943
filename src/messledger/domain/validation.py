"""Input checks shared by domain services.

Parser failures surface as ``ValidationError`` so callers can map them to
a single error category.
"""

from decimal import Decimal
from enum import Enum

from messledger.domain import errors
from messledger.utils.amount_parser import parse_amount
from messledger.utils.date_parser import to_date_key


def date_key(value: str) -> str:
    """Parse a user-supplied date into YYYY-MM-DD."""
    if not value:
        raise errors.ValidationError("Date is required")
    try:
        return to_date_key(value)
    except ValueError as e:
        raise errors.ValidationError(str(e)) from e


def money(value: Decimal | str | int | float, positive: bool = False) -> Decimal:
    """Parse an amount, optionally requiring it to be greater than zero."""
    try:
        amount = parse_amount(value)
    except ValueError as e:
        raise errors.ValidationError(str(e)) from e
    if positive and amount <= 0:
        raise errors.ValidationError("Amount must be greater than zero")
    return amount


def choice(field: str, value: object, enum_type: type[Enum]) -> str:
    """Check that a value belongs to a closed enum; returns the stored string."""
    choices = [item.value for item in enum_type]
    if value not in choices:
        raise errors.ValidationError(errors.invalid_choice(field, value, choices))
    return enum_type(value).value
