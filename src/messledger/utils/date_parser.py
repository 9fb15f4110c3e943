"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser

_FIRST_DEFAULT = datetime(2000, 1, 1)
_SECOND_DEFAULT = datetime(2001, 2, 2)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2026-02-15", "February 15, 2026") and the
    relative words "today", "yesterday" and "tomorrow". Absolute dates must
    carry a year, month and day.

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Parsing against two different defaults exposes any part dateutil filled in
    try:
        first = date_parser.parse(date_str, default=_FIRST_DEFAULT).date()
        second = date_parser.parse(date_str, default=_SECOND_DEFAULT).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")

    if first != second:
        raise ValueError(f"Date '{date_str}' must include a year, month and day")
    return first


def to_date_key(value: str | date) -> str:
    """Normalize a date or date string to the stored YYYY-MM-DD form."""
    if isinstance(value, date):
        return value.isoformat()
    return parse_date(value).isoformat()
