"""Month key helpers.

Month keys are ``YYYY-MM`` strings compared to stored ``YYYY-MM-DD`` dates by
string prefix, never by calendar arithmetic.
"""

import re
from datetime import date
from dateutil.relativedelta import relativedelta

MONTH_KEY_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def is_month_key(value: str) -> bool:
    """Check whether a string is a well-formed YYYY-MM key."""
    return bool(MONTH_KEY_PATTERN.match(value))


def month_of(value: str | date) -> str:
    """Return the month key a date (or date string) falls in."""
    if isinstance(value, date):
        return value.strftime("%Y-%m")
    return value[:7]


def in_month(date_key: str, month: str) -> bool:
    """Lexical prefix match of a stored date against a month key."""
    return date_key.startswith(month)


def parse_month(month_str: str) -> str:
    """Parse a month argument into a YYYY-MM key.

    Accepts "this month", "last month", "next month" and YYYY-MM. Anything
    else is returned unchanged; a malformed key matches no records.
    """
    text = month_str.strip().lower()
    today = date.today()
    relative = {
        "this month": today,
        "last month": today - relativedelta(months=1),
        "next month": today + relativedelta(months=1),
    }
    if text in relative:
        return month_of(relative[text])
    return month_str.strip()
