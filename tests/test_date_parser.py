"""Tests for date and month parsing."""

import pytest
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta

from messledger.utils.date_parser import parse_date, to_date_key
from messledger.utils.month import in_month, is_month_key, month_of, parse_month


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_long_form_date():
    assert parse_date("February 15, 2026") == date(2026, 2, 15)


def test_parse_today():
    """Test parsing 'today'."""
    result = parse_date("today")
    assert result == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    result = parse_date("Yesterday")
    assert result == date.today() - timedelta(days=1)


def test_parse_tomorrow():
    result = parse_date("tomorrow")
    assert result == date.today() + timedelta(days=1)


def test_parse_invalid_date():
    """Test that invalid dates raise ValueError."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")


@pytest.mark.parametrize("value", ["2026-02", "12", "February 2026", "Feb 15", "10:30"])
def test_parse_rejects_partial_dates(value):
    with pytest.raises(ValueError, match="must include a year, month and day"):
        parse_date(value)


def test_parse_rejects_impossible_day():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("2024-02-30")


def test_to_date_key_normalizes():
    assert to_date_key("2024-3-5") == "2024-03-05"
    assert to_date_key(date(2024, 3, 5)) == "2024-03-05"


def test_month_key_validation():
    assert is_month_key("2024-05")
    assert not is_month_key("2024-13")
    assert not is_month_key("2024-5")
    assert not is_month_key("May 2024")


def test_month_of():
    assert month_of("2024-05-31") == "2024-05"
    assert month_of(date(2024, 12, 1)) == "2024-12"


def test_in_month_is_prefix_match():
    assert in_month("2024-05-01", "2024-05")
    assert not in_month("2024-06-01", "2024-05")
    # A malformed key is just a prefix that matches nothing sensible
    assert not in_month("2024-05-01", "2024-5")


def test_parse_month_relative():
    today = date.today()
    assert parse_month("this month") == today.strftime("%Y-%m")
    assert parse_month("Last Month") == (today - relativedelta(months=1)).strftime("%Y-%m")
    assert parse_month("next month") == (today + relativedelta(months=1)).strftime("%Y-%m")


def test_parse_month_passes_other_values_through():
    assert parse_month(" 2024-05 ") == "2024-05"
    assert parse_month("garbage") == "garbage"
