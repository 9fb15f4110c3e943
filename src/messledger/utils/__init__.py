"""Utility functions for messledger."""

from messledger.utils.date_parser import parse_date, to_date_key
from messledger.utils.amount_parser import parse_amount
from messledger.utils.month import parse_month, month_of

__all__ = ["parse_date", "to_date_key", "parse_amount", "parse_month", "month_of"]
