"""Utility functions for continuum."""

from continuum.utils.date_parser import (
    parse_date,
    parse_timestamp,
    format_timestamp,
    start_of_day,
)
from continuum.utils.amount_parser import parse_amount, coerce_decimal

__all__ = [
    "parse_date",
    "parse_timestamp",
    "format_timestamp",
    "start_of_day",
    "parse_amount",
    "coerce_decimal",
]
