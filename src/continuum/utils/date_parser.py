"""Date parsing utilities."""

import re
from datetime import date, datetime, time, timedelta, tzinfo as TZInfo, UTC
from typing import Optional

from dateutil import parser as date_parser
from dateutil import tz
from dateutil.relativedelta import relativedelta

_IN_PATTERN = re.compile(r"^in (\d+) (day|week|month|year)s?$")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "tomorrow", "next month", "in 3 months", etc.

    Args:
        date_str: Date string in various formats

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
        "next week": today + timedelta(days=7),
        "next month": today + relativedelta(months=1),
        "next year": today + relativedelta(years=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    match = _IN_PATTERN.match(date_str)
    if match:
        count = int(match.group(1))
        unit = match.group(2)
        if unit == "day":
            return today + timedelta(days=count)
        elif unit == "week":
            return today + timedelta(weeks=count)
        elif unit == "month":
            return today + relativedelta(months=count)
        return today + relativedelta(years=count)

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def start_of_day(day: date, tzinfo: Optional[TZInfo] = None) -> datetime:
    """Return local midnight of ``day`` as an aware UTC datetime."""
    zone = tzinfo if tzinfo is not None else tz.tzlocal()
    return datetime.combine(day, time.min, tzinfo=zone).astimezone(UTC)


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Timestamps without an offset are taken to be UTC.

    Raises:
        ValueError: If the text is not ISO-8601
    """
    try:
        value = date_parser.isoparse(text)
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse timestamp '{text}': {e}")


def format_timestamp(value: datetime) -> str:
    """Render an aware datetime as an ISO-8601 UTC string."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()
