"""Calendar domain service.

Places subscription due dates and warranty expiry dates on calendar days.
"""

import calendar
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta, tzinfo as TZInfo
from typing import Optional

from continuum.database.base import Database
from continuum.domain.calculations import local_date
from continuum.domain.entities import Subscription, Warranty


@dataclass(frozen=True)
class CalendarDay:
    """Renewals and expirations falling on one day."""

    day: date
    renewals: tuple[Subscription, ...] = ()
    expirations: tuple[Warranty, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.renewals and not self.expirations


def month_range(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def week_range(day: date) -> tuple[date, date]:
    """Return Monday and Sunday of the week containing ``day``."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


class CalendarService:
    """Service for calendar views of due and expiry dates."""

    def __init__(self, db: Database, tzinfo: Optional[TZInfo] = None):
        """Initialize calendar service.

        Args:
            db: Database instance
            tzinfo: Zone whose day boundaries are used (local zone by default)
        """
        self.db = db
        self.tzinfo = tzinfo

    def events_between(self, start: date, end: date) -> list[CalendarDay]:
        """List days from start to end (inclusive) that have events, in date order."""
        renewals: dict[date, list[Subscription]] = defaultdict(list)
        expirations: dict[date, list[Warranty]] = defaultdict(list)

        for subscription in self.db.list_subscriptions():
            day = local_date(subscription.next_due_date, self.tzinfo)
            if start <= day <= end:
                renewals[day].append(subscription)

        for warranty in self.db.list_warranties():
            day = local_date(warranty.expiry_date, self.tzinfo)
            if start <= day <= end:
                expirations[day].append(warranty)

        days = sorted(set(renewals) | set(expirations))
        return [
            CalendarDay(day=d, renewals=tuple(renewals[d]), expirations=tuple(expirations[d]))
            for d in days
        ]

    def events_for_day(self, day: date) -> CalendarDay:
        """Return the events of a single day (possibly empty)."""
        for entry in self.events_between(day, day):
            return entry
        return CalendarDay(day=day)

    def events_for_month(self, year: int, month: int) -> list[CalendarDay]:
        """List days of a month that have events."""
        return self.events_between(*month_range(year, month))

    def events_for_week(self, day: date) -> list[CalendarDay]:
        """List days of the week containing ``day`` that have events."""
        return self.events_between(*week_range(day))
