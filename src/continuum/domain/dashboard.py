"""Dashboard aggregation domain service."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from continuum.database.base import Database
from continuum.domain.asset import total_value
from continuum.domain.calculations import (
    is_due_soon,
    is_expiring_soon,
    monthly_equivalent,
    utcnow,
)
from continuum.domain.entities import Subscription, Warranty


@dataclass(frozen=True)
class MonthlyBreakdownLine:
    """One subscription's share of the monthly recurring total."""

    subscription: Subscription
    monthly_amount: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Figures shown on the dashboard."""

    monthly_recurring_total: Decimal
    total_assets_value: Decimal
    subscription_count: int
    recurring_payment_count: int
    warranty_count: int
    upcoming_renewals: tuple[Subscription, ...]
    expiring_warranties: tuple[Warranty, ...]


def monthly_recurring_total(subscriptions: Sequence[Subscription]) -> Decimal:
    """Sum monthly equivalents of every subscription and recurring payment."""
    return sum((monthly_equivalent(s) for s in subscriptions), Decimal("0"))


def monthly_breakdown(subscriptions: Sequence[Subscription]) -> list[MonthlyBreakdownLine]:
    """Pair each subscription with its monthly equivalent, largest first."""
    lines = [MonthlyBreakdownLine(s, monthly_equivalent(s)) for s in subscriptions]
    lines.sort(key=lambda line: line.monthly_amount, reverse=True)
    return lines


class DashboardService:
    """Service for building dashboard summaries."""

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_summary(self, now: Optional[datetime] = None) -> DashboardSummary:
        """Aggregate the dashboard figures.

        Upcoming renewals are subscriptions due within 30 days, past-due ones
        included; expiring warranties are active ones ending within 30 days.
        Both are ordered by date.
        """
        if now is None:
            now = utcnow()
        subscriptions = self.db.list_subscriptions()
        assets = self.db.list_assets()
        warranties = self.db.list_warranties()

        renewals = sorted(
            (s for s in subscriptions if is_due_soon(s, now)), key=lambda s: s.next_due_date
        )
        expiring = sorted(
            (w for w in warranties if is_expiring_soon(w, now)), key=lambda w: w.expiry_date
        )

        return DashboardSummary(
            monthly_recurring_total=monthly_recurring_total(subscriptions),
            total_assets_value=total_value(assets),
            subscription_count=sum(1 for s in subscriptions if s.is_subscription),
            recurring_payment_count=sum(1 for s in subscriptions if not s.is_subscription),
            warranty_count=len(warranties),
            upcoming_renewals=tuple(renewals),
            expiring_warranties=tuple(expiring),
        )

    def monthly_breakdown(self) -> list[MonthlyBreakdownLine]:
        """Monthly equivalents of all subscriptions, largest first."""
        return monthly_breakdown(self.db.list_subscriptions())
