"""Derived-field calculations for subscriptions, assets and warranties.

Every function here is pure: entities are read, never mutated, and "now" is
evaluated at call time unless passed explicitly. Money math stays in
``Decimal`` using the default context (28 significant digits, half-even), so
summing many monthly equivalents does not drift the way binary floats do.
Values are only rounded to cents for display, via ``quantize_money``.
"""

from datetime import date, datetime, timedelta, tzinfo as TZInfo, UTC
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional

from dateutil import tz
from dateutil.relativedelta import relativedelta

from continuum.domain.entities import (
    AssetValueChange,
    BillingCycle,
    Subscription,
    Warranty,
)

CENTS = Decimal("0.01")
SOON_DAYS = 30

# Calendar-aware steps; relativedelta clamps to month end (Jan 31 + 1 month = Feb 28/29)
_CYCLE_STEPS = {
    BillingCycle.WEEKLY: relativedelta(days=7),
    BillingCycle.BIWEEKLY: relativedelta(days=14),
    BillingCycle.MONTHLY: relativedelta(months=1),
    BillingCycle.QUARTERLY: relativedelta(months=3),
    BillingCycle.YEARLY: relativedelta(years=1),
}


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def local_date(moment: datetime, tzinfo: Optional[TZInfo] = None) -> date:
    """Return the calendar date of ``moment`` in ``tzinfo`` (local zone by default).

    Naive datetimes are treated as UTC.
    """
    zone = tzinfo if tzinfo is not None else tz.tzlocal()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(zone).date()


def quantize_money(value: Decimal) -> Decimal:
    """Round a money value to cents (half-up) for display.

    Precision grows with the magnitude so very large amounts still fit.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def monthly_equivalent(subscription: Subscription) -> Decimal:
    """Normalize a subscription's cost to a per-month figure."""
    amount = subscription.amount
    cycle = subscription.billing_cycle
    if cycle == BillingCycle.WEEKLY:
        return amount * 52 / 12
    if cycle == BillingCycle.BIWEEKLY:
        return amount * 26 / 12
    if cycle == BillingCycle.QUARTERLY:
        return amount / 3
    if cycle == BillingCycle.YEARLY:
        return amount / 12
    return amount


def advance_due_date(due_date: datetime, billing_cycle: BillingCycle) -> datetime:
    """Move a due date forward by one billing cycle."""
    return due_date + _CYCLE_STEPS[billing_cycle]


def next_renewal_date(subscription: Subscription) -> datetime:
    """Return the due date following the subscription's current one."""
    return advance_due_date(subscription.next_due_date, subscription.billing_cycle)


def is_past_due(subscription: Subscription, now: Optional[datetime] = None) -> bool:
    """True when the next due date has already elapsed."""
    if now is None:
        now = utcnow()
    return subscription.next_due_date < now


def is_due_soon(
    subscription: Subscription, now: Optional[datetime] = None, days: int = SOON_DAYS
) -> bool:
    """True when the subscription is due within ``days`` (past due included)."""
    if now is None:
        now = utcnow()
    return subscription.next_due_date <= now + timedelta(days=days)


def is_expired(warranty: Warranty, now: Optional[datetime] = None) -> bool:
    """True when the warranty's expiry date has already elapsed."""
    if now is None:
        now = utcnow()
    return warranty.expiry_date < now


def is_expiring_soon(
    warranty: Warranty, now: Optional[datetime] = None, days: int = SOON_DAYS
) -> bool:
    """True when the warranty is still active but expires within ``days``."""
    if now is None:
        now = utcnow()
    return not is_expired(warranty, now) and warranty.expiry_date <= now + timedelta(days=days)


def days_until_expiry(
    warranty: Warranty, now: Optional[datetime] = None, tzinfo: Optional[TZInfo] = None
) -> int:
    """Count calendar days from today to the expiry date.

    Negative once the warranty has expired. Day boundaries are taken in
    ``tzinfo`` (the local zone by default), so a warranty expiring late
    tomorrow evening is 1 day away even if fewer than 24 hours remain.
    """
    if now is None:
        now = utcnow()
    return (local_date(warranty.expiry_date, tzinfo) - local_date(now, tzinfo)).days


def change_amount(change: AssetValueChange) -> Decimal:
    """Return the signed difference of a value change."""
    return change.new_value - change.previous_value


def change_percent(change: AssetValueChange) -> Optional[Decimal]:
    """Return the relative change as a fraction, or None from a zero base."""
    if change.previous_value == 0:
        return None
    return (change.new_value - change.previous_value) / change.previous_value
