"""List filtering helpers.

The database returns unfiltered, sorted collections; views narrow them down
with these functions. All of them keep the input order.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Sequence, TypeVar

from continuum.domain.calculations import (
    is_due_soon,
    is_expired,
    is_expiring_soon,
    is_past_due,
    utcnow,
)
from continuum.domain.entities import PersonalAsset, Subscription, Warranty

T = TypeVar("T", Subscription, PersonalAsset)


class SubscriptionStatus(Enum):
    """Status buckets for subscriptions."""

    ALL = "all"
    PAST_DUE = "past-due"
    DUE_SOON = "due-soon"
    UPCOMING = "upcoming"


class WarrantyStatus(Enum):
    """Status buckets for warranties."""

    ALL = "all"
    ACTIVE = "active"
    EXPIRING = "expiring"
    EXPIRED = "expired"


def _matches(text: str, *fields: Optional[str]) -> bool:
    needle = text.strip().casefold()
    if not needle:
        return True
    return any(needle in value.casefold() for value in fields if value)


def filter_by_category(items: Sequence[T], category) -> list[T]:
    """Keep subscriptions or assets of one category (None keeps everything)."""
    if category is None:
        return list(items)
    return [item for item in items if item.category == category]


def search_subscriptions(subscriptions: Sequence[Subscription], text: str) -> list[Subscription]:
    """Case-insensitive search over name and category label."""
    return [s for s in subscriptions if _matches(text, s.name, s.category.value)]


def search_assets(assets: Sequence[PersonalAsset], text: str) -> list[PersonalAsset]:
    """Case-insensitive search over name and category label."""
    return [a for a in assets if _matches(text, a.name, a.category.value)]


def search_warranties(warranties: Sequence[Warranty], text: str) -> list[Warranty]:
    """Case-insensitive search over product name and vendor."""
    return [w for w in warranties if _matches(text, w.product_name, w.vendor)]


def filter_subscriptions_by_status(
    subscriptions: Sequence[Subscription],
    status: SubscriptionStatus,
    now: Optional[datetime] = None,
) -> list[Subscription]:
    """Keep subscriptions in a status bucket.

    DUE_SOON excludes past-due items; UPCOMING is everything due later than
    the due-soon window.
    """
    if now is None:
        now = utcnow()
    if status == SubscriptionStatus.PAST_DUE:
        return [s for s in subscriptions if is_past_due(s, now)]
    if status == SubscriptionStatus.DUE_SOON:
        return [s for s in subscriptions if not is_past_due(s, now) and is_due_soon(s, now)]
    if status == SubscriptionStatus.UPCOMING:
        return [s for s in subscriptions if not is_due_soon(s, now)]
    return list(subscriptions)


def filter_warranties_by_status(
    warranties: Sequence[Warranty],
    status: WarrantyStatus,
    now: Optional[datetime] = None,
) -> list[Warranty]:
    """Keep warranties in a status bucket."""
    if now is None:
        now = utcnow()
    if status == WarrantyStatus.ACTIVE:
        return [w for w in warranties if not is_expired(w, now)]
    if status == WarrantyStatus.EXPIRING:
        return [w for w in warranties if is_expiring_soon(w, now)]
    if status == WarrantyStatus.EXPIRED:
        return [w for w in warranties if is_expired(w, now)]
    return list(warranties)
