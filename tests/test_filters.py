"""Tests for list filters."""

from datetime import datetime, timedelta, UTC
from decimal import Decimal

from continuum.domain.entities import (
    AssetCategory,
    BillingCycle,
    PersonalAsset,
    Subscription,
    SubscriptionCategory,
    Warranty,
)
from continuum.domain.filters import (
    SubscriptionStatus,
    WarrantyStatus,
    filter_by_category,
    filter_subscriptions_by_status,
    filter_warranties_by_status,
    search_assets,
    search_subscriptions,
    search_warranties,
)

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def sub(name, days, category=SubscriptionCategory.OTHER):
    return Subscription(
        id=len(name),
        name=name,
        amount=Decimal("1"),
        billing_cycle=BillingCycle.MONTHLY,
        next_due_date=NOW + timedelta(days=days),
        category=category,
        notes="",
        is_subscription=True,
        created_at=NOW,
    )


def asset(name, category):
    return PersonalAsset(
        id=1,
        name=name,
        current_value=Decimal("1"),
        purchase_date=None,
        category=category,
        notes="",
        created_at=NOW,
        updated_at=NOW,
    )


def warranty(name, days, vendor=""):
    return Warranty(
        id=1,
        product_name=name,
        purchase_date=NOW - timedelta(days=300),
        expiry_date=NOW + timedelta(days=days),
        vendor=vendor,
        notes="",
        created_at=NOW,
    )


SUBSCRIPTIONS = [
    sub("Overdue insurance", -2, SubscriptionCategory.INSURANCE),
    sub("Netflix", 5, SubscriptionCategory.STREAMING),
    sub("Domain renewal", 90, SubscriptionCategory.SOFTWARE),
]


def test_filter_by_category():
    result = filter_by_category(SUBSCRIPTIONS, SubscriptionCategory.STREAMING)
    assert [s.name for s in result] == ["Netflix"]


def test_filter_by_category_none_keeps_all():
    assert filter_by_category(SUBSCRIPTIONS, None) == SUBSCRIPTIONS


def test_search_subscriptions_matches_name_and_category():
    assert [s.name for s in search_subscriptions(SUBSCRIPTIONS, "NETFLIX")] == ["Netflix"]
    assert [s.name for s in search_subscriptions(SUBSCRIPTIONS, "software")] == ["Domain renewal"]


def test_blank_search_keeps_everything():
    assert search_subscriptions(SUBSCRIPTIONS, "  ") == SUBSCRIPTIONS


def test_search_assets():
    assets = [asset("Road bike", AssetCategory.OTHER), asset("Necklace", AssetCategory.JEWELRY)]
    assert [a.name for a in search_assets(assets, "jewel")] == ["Necklace"]
    assert [a.name for a in search_assets(assets, "bike")] == ["Road bike"]


def test_search_warranties_matches_vendor():
    warranties = [warranty("Fridge", 10, vendor="Miele"), warranty("Drill", 10, vendor="Bosch")]
    assert [w.product_name for w in search_warranties(warranties, "bosch")] == ["Drill"]


def test_subscription_status_buckets():
    def names(status):
        return [s.name for s in filter_subscriptions_by_status(SUBSCRIPTIONS, status, now=NOW)]

    assert names(SubscriptionStatus.PAST_DUE) == ["Overdue insurance"]
    assert names(SubscriptionStatus.DUE_SOON) == ["Netflix"]
    assert names(SubscriptionStatus.UPCOMING) == ["Domain renewal"]
    assert len(names(SubscriptionStatus.ALL)) == 3


def test_warranty_status_buckets():
    warranties = [warranty("Old", -1), warranty("Soon", 12), warranty("Later", 200)]

    def names(status):
        return [w.product_name for w in filter_warranties_by_status(warranties, status, now=NOW)]

    assert names(WarrantyStatus.EXPIRED) == ["Old"]
    assert names(WarrantyStatus.EXPIRING) == ["Soon"]
    assert names(WarrantyStatus.ACTIVE) == ["Soon", "Later"]
    assert names(WarrantyStatus.ALL) == ["Old", "Soon", "Later"]
