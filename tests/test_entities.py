"""Tests for domain entities."""

import dataclasses
from datetime import datetime, UTC
from decimal import Decimal

import pytest

from continuum.domain.entities import (
    AssetCategory,
    AssetValueChange,
    BillingCycle,
    PersonalAsset,
    Subscription,
    SubscriptionCategory,
    Warranty,
)


def test_billing_cycle_labels():
    """Billing cycle values are their display labels."""
    assert [c.value for c in BillingCycle] == [
        "Weekly",
        "Bi-weekly",
        "Monthly",
        "Quarterly",
        "Yearly",
    ]


@pytest.mark.parametrize(
    "enum_cls,label,expected",
    [
        (BillingCycle, "Bi-weekly", BillingCycle.BIWEEKLY),
        (BillingCycle, "Fortnightly", BillingCycle.MONTHLY),
        (BillingCycle, None, BillingCycle.MONTHLY),
        (SubscriptionCategory, "Streaming", SubscriptionCategory.STREAMING),
        (SubscriptionCategory, "streaming", SubscriptionCategory.OTHER),
        (AssetCategory, "Vehicle", AssetCategory.VEHICLE),
        (AssetCategory, "Boat", AssetCategory.OTHER),
    ],
)
def test_from_value_is_total(enum_cls, label, expected):
    """Unknown labels fall back to the enum default instead of raising."""
    assert enum_cls.from_value(label) is expected


def test_subscription_is_immutable():
    """Entities are frozen dataclasses."""
    sub = Subscription(
        id=1,
        name="Netflix",
        amount=Decimal("15.49"),
        billing_cycle=BillingCycle.MONTHLY,
        next_due_date=datetime(2026, 4, 1, tzinfo=UTC),
        category=SubscriptionCategory.STREAMING,
        notes="",
        is_subscription=True,
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
    )
    with pytest.raises(dataclasses.FrozenInstanceError):
        sub.amount = Decimal("1")


def test_asset_defaults_to_empty_history():
    asset = PersonalAsset(
        id=1,
        name="Car",
        current_value=Decimal("18500"),
        purchase_date=None,
        category=AssetCategory.VEHICLE,
        notes="",
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
        updated_at=datetime(2026, 1, 1, tzinfo=UTC),
    )
    assert asset.value_changes == ()
    assert asset.purchase_date is None


def test_value_change_note_is_optional():
    change = AssetValueChange(
        id=1,
        asset_id=1,
        date=datetime(2026, 1, 1, tzinfo=UTC),
        previous_value=Decimal("10"),
        new_value=Decimal("12"),
    )
    assert change.note is None


def test_warranty_fields():
    warranty = Warranty(
        id=3,
        product_name="Headphones",
        purchase_date=datetime(2025, 1, 1, tzinfo=UTC),
        expiry_date=datetime(2027, 1, 1, tzinfo=UTC),
        vendor="Sony",
        notes="Receipt in drawer",
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
    )
    assert warranty.vendor == "Sony"
    assert warranty.expiry_date > warranty.purchase_date
