"""Tests for database mappers."""

from datetime import datetime, UTC
from decimal import Decimal

from continuum.database.models import (
    AssetValueChange as ORMAssetValueChange,
    PersonalAsset as ORMPersonalAsset,
    Subscription as ORMSubscription,
    Warranty as ORMWarranty,
)
from continuum.database.mappers import (
    asset_to_domain,
    subscription_to_domain,
    value_change_to_domain,
    warranty_to_domain,
)
from continuum.domain.entities import (
    AssetCategory,
    AssetValueChange,
    BillingCycle,
    PersonalAsset,
    Subscription,
    SubscriptionCategory,
    Warranty,
)

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


class TestSubscriptionMapper:
    """Tests for Subscription mapper."""

    def test_subscription_to_domain(self):
        orm_subscription = ORMSubscription(
            id=1,
            name="Netflix",
            amount=Decimal("15.49"),
            billing_cycle="Monthly",
            next_due_date=NOW,
            category="Streaming",
            notes="Family plan",
            is_subscription=True,
            created_at=NOW,
        )
        sub = subscription_to_domain(orm_subscription)

        assert isinstance(sub, Subscription)
        assert sub.id == 1
        assert sub.amount == Decimal("15.49")
        assert sub.billing_cycle == BillingCycle.MONTHLY
        assert sub.category == SubscriptionCategory.STREAMING
        assert sub.notes == "Family plan"

    def test_unknown_labels_use_defaults(self):
        orm_subscription = ORMSubscription(
            id=2,
            name="Odd",
            amount=Decimal("1"),
            billing_cycle="Daily",
            next_due_date=NOW,
            category="Gaming",
            notes="",
            is_subscription=False,
            created_at=NOW,
        )
        sub = subscription_to_domain(orm_subscription)

        assert sub.billing_cycle == BillingCycle.MONTHLY
        assert sub.category == SubscriptionCategory.OTHER
        assert sub.is_subscription is False


class TestAssetMapper:
    """Tests for PersonalAsset and AssetValueChange mappers."""

    def test_value_change_to_domain(self):
        orm_change = ORMAssetValueChange(
            id=5,
            asset_id=2,
            date=NOW,
            previous_value=Decimal("100"),
            new_value=Decimal("80"),
            note=None,
        )
        change = value_change_to_domain(orm_change)

        assert isinstance(change, AssetValueChange)
        assert change.asset_id == 2
        assert change.previous_value == Decimal("100")
        assert change.note is None

    def test_asset_to_domain_includes_history(self):
        orm_asset = ORMPersonalAsset(
            id=2,
            name="Camera",
            current_value=Decimal("80"),
            purchase_date=None,
            category="Electronics",
            notes="",
            created_at=NOW,
            updated_at=NOW,
        )
        orm_asset.value_changes.append(
            ORMAssetValueChange(
                id=5, asset_id=2, date=NOW, previous_value=Decimal("100"), new_value=Decimal("80")
            )
        )
        asset = asset_to_domain(orm_asset)

        assert isinstance(asset, PersonalAsset)
        assert asset.category == AssetCategory.ELECTRONICS
        assert asset.purchase_date is None
        assert len(asset.value_changes) == 1
        assert asset.value_changes[0].new_value == Decimal("80")


class TestWarrantyMapper:
    """Tests for Warranty mapper."""

    def test_warranty_to_domain(self):
        orm_warranty = ORMWarranty(
            id=3,
            product_name="Dishwasher",
            purchase_date=NOW,
            expiry_date=NOW.replace(year=2028),
            vendor="Bosch",
            notes="",
            created_at=NOW,
        )
        warranty = warranty_to_domain(orm_warranty)

        assert isinstance(warranty, Warranty)
        assert warranty.product_name == "Dishwasher"
        assert warranty.vendor == "Bosch"
        assert warranty.expiry_date.year == 2028
