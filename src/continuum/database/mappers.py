"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the translation of stored
enum labels back into domain enums.
"""

from continuum.domain import entities as domain
from continuum.database.models import (
    Subscription as ORMSubscription,
    PersonalAsset as ORMPersonalAsset,
    AssetValueChange as ORMAssetValueChange,
    Warranty as ORMWarranty,
)


def subscription_to_domain(orm_subscription: ORMSubscription) -> domain.Subscription:
    """Convert SQLAlchemy Subscription model to domain Subscription entity."""
    return domain.Subscription(
        id=orm_subscription.id,
        name=orm_subscription.name,
        amount=orm_subscription.amount,
        billing_cycle=domain.BillingCycle.from_value(orm_subscription.billing_cycle),
        next_due_date=orm_subscription.next_due_date,
        category=domain.SubscriptionCategory.from_value(orm_subscription.category),
        notes=orm_subscription.notes,
        is_subscription=orm_subscription.is_subscription,
        created_at=orm_subscription.created_at,
    )


def value_change_to_domain(orm_change: ORMAssetValueChange) -> domain.AssetValueChange:
    """Convert SQLAlchemy AssetValueChange model to domain AssetValueChange entity."""
    return domain.AssetValueChange(
        id=orm_change.id,
        asset_id=orm_change.asset_id,
        date=orm_change.date,
        previous_value=orm_change.previous_value,
        new_value=orm_change.new_value,
        note=orm_change.note,
    )


def asset_to_domain(orm_asset: ORMPersonalAsset) -> domain.PersonalAsset:
    """Convert SQLAlchemy PersonalAsset model (with its history) to a domain entity."""
    return domain.PersonalAsset(
        id=orm_asset.id,
        name=orm_asset.name,
        current_value=orm_asset.current_value,
        purchase_date=orm_asset.purchase_date,
        category=domain.AssetCategory.from_value(orm_asset.category),
        notes=orm_asset.notes,
        created_at=orm_asset.created_at,
        updated_at=orm_asset.updated_at,
        value_changes=tuple(value_change_to_domain(c) for c in orm_asset.value_changes),
    )


def warranty_to_domain(orm_warranty: ORMWarranty) -> domain.Warranty:
    """Convert SQLAlchemy Warranty model to domain Warranty entity."""
    return domain.Warranty(
        id=orm_warranty.id,
        product_name=orm_warranty.product_name,
        purchase_date=orm_warranty.purchase_date,
        expiry_date=orm_warranty.expiry_date,
        vendor=orm_warranty.vendor,
        notes=orm_warranty.notes,
        created_at=orm_warranty.created_at,
    )
