"""Domain model entities for continuum.

These are pure data classes representing the tracked items, independent of
database schema. Enum values are the display labels and double as the
persisted and exported representation.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class BillingCycle(Enum):
    """Recurrence interval of a subscription or recurring payment."""

    WEEKLY = "Weekly"
    BIWEEKLY = "Bi-weekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    YEARLY = "Yearly"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "BillingCycle":
        """Map a stored label to a billing cycle, defaulting to MONTHLY."""
        for cycle in cls:
            if cycle.value == value:
                return cycle
        return cls.MONTHLY


class SubscriptionCategory(Enum):
    """Category for subscriptions and recurring payments."""

    STREAMING = "Streaming"
    SOFTWARE = "Software"
    UTILITIES = "Utilities"
    INSURANCE = "Insurance"
    RENT = "Rent"
    LOAN = "Loan"
    MEMBERSHIP = "Membership"
    OTHER = "Other"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "SubscriptionCategory":
        """Map a stored label to a category, defaulting to OTHER."""
        for category in cls:
            if category.value == value:
                return category
        return cls.OTHER


class AssetCategory(Enum):
    """Category for personal assets."""

    ELECTRONICS = "Electronics"
    VEHICLE = "Vehicle"
    PROPERTY = "Property"
    JEWELRY = "Jewelry"
    COLLECTIBLES = "Collectibles"
    FURNITURE = "Furniture"
    OTHER = "Other"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "AssetCategory":
        """Map a stored label to a category, defaulting to OTHER."""
        for category in cls:
            if category.value == value:
                return category
        return cls.OTHER


@dataclass(frozen=True)
class Subscription:
    """Recurring cost entity.

    ``is_subscription`` separates subscriptions (streaming, software) from
    recurring payments (rent, loans).
    """

    id: int
    name: str
    amount: Decimal
    billing_cycle: BillingCycle
    next_due_date: datetime
    category: SubscriptionCategory
    notes: str
    is_subscription: bool
    created_at: datetime


@dataclass(frozen=True)
class AssetValueChange:
    """Historical record of a personal asset value transition."""

    id: int
    asset_id: int
    date: datetime
    previous_value: Decimal
    new_value: Decimal
    note: Optional[str] = None


@dataclass(frozen=True)
class PersonalAsset:
    """Owned item tracked for its current value."""

    id: int
    name: str
    current_value: Decimal
    purchase_date: Optional[datetime]
    category: AssetCategory
    notes: str
    created_at: datetime
    updated_at: datetime
    value_changes: tuple[AssetValueChange, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Warranty:
    """Time-bounded product coverage entity."""

    id: int
    product_name: str
    purchase_date: datetime
    expiry_date: datetime
    vendor: Optional[str]
    notes: str
    created_at: datetime
