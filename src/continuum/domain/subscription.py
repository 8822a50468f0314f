"""Subscription domain service."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from continuum.database.base import Database
from continuum.domain.calculations import advance_due_date, utcnow
from continuum.domain.entities import (
    BillingCycle,
    Subscription as SubscriptionEntity,
    SubscriptionCategory,
)
from continuum.domain.errors import (
    NotFoundError,
    ValidationError,
    blank_field,
    subscription_not_found,
)

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Service for managing subscriptions and recurring payments."""

    def __init__(self, db: Database):
        """Initialize subscription service.

        Args:
            db: Database instance
        """
        self.db = db

    def validate(self, name: str) -> None:
        """Check user-entered subscription fields before saving.

        The service itself accepts any values; callers opt in to validation.

        Raises:
            ValidationError: If the name is blank
        """
        if not name or not name.strip():
            raise ValidationError(blank_field("Name"))

    def create_subscription(
        self,
        name: str = "",
        amount: Decimal = Decimal("0"),
        billing_cycle: BillingCycle = BillingCycle.MONTHLY,
        next_due_date: Optional[datetime] = None,
        category: SubscriptionCategory = SubscriptionCategory.OTHER,
        notes: str = "",
        is_subscription: bool = True,
    ) -> int:
        """Create a subscription.

        Args:
            name: Display name
            amount: Amount charged per billing cycle
            billing_cycle: Recurrence interval
            next_due_date: Next due date (defaults to now)
            category: Subscription category
            notes: Free-form notes
            is_subscription: False for recurring payments such as rent

        Returns:
            Subscription ID
        """
        if next_due_date is None:
            next_due_date = utcnow()
        subscription_id = self.db.create_subscription(
            name=name,
            amount=amount,
            billing_cycle=billing_cycle,
            next_due_date=next_due_date,
            category=category,
            notes=notes,
            is_subscription=is_subscription,
        )
        logger.info("Created subscription '%s' (ID: %d)", name, subscription_id)
        return subscription_id

    def get_subscription(self, subscription_id: int) -> Optional[SubscriptionEntity]:
        """Get subscription by ID.

        Args:
            subscription_id: Subscription ID

        Returns:
            Subscription entity or None if not found
        """
        return self.db.get_subscription(subscription_id)

    def require_subscription(self, subscription_id: int) -> SubscriptionEntity:
        """Get subscription by ID or raise NotFoundError."""
        subscription = self.db.get_subscription(subscription_id)
        if subscription is None:
            raise NotFoundError(subscription_not_found(subscription_id))
        return subscription

    def list_subscriptions(self) -> list[SubscriptionEntity]:
        """List all subscriptions, soonest due first."""
        return self.db.list_subscriptions()

    def update_subscription(
        self,
        subscription_id: int,
        name: Optional[str] = None,
        amount: Optional[Decimal] = None,
        billing_cycle: Optional[BillingCycle] = None,
        next_due_date: Optional[datetime] = None,
        category: Optional[SubscriptionCategory] = None,
        notes: Optional[str] = None,
        is_subscription: Optional[bool] = None,
    ) -> SubscriptionEntity:
        """Update subscription fields. created_at is never touched.

        Returns:
            The updated subscription

        Raises:
            NotFoundError: If subscription doesn't exist
        """
        self.require_subscription(subscription_id)
        self.db.update_subscription(
            subscription_id,
            name=name,
            amount=amount,
            billing_cycle=billing_cycle,
            next_due_date=next_due_date,
            category=category,
            notes=notes,
            is_subscription=is_subscription,
        )
        return self.require_subscription(subscription_id)

    def renew_subscription(self, subscription_id: int) -> SubscriptionEntity:
        """Advance the next due date by one billing cycle.

        Raises:
            NotFoundError: If subscription doesn't exist
        """
        subscription = self.require_subscription(subscription_id)
        next_due = advance_due_date(subscription.next_due_date, subscription.billing_cycle)
        self.db.update_subscription(subscription_id, next_due_date=next_due)
        logger.info("Renewed subscription %d until %s", subscription_id, next_due.isoformat())
        return self.require_subscription(subscription_id)

    def delete_subscription(self, subscription_id: int) -> None:
        """Delete a subscription.

        Raises:
            NotFoundError: If subscription doesn't exist
        """
        self.require_subscription(subscription_id)
        self.db.delete_subscription(subscription_id)
        logger.info("Deleted subscription %d", subscription_id)
