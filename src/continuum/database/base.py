"""Abstract database interface."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional

# Import domain modules directly to avoid circular import through domain/__init__.py
from continuum.domain.entities import (
    AssetCategory,
    AssetValueChange,
    BillingCycle,
    PersonalAsset,
    Subscription,
    SubscriptionCategory,
    Warranty,
)
from continuum.domain.snapshot import Snapshot

logger = logging.getLogger(__name__)


class Collection(Enum):
    """Independently observable entity collections."""

    SUBSCRIPTIONS = "subscriptions"
    ASSETS = "assets"
    WARRANTIES = "warranties"


Watcher = Callable[[list[Any]], None]


class Database(ABC):
    """Abstract database interface for continuum.

    Besides the CRUD operations, a database keeps live queries: callbacks
    registered with ``watch`` receive the freshly sorted collection after every
    committed change to it.
    """

    def __init__(self):
        self._watchers: dict[Collection, list[Watcher]] = {}

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Live queries
    def watch(self, collection: Collection, callback: Watcher) -> Callable[[], None]:
        """Register a callback for a collection and deliver its current contents.

        Returns:
            Function that unregisters the callback
        """
        watchers = self._watchers.setdefault(collection, [])
        watchers.append(callback)
        callback(self.list_collection(collection))

        def unwatch() -> None:
            if callback in watchers:
                watchers.remove(callback)

        return unwatch

    def notify(self, *collections: Collection) -> None:
        """Push fresh contents of the given collections to their watchers."""
        for collection in collections:
            watchers = self._watchers.get(collection)
            if not watchers:
                continue
            items = self.list_collection(collection)
            logger.debug("Notifying %d watcher(s) of %s", len(watchers), collection.value)
            for callback in list(watchers):
                callback(items)

    def list_collection(self, collection: Collection) -> list[Any]:
        """List a collection in its default order."""
        if collection == Collection.SUBSCRIPTIONS:
            return self.list_subscriptions()
        if collection == Collection.ASSETS:
            return self.list_assets()
        return self.list_warranties()

    # Subscription operations
    @abstractmethod
    def create_subscription(
        self,
        name: str,
        amount: Decimal,
        billing_cycle: BillingCycle,
        next_due_date: datetime,
        category: SubscriptionCategory,
        notes: str = "",
        is_subscription: bool = True,
        created_at: Optional[datetime] = None,
    ) -> int:
        """Create a subscription. Returns subscription ID."""
        pass

    @abstractmethod
    def get_subscription(self, subscription_id: int) -> Optional[Subscription]:
        """Get subscription by ID."""
        pass

    @abstractmethod
    def list_subscriptions(self, order_by: str = "next_due_date") -> list[Subscription]:
        """List all subscriptions.

        Args:
            order_by: "next_due_date" (default), "created_at" or "name"
        """
        pass

    @abstractmethod
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
    ) -> None:
        """Update subscription fields. None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_subscription(self, subscription_id: int) -> None:
        """Delete a subscription."""
        pass

    # Asset operations
    @abstractmethod
    def create_asset(
        self,
        name: str,
        current_value: Decimal,
        category: AssetCategory,
        purchase_date: Optional[datetime] = None,
        notes: str = "",
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> int:
        """Create a personal asset. Returns asset ID."""
        pass

    @abstractmethod
    def get_asset(self, asset_id: int) -> Optional[PersonalAsset]:
        """Get asset by ID, including its value history."""
        pass

    @abstractmethod
    def list_assets(self, order_by: str = "name") -> list[PersonalAsset]:
        """List all assets.

        Args:
            order_by: "name" (default) or "created_at"
        """
        pass

    @abstractmethod
    def update_asset(
        self,
        asset_id: int,
        name: Optional[str] = None,
        current_value: Optional[Decimal] = None,
        category: Optional[AssetCategory] = None,
        purchase_date: Optional[datetime] = None,
        notes: Optional[str] = None,
        clear_purchase_date: bool = False,
        value_change_note: Optional[str] = None,
    ) -> Optional[int]:
        """Update asset fields and refresh updated_at.

        A current_value different from the stored one appends a value change
        in the same transaction.

        Returns:
            ID of the appended value change, or None if the value did not change
        """
        pass

    @abstractmethod
    def delete_asset(self, asset_id: int) -> int:
        """Delete an asset and its value changes. Returns number of changes removed."""
        pass

    @abstractmethod
    def list_value_changes(self, asset_id: int) -> list[AssetValueChange]:
        """List an asset's value changes in insertion order."""
        pass

    # Warranty operations
    @abstractmethod
    def create_warranty(
        self,
        product_name: str,
        purchase_date: datetime,
        expiry_date: datetime,
        vendor: Optional[str] = None,
        notes: str = "",
        created_at: Optional[datetime] = None,
    ) -> int:
        """Create a warranty. Returns warranty ID."""
        pass

    @abstractmethod
    def get_warranty(self, warranty_id: int) -> Optional[Warranty]:
        """Get warranty by ID."""
        pass

    @abstractmethod
    def list_warranties(self, order_by: str = "expiry_date") -> list[Warranty]:
        """List all warranties.

        Args:
            order_by: "expiry_date" (default), "created_at" or "product_name"
        """
        pass

    @abstractmethod
    def update_warranty(
        self,
        warranty_id: int,
        product_name: Optional[str] = None,
        purchase_date: Optional[datetime] = None,
        expiry_date: Optional[datetime] = None,
        vendor: Optional[str] = None,
        notes: Optional[str] = None,
        clear_vendor: bool = False,
    ) -> None:
        """Update warranty fields. None leaves a field unchanged; clear_vendor removes the vendor."""
        pass

    @abstractmethod
    def delete_warranty(self, warranty_id: int) -> None:
        """Delete a warranty."""
        pass

    # Bulk operations
    @abstractmethod
    def insert_snapshot(self, snapshot: Snapshot) -> None:
        """Insert every record of a snapshot in a single transaction.

        Nothing is inserted if any insertion fails.
        """
        pass
