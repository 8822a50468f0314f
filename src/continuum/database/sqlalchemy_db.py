"""Generic SQLAlchemy database implementation."""

import logging
from contextlib import contextmanager
from datetime import datetime, UTC
from decimal import Decimal
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from continuum.database.base import Collection, Database
from continuum.database.models import (
    AssetValueChange,
    PersonalAsset,
    Subscription,
    Warranty,
    create_session_factory,
)
from continuum.database.mappers import (
    asset_to_domain,
    subscription_to_domain,
    value_change_to_domain,
    warranty_to_domain,
)
from continuum.domain.entities import (
    AssetCategory,
    AssetValueChange as DomainAssetValueChange,
    BillingCycle,
    PersonalAsset as DomainPersonalAsset,
    Subscription as DomainSubscription,
    SubscriptionCategory,
    Warranty as DomainWarranty,
)
from continuum.domain.errors import (
    NotFoundError,
    PersistenceError,
    asset_not_found,
    subscription_not_found,
    warranty_not_found,
)
from continuum.domain.snapshot import Snapshot

logger = logging.getLogger(__name__)

_SUBSCRIPTION_ORDER = {
    "next_due_date": Subscription.next_due_date,
    "created_at": Subscription.created_at,
    "name": Subscription.name,
}
_ASSET_ORDER = {
    "name": PersonalAsset.name,
    "created_at": PersonalAsset.created_at,
}
_WARRANTY_ORDER = {
    "expiry_date": Warranty.expiry_date,
    "created_at": Warranty.created_at,
    "product_name": Warranty.product_name,
}


def _order_column(columns: dict, order_by: str):
    if order_by not in columns:
        raise ValueError(
            f"Unknown sort key '{order_by}'. Supported: {', '.join(sorted(columns))}"
        )
    return columns[order_by]


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        super().__init__()
        self.database_url = database_url
        try:
            self.session_factory = create_session_factory(database_url)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not open database {database_url}: {e}") from e
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    @contextmanager
    def _reading(self) -> Iterator[Session]:
        """Yield the session, translating store failures into PersistenceError."""
        session = self._get_session()
        # Other connections may have written since the last call
        session.expire_all()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Database read failed: %s", e)
            raise PersistenceError(f"Could not read from database: {e}") from e

    @contextmanager
    def _writing(self, *collections: Collection) -> Iterator[Session]:
        """Yield the session and commit on exit, then notify watchers.

        Any failure rolls the session back, so callers never observe a
        partial write.
        """
        session = self._get_session()
        session.expire_all()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Database write failed: %s", e)
            raise PersistenceError(f"Could not save changes: {e}") from e
        except Exception:
            session.rollback()
            raise
        self.notify(*collections)

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    # Subscription operations
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
        with self._writing(Collection.SUBSCRIPTIONS) as session:
            subscription = Subscription(
                name=name,
                amount=amount,
                billing_cycle=billing_cycle.value,
                next_due_date=next_due_date,
                category=category.value,
                notes=notes,
                is_subscription=is_subscription,
                created_at=created_at,
            )
            session.add(subscription)
            session.flush()
            subscription_id = subscription.id
        logger.debug("Created subscription %d", subscription_id)
        return subscription_id

    def _find_subscription(self, session: Session, subscription_id: int) -> Subscription:
        subscription = session.query(Subscription).filter(Subscription.id == subscription_id).first()
        if subscription is None:
            raise NotFoundError(subscription_not_found(subscription_id))
        return subscription

    def get_subscription(self, subscription_id: int) -> Optional[DomainSubscription]:
        """Get subscription by ID."""
        with self._reading() as session:
            subscription = (
                session.query(Subscription).filter(Subscription.id == subscription_id).first()
            )
            if subscription is None:
                return None
            return subscription_to_domain(subscription)

    def list_subscriptions(self, order_by: str = "next_due_date") -> list[DomainSubscription]:
        """List all subscriptions."""
        column = _order_column(_SUBSCRIPTION_ORDER, order_by)
        with self._reading() as session:
            subscriptions = session.query(Subscription).order_by(column, Subscription.id).all()
            return [subscription_to_domain(s) for s in subscriptions]

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
        """Update subscription fields."""
        with self._writing(Collection.SUBSCRIPTIONS) as session:
            subscription = self._find_subscription(session, subscription_id)

            if name is not None:
                subscription.name = name
            if amount is not None:
                subscription.amount = amount
            if billing_cycle is not None:
                subscription.billing_cycle = billing_cycle.value
            if next_due_date is not None:
                subscription.next_due_date = next_due_date
            if category is not None:
                subscription.category = category.value
            if notes is not None:
                subscription.notes = notes
            if is_subscription is not None:
                subscription.is_subscription = is_subscription

    def delete_subscription(self, subscription_id: int) -> None:
        """Delete a subscription."""
        with self._writing(Collection.SUBSCRIPTIONS) as session:
            subscription = self._find_subscription(session, subscription_id)
            session.delete(subscription)
        logger.debug("Deleted subscription %d", subscription_id)

    # Asset operations
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
        with self._writing(Collection.ASSETS) as session:
            asset = PersonalAsset(
                name=name,
                current_value=current_value,
                purchase_date=purchase_date,
                category=category.value,
                notes=notes,
                created_at=created_at,
                updated_at=updated_at,
            )
            session.add(asset)
            session.flush()
            asset_id = asset.id
        logger.debug("Created asset %d", asset_id)
        return asset_id

    def _find_asset(self, session: Session, asset_id: int) -> PersonalAsset:
        asset = session.query(PersonalAsset).filter(PersonalAsset.id == asset_id).first()
        if asset is None:
            raise NotFoundError(asset_not_found(asset_id))
        return asset

    def get_asset(self, asset_id: int) -> Optional[DomainPersonalAsset]:
        """Get asset by ID, including its value history."""
        with self._reading() as session:
            asset = session.query(PersonalAsset).filter(PersonalAsset.id == asset_id).first()
            if asset is None:
                return None
            return asset_to_domain(asset)

    def list_assets(self, order_by: str = "name") -> list[DomainPersonalAsset]:
        """List all assets."""
        column = _order_column(_ASSET_ORDER, order_by)
        with self._reading() as session:
            assets = session.query(PersonalAsset).order_by(column, PersonalAsset.id).all()
            return [asset_to_domain(a) for a in assets]

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
        """Update asset fields, appending a value change when the value moves."""
        change = None
        with self._writing(Collection.ASSETS) as session:
            asset = self._find_asset(session, asset_id)

            if name is not None:
                asset.name = name
            if category is not None:
                asset.category = category.value
            if clear_purchase_date:
                asset.purchase_date = None
            elif purchase_date is not None:
                asset.purchase_date = purchase_date
            if notes is not None:
                asset.notes = notes
            asset.updated_at = datetime.now(UTC)

            if current_value is not None and current_value != asset.current_value:
                change = AssetValueChange(
                    previous_value=asset.current_value,
                    new_value=current_value,
                    note=value_change_note,
                )
                asset.value_changes.append(change)
                asset.current_value = current_value
                session.flush()

        if change is None:
            return None
        logger.info("Asset %d value changed, recorded change %d", asset_id, change.id)
        return change.id

    def delete_asset(self, asset_id: int) -> int:
        """Delete an asset and its value changes."""
        with self._writing(Collection.ASSETS) as session:
            asset = self._find_asset(session, asset_id)
            changes = list(asset.value_changes)
            for change in changes:
                session.delete(change)
            session.delete(asset)
        logger.debug("Deleted asset %d with %d value change(s)", asset_id, len(changes))
        return len(changes)

    def list_value_changes(self, asset_id: int) -> list[DomainAssetValueChange]:
        """List an asset's value changes in insertion order."""
        with self._reading() as session:
            changes = (
                session.query(AssetValueChange)
                .filter(AssetValueChange.asset_id == asset_id)
                .order_by(AssetValueChange.id)
                .all()
            )
            return [value_change_to_domain(c) for c in changes]

    # Warranty operations
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
        with self._writing(Collection.WARRANTIES) as session:
            warranty = Warranty(
                product_name=product_name,
                purchase_date=purchase_date,
                expiry_date=expiry_date,
                vendor=vendor,
                notes=notes,
                created_at=created_at,
            )
            session.add(warranty)
            session.flush()
            warranty_id = warranty.id
        logger.debug("Created warranty %d", warranty_id)
        return warranty_id

    def _find_warranty(self, session: Session, warranty_id: int) -> Warranty:
        warranty = session.query(Warranty).filter(Warranty.id == warranty_id).first()
        if warranty is None:
            raise NotFoundError(warranty_not_found(warranty_id))
        return warranty

    def get_warranty(self, warranty_id: int) -> Optional[DomainWarranty]:
        """Get warranty by ID."""
        with self._reading() as session:
            warranty = session.query(Warranty).filter(Warranty.id == warranty_id).first()
            if warranty is None:
                return None
            return warranty_to_domain(warranty)

    def list_warranties(self, order_by: str = "expiry_date") -> list[DomainWarranty]:
        """List all warranties."""
        column = _order_column(_WARRANTY_ORDER, order_by)
        with self._reading() as session:
            warranties = session.query(Warranty).order_by(column, Warranty.id).all()
            return [warranty_to_domain(w) for w in warranties]

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
        """Update warranty fields."""
        with self._writing(Collection.WARRANTIES) as session:
            warranty = self._find_warranty(session, warranty_id)

            if product_name is not None:
                warranty.product_name = product_name
            if purchase_date is not None:
                warranty.purchase_date = purchase_date
            if expiry_date is not None:
                warranty.expiry_date = expiry_date
            if clear_vendor:
                warranty.vendor = None
            elif vendor is not None:
                warranty.vendor = vendor
            if notes is not None:
                warranty.notes = notes

    def delete_warranty(self, warranty_id: int) -> None:
        """Delete a warranty."""
        with self._writing(Collection.WARRANTIES) as session:
            warranty = self._find_warranty(session, warranty_id)
            session.delete(warranty)
        logger.debug("Deleted warranty %d", warranty_id)

    # Bulk operations
    def insert_snapshot(self, snapshot: Snapshot) -> None:
        """Insert every record of a snapshot in a single transaction."""
        with self._writing(
            Collection.SUBSCRIPTIONS, Collection.ASSETS, Collection.WARRANTIES
        ) as session:
            for record in snapshot.subscriptions:
                session.add(
                    Subscription(
                        name=record.name,
                        amount=record.amount,
                        billing_cycle=record.billing_cycle.value,
                        next_due_date=record.next_due_date,
                        category=record.category.value,
                        notes=record.notes,
                        is_subscription=record.is_subscription,
                        created_at=record.created_at,
                    )
                )

            for record in snapshot.assets:
                asset = PersonalAsset(
                    name=record.name,
                    current_value=record.current_value,
                    purchase_date=record.purchase_date,
                    category=record.category.value,
                    notes=record.notes,
                    created_at=record.created_at,
                    updated_at=record.updated_at,
                )
                session.add(asset)
                for change in record.value_changes:
                    asset.value_changes.append(
                        AssetValueChange(
                            date=change.date,
                            previous_value=change.previous_value,
                            new_value=change.new_value,
                            note=change.note,
                        )
                    )
                # Flush per asset so value change IDs follow snapshot order
                session.flush()

            for record in snapshot.warranties:
                session.add(
                    Warranty(
                        product_name=record.product_name,
                        purchase_date=record.purchase_date,
                        expiry_date=record.expiry_date,
                        vendor=record.vendor,
                        notes=record.notes,
                        created_at=record.created_at,
                    )
                )
