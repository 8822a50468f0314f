"""Personal asset domain service."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from continuum.database.base import Database
from continuum.domain.entities import (
    AssetCategory,
    AssetValueChange,
    PersonalAsset as AssetEntity,
)
from continuum.domain.errors import (
    NotFoundError,
    ValidationError,
    asset_not_found,
    blank_field,
)

logger = logging.getLogger(__name__)


def total_value(assets: Sequence[AssetEntity]) -> Decimal:
    """Sum the current value of assets."""
    return sum((asset.current_value for asset in assets), Decimal("0"))


class AssetService:
    """Service for managing personal assets and their value history."""

    def __init__(self, db: Database):
        """Initialize asset service.

        Args:
            db: Database instance
        """
        self.db = db

    def validate(self, name: str) -> None:
        """Check user-entered asset fields before saving.

        Raises:
            ValidationError: If the name is blank
        """
        if not name or not name.strip():
            raise ValidationError(blank_field("Name"))

    def create_asset(
        self,
        name: str = "",
        current_value: Decimal = Decimal("0"),
        category: AssetCategory = AssetCategory.OTHER,
        purchase_date: Optional[datetime] = None,
        notes: str = "",
    ) -> int:
        """Create a personal asset.

        The initial value is not recorded as a value change; history starts
        with the first edit.

        Returns:
            Asset ID
        """
        asset_id = self.db.create_asset(
            name=name,
            current_value=current_value,
            category=category,
            purchase_date=purchase_date,
            notes=notes,
        )
        logger.info("Created asset '%s' (ID: %d)", name, asset_id)
        return asset_id

    def get_asset(self, asset_id: int) -> Optional[AssetEntity]:
        """Get asset by ID.

        Args:
            asset_id: Asset ID

        Returns:
            Asset entity (with value history) or None if not found
        """
        return self.db.get_asset(asset_id)

    def require_asset(self, asset_id: int) -> AssetEntity:
        """Get asset by ID or raise NotFoundError."""
        asset = self.db.get_asset(asset_id)
        if asset is None:
            raise NotFoundError(asset_not_found(asset_id))
        return asset

    def list_assets(self) -> list[AssetEntity]:
        """List all assets by name."""
        return self.db.list_assets()

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
    ) -> Optional[AssetValueChange]:
        """Update an asset.

        Editing the current value to a different amount appends exactly one
        value change (previous -> new); editing it to the same amount appends
        nothing. updated_at is refreshed on every call.

        Args:
            asset_id: Asset ID
            clear_purchase_date: If True, remove the purchase date
            value_change_note: Optional note stored on the value change

        Returns:
            The appended value change, or None if the value did not change

        Raises:
            NotFoundError: If asset doesn't exist
        """
        self.require_asset(asset_id)
        change_id = self.db.update_asset(
            asset_id,
            name=name,
            current_value=current_value,
            category=category,
            purchase_date=purchase_date,
            notes=notes,
            clear_purchase_date=clear_purchase_date,
            value_change_note=value_change_note,
        )
        if change_id is None:
            return None

        for change in self.db.list_value_changes(asset_id):
            if change.id == change_id:
                return change
        return None

    def value_history(self, asset_id: int, newest_first: bool = True) -> list[AssetValueChange]:
        """List an asset's value changes.

        Raises:
            NotFoundError: If asset doesn't exist
        """
        self.require_asset(asset_id)
        changes = self.db.list_value_changes(asset_id)
        if newest_first:
            changes.sort(key=lambda c: (c.date, c.id), reverse=True)
        return changes

    def delete_asset(self, asset_id: int) -> int:
        """Delete an asset together with its value history.

        Returns:
            Number of value changes removed

        Raises:
            NotFoundError: If asset doesn't exist
        """
        self.require_asset(asset_id)
        removed = self.db.delete_asset(asset_id)
        logger.info("Deleted asset %d and %d value change(s)", asset_id, removed)
        return removed
