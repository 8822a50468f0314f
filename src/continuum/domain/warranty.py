"""Warranty domain service."""

import logging
from datetime import datetime
from typing import Optional

from dateutil.relativedelta import relativedelta

from continuum.database.base import Database
from continuum.domain.calculations import utcnow
from continuum.domain.entities import Warranty as WarrantyEntity
from continuum.domain.errors import (
    NotFoundError,
    ValidationError,
    blank_field,
    warranty_not_found,
)

logger = logging.getLogger(__name__)


class WarrantyService:
    """Service for managing product warranties."""

    def __init__(self, db: Database):
        """Initialize warranty service.

        Args:
            db: Database instance
        """
        self.db = db

    def validate(self, product_name: str) -> None:
        """Check user-entered warranty fields before saving.

        Raises:
            ValidationError: If the product name is blank
        """
        if not product_name or not product_name.strip():
            raise ValidationError(blank_field("Product name"))

    def create_warranty(
        self,
        product_name: str = "",
        purchase_date: Optional[datetime] = None,
        expiry_date: Optional[datetime] = None,
        vendor: Optional[str] = None,
        notes: str = "",
    ) -> int:
        """Create a warranty.

        Args:
            product_name: Covered product
            purchase_date: Purchase date (defaults to now)
            expiry_date: End of coverage (defaults to one year from now)
            vendor: Seller or manufacturer (None when unknown)
            notes: Free-form notes

        Returns:
            Warranty ID
        """
        now = utcnow()
        if purchase_date is None:
            purchase_date = now
        if expiry_date is None:
            expiry_date = now + relativedelta(years=1)
        warranty_id = self.db.create_warranty(
            product_name=product_name,
            purchase_date=purchase_date,
            expiry_date=expiry_date,
            vendor=vendor,
            notes=notes,
        )
        logger.info("Created warranty '%s' (ID: %d)", product_name, warranty_id)
        return warranty_id

    def get_warranty(self, warranty_id: int) -> Optional[WarrantyEntity]:
        """Get warranty by ID."""
        return self.db.get_warranty(warranty_id)

    def require_warranty(self, warranty_id: int) -> WarrantyEntity:
        """Get warranty by ID or raise NotFoundError."""
        warranty = self.db.get_warranty(warranty_id)
        if warranty is None:
            raise NotFoundError(warranty_not_found(warranty_id))
        return warranty

    def list_warranties(self) -> list[WarrantyEntity]:
        """List all warranties, soonest expiry first."""
        return self.db.list_warranties()

    def update_warranty(
        self,
        warranty_id: int,
        product_name: Optional[str] = None,
        purchase_date: Optional[datetime] = None,
        expiry_date: Optional[datetime] = None,
        vendor: Optional[str] = None,
        notes: Optional[str] = None,
        clear_vendor: bool = False,
    ) -> WarrantyEntity:
        """Update warranty fields.

        Args:
            clear_vendor: If True, remove the vendor

        Raises:
            NotFoundError: If warranty doesn't exist
        """
        self.require_warranty(warranty_id)
        self.db.update_warranty(
            warranty_id,
            product_name=product_name,
            purchase_date=purchase_date,
            expiry_date=expiry_date,
            vendor=vendor,
            notes=notes,
            clear_vendor=clear_vendor,
        )
        return self.require_warranty(warranty_id)

    def delete_warranty(self, warranty_id: int) -> None:
        """Delete a warranty.

        Raises:
            NotFoundError: If warranty doesn't exist
        """
        self.require_warranty(warranty_id)
        self.db.delete_warranty(warranty_id)
        logger.info("Deleted warranty %d", warranty_id)
