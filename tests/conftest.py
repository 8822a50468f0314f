"""Shared pytest fixtures for continuum tests."""

import tempfile
import os
from datetime import datetime, timedelta, UTC
from decimal import Decimal

import pytest
from click.testing import CliRunner

from continuum.database.factories import create_sqlite_database
from continuum.domain.asset import AssetService
from continuum.domain.backup import BackupService
from continuum.domain.entities import (
    AssetCategory,
    BillingCycle,
    SubscriptionCategory,
)
from continuum.domain.subscription import SubscriptionService
from continuum.domain.warranty import WarrantyService

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def other_db():
    """A second, empty database for restore tests."""
    db = create_sqlite_database(database_path=":memory:")
    db.connect()
    db.initialize_schema()
    yield db
    db.disconnect()


@pytest.fixture
def subscription_service(temp_db):
    """Create a SubscriptionService with a temporary database."""
    return SubscriptionService(temp_db)


@pytest.fixture
def asset_service(temp_db):
    """Create an AssetService with a temporary database."""
    return AssetService(temp_db)


@pytest.fixture
def warranty_service(temp_db):
    """Create a WarrantyService with a temporary database."""
    return WarrantyService(temp_db)


@pytest.fixture
def backup_service(temp_db):
    """Create a BackupService with a temporary database."""
    return BackupService(temp_db)


@pytest.fixture
def sample_subscription(subscription_service):
    """Create a monthly streaming subscription."""
    subscription_id = subscription_service.create_subscription(
        name="Netflix",
        amount=Decimal("15.49"),
        billing_cycle=BillingCycle.MONTHLY,
        next_due_date=NOW + timedelta(days=10),
        category=SubscriptionCategory.STREAMING,
    )
    return subscription_service.get_subscription(subscription_id)


@pytest.fixture
def sample_asset(asset_service):
    """Create an asset with no value history."""
    asset_id = asset_service.create_asset(
        name="Laptop",
        current_value=Decimal("1000"),
        category=AssetCategory.ELECTRONICS,
        purchase_date=datetime(2024, 1, 10, tzinfo=UTC),
    )
    return asset_service.get_asset(asset_id)


@pytest.fixture
def sample_warranty(warranty_service):
    """Create a warranty expiring in 20 days."""
    warranty_id = warranty_service.create_warranty(
        product_name="Dishwasher",
        purchase_date=NOW - timedelta(days=345),
        expiry_date=NOW + timedelta(days=20),
        vendor="Bosch",
    )
    return warranty_service.get_warranty(warranty_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    return CliRunner()
