"""Tests for asset service and value history."""

from decimal import Decimal

import pytest

from continuum.domain.asset import total_value
from continuum.domain.entities import AssetCategory
from continuum.domain.errors import NotFoundError, ValidationError


def test_create_asset_has_no_history(asset_service, sample_asset):
    """The initial value is not a value change."""
    assert sample_asset.current_value == Decimal("1000")
    assert sample_asset.value_changes == ()
    assert asset_service.value_history(sample_asset.id) == []


def test_create_asset_defaults(asset_service):
    asset_id = asset_service.create_asset(name="Thing")
    asset = asset_service.get_asset(asset_id)
    assert asset.current_value == Decimal("0")
    assert asset.category == AssetCategory.OTHER
    assert asset.purchase_date is None


def test_each_value_edit_appends_one_change(asset_service, sample_asset):
    first = asset_service.update_asset(sample_asset.id, current_value=Decimal("900"))
    second = asset_service.update_asset(
        sample_asset.id, current_value=Decimal("750"), value_change_note="Battery worn"
    )

    assert first.previous_value == Decimal("1000")
    assert first.new_value == Decimal("900")
    assert second.previous_value == Decimal("900")
    assert second.new_value == Decimal("750")
    assert second.note == "Battery worn"

    asset = asset_service.get_asset(sample_asset.id)
    assert asset.current_value == Decimal("750")
    assert len(asset.value_changes) == 2


def test_same_value_appends_nothing(asset_service, sample_asset):
    assert asset_service.update_asset(sample_asset.id, current_value=Decimal("1000")) is None
    assert asset_service.get_asset(sample_asset.id).value_changes == ()


def test_edit_without_value_appends_nothing(asset_service, sample_asset):
    assert asset_service.update_asset(sample_asset.id, name="Work laptop") is None
    asset = asset_service.get_asset(sample_asset.id)
    assert asset.name == "Work laptop"
    assert asset.value_changes == ()


def test_value_history_newest_first(asset_service, sample_asset):
    for value in ["900", "800", "700"]:
        asset_service.update_asset(sample_asset.id, current_value=Decimal(value))

    newest = asset_service.value_history(sample_asset.id)
    oldest = asset_service.value_history(sample_asset.id, newest_first=False)

    assert [c.new_value for c in newest] == [Decimal("700"), Decimal("800"), Decimal("900")]
    assert [c.new_value for c in oldest] == [Decimal("900"), Decimal("800"), Decimal("700")]


def test_delete_asset_removes_history(asset_service, sample_asset):
    asset_service.update_asset(sample_asset.id, current_value=Decimal("900"))
    asset_service.update_asset(sample_asset.id, current_value=Decimal("800"))

    assert asset_service.delete_asset(sample_asset.id) == 2
    assert asset_service.get_asset(sample_asset.id) is None
    with pytest.raises(NotFoundError):
        asset_service.value_history(sample_asset.id)


def test_update_missing_asset(asset_service):
    with pytest.raises(NotFoundError, match="Asset 7 not found"):
        asset_service.update_asset(7, current_value=Decimal("1"))


def test_validate_rejects_blank_name(asset_service):
    with pytest.raises(ValidationError):
        asset_service.validate("")


def test_total_value(asset_service):
    asset_service.create_asset(name="A", current_value=Decimal("0.10"))
    asset_service.create_asset(name="B", current_value=Decimal("0.20"))
    assert total_value(asset_service.list_assets()) == Decimal("0.30")


def test_total_value_empty():
    assert total_value([]) == Decimal("0")
