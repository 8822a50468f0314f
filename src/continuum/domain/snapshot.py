"""Backup snapshot records and their JSON-ready encoding.

A snapshot is the flat, self-contained form of every tracked item. Asset
history is nested inside each asset record, which carries the ownership link
without any identifiers. Decimals travel as strings and timestamps as ISO-8601
so nothing is lost crossing the serialization boundary.

Decoding is strict about structure (missing keys, wrong types, unreadable
timestamps raise ``DecodeError``) and lenient about values: unreadable decimal
text becomes zero and unknown enum labels fall back to their defaults. Each
such substitution is recorded as a ``CoercedField``.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Sequence

from continuum.domain.entities import (
    AssetCategory,
    BillingCycle,
    PersonalAsset,
    Subscription,
    SubscriptionCategory,
    Warranty,
)
from continuum.domain.errors import DecodeError
from continuum.utils.amount_parser import coerce_decimal, is_decimal_text
from continuum.utils.date_parser import format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)

CURRENT_VERSION = 1


@dataclass(frozen=True)
class SubscriptionRecord:
    name: str
    amount: Decimal
    billing_cycle: BillingCycle
    next_due_date: datetime
    category: SubscriptionCategory
    notes: str
    is_subscription: bool
    created_at: datetime


@dataclass(frozen=True)
class ValueChangeRecord:
    date: datetime
    previous_value: Decimal
    new_value: Decimal
    note: Optional[str]


@dataclass(frozen=True)
class AssetRecord:
    name: str
    current_value: Decimal
    purchase_date: Optional[datetime]
    category: AssetCategory
    notes: str
    created_at: datetime
    updated_at: datetime
    value_changes: tuple[ValueChangeRecord, ...] = ()


@dataclass(frozen=True)
class WarrantyRecord:
    product_name: str
    purchase_date: datetime
    expiry_date: datetime
    vendor: Optional[str]
    notes: str
    created_at: datetime


@dataclass(frozen=True)
class Snapshot:
    """Versioned envelope around every exported record."""

    export_date: datetime
    version: int
    subscriptions: tuple[SubscriptionRecord, ...] = ()
    assets: tuple[AssetRecord, ...] = ()
    warranties: tuple[WarrantyRecord, ...] = ()

    @property
    def value_change_count(self) -> int:
        return sum(len(asset.value_changes) for asset in self.assets)


@dataclass(frozen=True)
class CoercedField:
    """A snapshot value replaced by a default during decoding."""

    path: str
    value: str
    replacement: str


# Building from entities


def build_snapshot(
    subscriptions: Sequence[Subscription],
    assets: Sequence[PersonalAsset],
    warranties: Sequence[Warranty],
    export_date: datetime,
) -> Snapshot:
    """Project entities into snapshot records, keeping the given order."""
    return Snapshot(
        export_date=export_date,
        version=CURRENT_VERSION,
        subscriptions=tuple(
            SubscriptionRecord(
                name=s.name,
                amount=s.amount,
                billing_cycle=s.billing_cycle,
                next_due_date=s.next_due_date,
                category=s.category,
                notes=s.notes,
                is_subscription=s.is_subscription,
                created_at=s.created_at,
            )
            for s in subscriptions
        ),
        assets=tuple(
            AssetRecord(
                name=a.name,
                current_value=a.current_value,
                purchase_date=a.purchase_date,
                category=a.category,
                notes=a.notes,
                created_at=a.created_at,
                updated_at=a.updated_at,
                value_changes=tuple(
                    ValueChangeRecord(
                        date=c.date,
                        previous_value=c.previous_value,
                        new_value=c.new_value,
                        note=c.note,
                    )
                    for c in a.value_changes
                ),
            )
            for a in assets
        ),
        warranties=tuple(
            WarrantyRecord(
                product_name=w.product_name,
                purchase_date=w.purchase_date,
                expiry_date=w.expiry_date,
                vendor=w.vendor,
                notes=w.notes,
                created_at=w.created_at,
            )
            for w in warranties
        ),
    )


# Encoding


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, Any]:
    """Encode a snapshot into the JSON-ready export structure."""
    return {
        "exportDate": format_timestamp(snapshot.export_date),
        "version": snapshot.version,
        "subscriptions": [
            {
                "name": s.name,
                "amount": str(s.amount),
                "billingCycle": s.billing_cycle.value,
                "nextDueDate": format_timestamp(s.next_due_date),
                "category": s.category.value,
                "notes": s.notes,
                "isSubscription": s.is_subscription,
                "createdAt": format_timestamp(s.created_at),
            }
            for s in snapshot.subscriptions
        ],
        "assets": [
            {
                "name": a.name,
                "currentValue": str(a.current_value),
                "purchaseDate": (
                    format_timestamp(a.purchase_date) if a.purchase_date is not None else None
                ),
                "category": a.category.value,
                "notes": a.notes,
                "createdAt": format_timestamp(a.created_at),
                "updatedAt": format_timestamp(a.updated_at),
                "valueChanges": [
                    {
                        "date": format_timestamp(c.date),
                        "previousValue": str(c.previous_value),
                        "newValue": str(c.new_value),
                        "note": c.note,
                    }
                    for c in a.value_changes
                ],
            }
            for a in snapshot.assets
        ],
        "warranties": [
            {
                "productName": w.product_name,
                "purchaseDate": format_timestamp(w.purchase_date),
                "expiryDate": format_timestamp(w.expiry_date),
                "vendor": w.vendor,
                "notes": w.notes,
                "createdAt": format_timestamp(w.created_at),
            }
            for w in snapshot.warranties
        ],
    }


# Decoding


class _Decoder:
    """Walks the decoded JSON structure, collecting coercions as it goes."""

    def __init__(self):
        self.coerced: list[CoercedField] = []

    def _field(self, record: dict, key: str, expected: type, path: str) -> Any:
        if key not in record:
            raise DecodeError(f"{path}: missing required field '{key}'")
        value = record[key]
        # bool is an int subclass; keep booleans out of integer fields
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise DecodeError(
                f"{path}.{key}: expected {expected.__name__}, got {type(value).__name__}"
            )
        return value

    def _optional_text(self, record: dict, key: str, path: str) -> Optional[str]:
        if record.get(key) is None:
            return None
        return self._field(record, key, str, path)

    def _timestamp(self, record: dict, key: str, path: str) -> datetime:
        text = self._field(record, key, str, path)
        try:
            return parse_timestamp(text)
        except ValueError as e:
            raise DecodeError(f"{path}.{key}: {e}") from e

    def _optional_timestamp(self, record: dict, key: str, path: str) -> Optional[datetime]:
        if record.get(key) is None:
            return None
        return self._timestamp(record, key, path)

    def _decimal(self, record: dict, key: str, path: str) -> Decimal:
        text = self._field(record, key, str, path)
        value = coerce_decimal(text)
        if value is None:
            self._coerce(f"{path}.{key}", text, "0")
            return Decimal("0")
        if not is_decimal_text(text):
            self._coerce(f"{path}.{key}", text, str(value))
        return value

    def _enum(self, record: dict, key: str, enum_cls, path: str):
        text = self._field(record, key, str, path)
        member = enum_cls.from_value(text)
        if member.value != text:
            self._coerce(f"{path}.{key}", text, member.value)
        return member

    def _coerce(self, path: str, value: str, replacement: str) -> None:
        logger.warning("Coerced %s from %r to %r", path, value, replacement)
        self.coerced.append(CoercedField(path=path, value=value, replacement=replacement))

    def _records(self, data: dict, key: str) -> list[dict]:
        items = self._field(data, key, list, "snapshot")
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise DecodeError(f"{key}[{index}]: expected object")
        return items

    def subscription(self, record: dict, path: str) -> SubscriptionRecord:
        return SubscriptionRecord(
            name=self._field(record, "name", str, path),
            amount=self._decimal(record, "amount", path),
            billing_cycle=self._enum(record, "billingCycle", BillingCycle, path),
            next_due_date=self._timestamp(record, "nextDueDate", path),
            category=self._enum(record, "category", SubscriptionCategory, path),
            notes=self._field(record, "notes", str, path),
            is_subscription=self._field(record, "isSubscription", bool, path),
            created_at=self._timestamp(record, "createdAt", path),
        )

    def value_change(self, record: dict, path: str) -> ValueChangeRecord:
        return ValueChangeRecord(
            date=self._timestamp(record, "date", path),
            previous_value=self._decimal(record, "previousValue", path),
            new_value=self._decimal(record, "newValue", path),
            note=self._optional_text(record, "note", path),
        )

    def asset(self, record: dict, path: str) -> AssetRecord:
        changes = self._field(record, "valueChanges", list, path)
        decoded_changes = []
        for index, change in enumerate(changes):
            change_path = f"{path}.valueChanges[{index}]"
            if not isinstance(change, dict):
                raise DecodeError(f"{change_path}: expected object")
            decoded_changes.append(self.value_change(change, change_path))

        return AssetRecord(
            name=self._field(record, "name", str, path),
            current_value=self._decimal(record, "currentValue", path),
            purchase_date=self._optional_timestamp(record, "purchaseDate", path),
            category=self._enum(record, "category", AssetCategory, path),
            notes=self._field(record, "notes", str, path),
            created_at=self._timestamp(record, "createdAt", path),
            updated_at=self._timestamp(record, "updatedAt", path),
            value_changes=tuple(decoded_changes),
        )

    def warranty(self, record: dict, path: str) -> WarrantyRecord:
        return WarrantyRecord(
            product_name=self._field(record, "productName", str, path),
            purchase_date=self._timestamp(record, "purchaseDate", path),
            expiry_date=self._timestamp(record, "expiryDate", path),
            vendor=self._optional_text(record, "vendor", path),
            notes=self._field(record, "notes", str, path),
            created_at=self._timestamp(record, "createdAt", path),
        )

    def snapshot(self, data: Any) -> Snapshot:
        if not isinstance(data, dict):
            raise DecodeError("snapshot: expected a JSON object")

        version = self._field(data, "version", int, "snapshot")
        if version < 1 or version > CURRENT_VERSION:
            raise DecodeError(
                f"Unsupported snapshot version {version} (supported: 1 to {CURRENT_VERSION})"
            )

        return Snapshot(
            export_date=self._timestamp(data, "exportDate", "snapshot"),
            version=version,
            subscriptions=tuple(
                self.subscription(r, f"subscriptions[{i}]")
                for i, r in enumerate(self._records(data, "subscriptions"))
            ),
            assets=tuple(
                self.asset(r, f"assets[{i}]") for i, r in enumerate(self._records(data, "assets"))
            ),
            warranties=tuple(
                self.warranty(r, f"warranties[{i}]")
                for i, r in enumerate(self._records(data, "warranties"))
            ),
        )


def snapshot_from_dict(data: Any) -> tuple[Snapshot, list[CoercedField]]:
    """Decode the export structure into a snapshot.

    Returns:
        Tuple of (snapshot, coerced fields)

    Raises:
        DecodeError: If the structure is invalid
    """
    decoder = _Decoder()
    snapshot = decoder.snapshot(data)
    return snapshot, decoder.coerced
