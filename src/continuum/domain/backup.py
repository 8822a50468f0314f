"""Backup and restore domain service.

Export writes every tracked item into one JSON document; import adds the
items of such a document to the store.

Import policy:

* All-or-nothing. The whole document is decoded before anything is written,
  and the records are then inserted in a single database transaction. A
  ``DecodeError`` therefore leaves the store untouched, and a store failure
  rolls the whole import back.
* Additive. Existing items are never updated or removed, so importing the
  same backup twice stores every item twice.
* Lenient about values. Unreadable amounts become 0 and unknown billing
  cycles or categories become Monthly or Other; each substitution is logged
  and listed in ``ImportResult.coerced``.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from continuum.database.base import Database
from continuum.domain.calculations import utcnow
from continuum.domain.errors import DecodeError
from continuum.domain.snapshot import (
    CoercedField,
    Snapshot,
    build_snapshot,
    snapshot_from_dict,
    snapshot_to_dict,
)

logger = logging.getLogger(__name__)

EXPORT_FILENAME_PREFIX = "continuum-backup"


@dataclass(frozen=True)
class ImportResult:
    """Totals of a completed import."""

    subscriptions: int
    assets: int
    value_changes: int
    warranties: int
    coerced: tuple[CoercedField, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return self.subscriptions + self.assets + self.warranties


def export_filename(export_date: Optional[datetime] = None) -> str:
    """Return the default backup file name, e.g. continuum-backup-2026-02-17.json."""
    if export_date is None:
        export_date = utcnow()
    return f"{EXPORT_FILENAME_PREFIX}-{export_date.date().isoformat()}.json"


class BackupService:
    """Service for exporting and importing backups."""

    def __init__(self, db: Database):
        """Initialize backup service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_snapshot(self, export_date: Optional[datetime] = None) -> Snapshot:
        """Collect every item, oldest first, into a snapshot."""
        if export_date is None:
            export_date = utcnow()
        return build_snapshot(
            subscriptions=self.db.list_subscriptions(order_by="created_at"),
            assets=self.db.list_assets(order_by="created_at"),
            warranties=self.db.list_warranties(order_by="created_at"),
            export_date=export_date,
        )

    def export_snapshot(self, export_date: Optional[datetime] = None) -> bytes:
        """Serialize every item into a pretty-printed, key-sorted JSON document.

        Args:
            export_date: Timestamp recorded in the envelope (defaults to now)

        Returns:
            UTF-8 encoded JSON
        """
        snapshot = self.build_snapshot(export_date)
        document = json.dumps(
            snapshot_to_dict(snapshot), indent=2, sort_keys=True, ensure_ascii=False
        )
        logger.info(
            "Exported %d subscription(s), %d asset(s), %d warranty(ies)",
            len(snapshot.subscriptions),
            len(snapshot.assets),
            len(snapshot.warranties),
        )
        return document.encode("utf-8")

    def export_to_file(self, path: str, export_date: Optional[datetime] = None) -> Path:
        """Write an export to ``path``. Returns the written path."""
        target = Path(path)
        target.write_bytes(self.export_snapshot(export_date))
        return target

    def decode_snapshot(self, data: bytes) -> tuple[Snapshot, list[CoercedField]]:
        """Decode a backup document without touching the store.

        Raises:
            DecodeError: If the document is not a valid backup
        """
        try:
            document = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(f"Backup is not valid JSON: {e}") from e
        return snapshot_from_dict(document)

    def import_snapshot(self, data: bytes) -> ImportResult:
        """Add every item of a backup document to the store.

        Args:
            data: Backup document bytes

        Returns:
            ImportResult with inserted totals

        Raises:
            DecodeError: If the document is not a valid backup (nothing is inserted)
            PersistenceError: If the store fails (the import is rolled back)
        """
        snapshot, coerced = self.decode_snapshot(data)
        self.db.insert_snapshot(snapshot)

        result = ImportResult(
            subscriptions=len(snapshot.subscriptions),
            assets=len(snapshot.assets),
            value_changes=snapshot.value_change_count,
            warranties=len(snapshot.warranties),
            coerced=tuple(coerced),
        )
        logger.info(
            "Imported %d item(s) from backup dated %s (%d coerced field(s))",
            result.total,
            snapshot.export_date.isoformat(),
            len(coerced),
        )
        return result

    def import_from_file(self, path: str) -> ImportResult:
        """Import a backup file.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        source = Path(path)
        if not source.exists():
            raise FileNotFoundError(f"Backup file not found: {path}")
        return self.import_snapshot(source.read_bytes())
