"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from continuum.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV = "CONTINUUM_DB_PATH"


def default_database_path() -> Path:
    """Return ~/.continuum/continuum.db, creating the directory if needed."""
    db_dir = Path.home() / ".continuum"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "continuum.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks CONTINUUM_DB_PATH
            environment variable, then defaults to ~/.continuum/continuum.db.
            ":memory:" gives a throwaway in-memory store.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        database_path = str(default_database_path())

    logger.debug("Opening SQLite database at %s", database_path)
    if database_path == ":memory:":
        return SQLAlchemyDatabase("sqlite://")
    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
