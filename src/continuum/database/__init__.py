"""Database layer for continuum application."""

from continuum.database.base import Collection, Database
from continuum.database.factories import create_sqlite_database

__all__ = ["Collection", "Database", "create_sqlite_database"]
