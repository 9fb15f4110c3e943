"""Database layer for messledger application."""

from messledger.database.base import Database
from messledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
