"""Database factory functions for creating database instances."""

from pathlib import Path
from typing import Optional

from messledger.config import get_settings
from messledger.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, uses the
            MESSLEDGER_DB_PATH setting, then defaults to ~/.messledger/messledger.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = get_settings().db_path

    if database_path is None:
        home = Path.home()
        db_dir = home / ".messledger"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "messledger.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
