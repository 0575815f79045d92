"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from finledger.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "FINLEDGER_DB_PATH"


def default_database_path() -> Path:
    """~/.finledger/finledger.db, creating the directory on first use."""
    db_dir = Path.home() / ".finledger"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "finledger.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, the
            FINLEDGER_DB_PATH environment variable is used, then
            ``default_database_path()``.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = database_path or os.environ.get(DB_PATH_ENV) or default_database_path()
    return SQLAlchemyDatabase(f"sqlite:///{path}")
