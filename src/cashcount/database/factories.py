"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from cashcount.database.sqlalchemy_db import SQLAlchemyDatabase


def default_database_url() -> str:
    """Resolve the database URL from the environment.

    Checks CASHCOUNT_DATABASE_URL, then CASHCOUNT_DB_PATH (a SQLite file), then
    defaults to ~/.cashcount/cashcount.db
    """
    database_url = os.environ.get("CASHCOUNT_DATABASE_URL")
    if database_url:
        return database_url

    database_path = os.environ.get("CASHCOUNT_DB_PATH")
    if database_path is None:
        home = Path.home()
        db_dir = home / ".cashcount"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "cashcount.db")

    return f"sqlite:///{database_path}"


def create_database(database_url: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a database instance for any SQLAlchemy URL.

    Args:
        database_url: SQLAlchemy URL. If None, resolved by ``default_database_url``.

    Returns:
        SQLAlchemyDatabase instance
    """
    if database_url is None:
        database_url = default_database_url()
    return SQLAlchemyDatabase(database_url)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, falls back to the
            environment as described in ``default_database_url``.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        return create_database()
    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
