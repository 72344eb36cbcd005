"""Database layer for cashcount application."""

from cashcount.database.base import Database
from cashcount.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
