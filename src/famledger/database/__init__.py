"""Database layer for famledger application."""

from famledger.database.base import Database
from famledger.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
