"""Database layer for budgetit application."""

from budgetit.database.base import Database
from budgetit.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
