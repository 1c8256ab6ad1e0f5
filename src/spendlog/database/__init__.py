"""Storage layer for spendlog application."""

from spendlog.database.base import Storage
from spendlog.database.factories import create_sqlite_storage

__all__ = ["Storage", "create_sqlite_storage"]
