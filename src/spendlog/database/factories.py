"""Factories for the SQLite-backed expense storage."""

import os
from pathlib import Path
from typing import Mapping, Optional

from spendlog.database.sqlalchemy_db import SQLAlchemyStorage

DB_PATH_ENV = "SPENDLOG_DB_PATH"
DEFAULT_DB_DIR = ".spendlog"
DEFAULT_DB_NAME = "spendlog.db"


def resolve_database_path(
    database_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Pick the SQLite file: explicit path, then SPENDLOG_DB_PATH, then ~/.spendlog/spendlog.db."""
    env = os.environ if environ is None else environ
    chosen = database_path or env.get(DB_PATH_ENV)
    if chosen:
        return Path(chosen).expanduser()
    return (home or Path.home()) / DEFAULT_DB_DIR / DEFAULT_DB_NAME


def create_sqlite_storage(database_path: Optional[str] = None) -> SQLAlchemyStorage:
    """Create key-value storage in a SQLite file, creating its directory if needed."""
    path = resolve_database_path(database_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyStorage(f"sqlite:///{path}")
