"""Generic SQLAlchemy storage implementation."""

from typing import Optional
from sqlalchemy.orm import Session

from spendlog.database.base import Storage
from spendlog.database.models import KeyValue, create_session_factory


class SQLAlchemyStorage(Storage):
    """SQLAlchemy-based implementation of Storage interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy storage.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def get_item(self, key: str) -> Optional[str]:
        """Get the value stored under key, or None if absent."""
        session = self._get_session()
        entry = session.get(KeyValue, key)
        if entry is None:
            return None
        return entry.value

    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        session = self._get_session()
        entry = session.get(KeyValue, key)
        if entry is None:
            session.add(KeyValue(key=key, value=value))
        else:
            entry.value = value
        session.commit()

    def remove_item(self, key: str) -> None:
        """Remove key. Removing an absent key is a no-op."""
        session = self._get_session()
        entry = session.get(KeyValue, key)
        if entry is not None:
            session.delete(entry)
            session.commit()

    def keys(self) -> list[str]:
        """List stored keys in sorted order."""
        session = self._get_session()
        return [row.key for row in session.query(KeyValue).order_by(KeyValue.key).all()]
