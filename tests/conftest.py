"""Shared pytest fixtures for spendlog tests."""

import tempfile
import os
from datetime import datetime
from decimal import Decimal

import pytest

from spendlog.database.factories import create_sqlite_storage
from spendlog.domain.entities import Expense, ExpenseSummary
from spendlog.domain.errors import EmailDispatchError
from spendlog.domain.expense import ExpenseService
from spendlog.domain.store import ExpenseStore
from spendlog.mailer.base import EmailDispatcher


@pytest.fixture
def temp_storage():
    """Create a temporary SQLite storage for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    storage = create_sqlite_storage(database_path=db_path)
    # Store the path for tests that need it
    storage.database_path = db_path
    storage.connect()
    storage.initialize_schema()

    yield storage

    storage.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def expense_store(temp_storage):
    """Create an ExpenseStore on temporary storage."""
    return ExpenseStore(temp_storage)


@pytest.fixture
def expense_service(expense_store):
    """Create an ExpenseService on temporary storage."""
    return ExpenseService(expense_store)


def make_expense(
    expense_id: int = 1,
    amount: str = "100",
    category: str = "Food",
    date: datetime = datetime(2024, 6, 15, 10, 0),
    note: str = "",
    **kwargs,
) -> Expense:
    """Build an expense with sensible defaults."""
    return Expense(
        id=expense_id,
        amount=Decimal(amount),
        category=category,
        date=date,
        note=note,
        **kwargs,
    )


@pytest.fixture
def expense_factory():
    """Return the make_expense helper."""
    return make_expense


class RecordingDispatcher(EmailDispatcher):
    """Dispatcher that records sends and optionally fails."""

    def __init__(self, error: str | None = None):
        self.error = error
        self.sent: list[tuple[str, ExpenseSummary]] = []

    async def send(self, recipient: str, summary: ExpenseSummary) -> None:
        if self.error is not None:
            raise EmailDispatchError(self.error)
        self.sent.append((recipient, summary))


@pytest.fixture
def dispatcher():
    """Dispatcher that accepts every message."""
    return RecordingDispatcher()


@pytest.fixture
def failing_dispatcher():
    """Dispatcher that reports the service as unavailable."""
    return RecordingDispatcher(error="Email service temporarily unavailable")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
