"""Expense store: full-snapshot persistence of the expense list."""

from datetime import datetime
from typing import Sequence

import structlog

from spendlog.database.base import Storage
from spendlog.database.mappers import (
    decode_expense_blob,
    expense_from_dict,
    expenses_to_json,
)
from spendlog.domain.entities import Expense
from spendlog.domain.errors import (
    ConflictError,
    NotFoundError,
    duplicate_expense_id,
    expense_not_found,
)

STORAGE_KEY = "expenses"

logger = structlog.get_logger(__name__)


class ExpenseStore:
    """Loads and saves the whole expense list under a single storage key."""

    def __init__(self, storage: Storage, key: str = STORAGE_KEY):
        """Initialize expense store.

        Args:
            storage: Key-value storage backend
            key: Storage key holding the JSON array
        """
        self.storage = storage
        self.key = key

    def load(self) -> list[Expense]:
        """Load all expenses.

        An absent key or unreadable content yields an empty list. Records that
        cannot be decoded are skipped.
        """
        blob = self.storage.get_item(self.key)
        if blob is None:
            return []

        try:
            records = decode_expense_blob(blob)
        except ValueError as e:
            logger.warning("storage_blob_malformed", key=self.key, error=str(e))
            return []

        expenses = []
        seen_ids = set()
        for index, record in enumerate(records):
            try:
                expense = expense_from_dict(record)
            except (ValueError, TypeError, KeyError) as e:
                logger.warning(
                    "storage_record_skipped", key=self.key, index=index, error=str(e)
                )
                continue
            if expense.id in seen_ids:
                logger.warning(
                    "storage_record_skipped",
                    key=self.key,
                    index=index,
                    error=duplicate_expense_id(expense.id),
                )
                continue
            seen_ids.add(expense.id)
            expenses.append(expense)
        return expenses

    def save(self, expenses: Sequence[Expense]) -> None:
        """Overwrite the stored list with expenses."""
        self.storage.set_item(self.key, expenses_to_json(expenses))
        logger.debug("expenses_saved", key=self.key, count=len(expenses))

    def clear(self) -> None:
        """Remove the stored list entirely."""
        self.storage.remove_item(self.key)


def next_expense_id(expenses: Sequence[Expense], now: datetime) -> int:
    """Return a new ID based on the creation time in milliseconds.

    The ID is bumped past the largest existing ID so IDs keep increasing even
    when two expenses are created within the same millisecond.
    """
    candidate = int(now.timestamp() * 1000)
    if expenses:
        candidate = max(candidate, max(exp.id for exp in expenses) + 1)
    return candidate


def find_expense(expenses: Sequence[Expense], expense_id: int) -> Expense:
    """Return the expense with expense_id.

    Raises:
        NotFoundError: If no expense has that ID
    """
    for exp in expenses:
        if exp.id == expense_id:
            return exp
    raise NotFoundError(expense_not_found(expense_id))


def append_expense(expenses: Sequence[Expense], expense: Expense) -> list[Expense]:
    """Return a new list with expense appended.

    Raises:
        ConflictError: If an expense with the same ID already exists
    """
    if any(exp.id == expense.id for exp in expenses):
        raise ConflictError(duplicate_expense_id(expense.id))
    return [*expenses, expense]


def remove_expense(expenses: Sequence[Expense], expense_id: int) -> list[Expense]:
    """Return a new list without the expense with expense_id.

    Raises:
        NotFoundError: If no expense has that ID
    """
    find_expense(expenses, expense_id)
    return [exp for exp in expenses if exp.id != expense_id]


def update_expense(expenses: Sequence[Expense], expense: Expense) -> list[Expense]:
    """Return a new list with the stored expense replaced in place.

    Raises:
        NotFoundError: If no expense has the same ID
    """
    find_expense(expenses, expense.id)
    return [expense if exp.id == expense.id else exp for exp in expenses]
