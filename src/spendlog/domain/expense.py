"""Expense domain service."""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Optional

import structlog

from spendlog.domain.entities import Expense, PaidBy
from spendlog.domain.errors import ValidationError, invalid_amount
from spendlog.domain.split import attach_split
from spendlog.domain.store import (
    ExpenseStore,
    append_expense,
    find_expense,
    next_expense_id,
    remove_expense,
    update_expense,
)
from spendlog.utils.category_resolver import resolve_category

logger = structlog.get_logger(__name__)


def validate_amount(amount: Optional[Decimal]) -> Decimal:
    """Return amount if it is a positive number.

    Raises:
        ValidationError: If amount is missing, not finite, or not positive
    """
    if amount is None or isinstance(amount, bool):
        raise ValidationError(invalid_amount())
    try:
        value = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
    except ArithmeticError:
        raise ValidationError(invalid_amount())
    if not value.is_finite() or value <= 0:
        raise ValidationError(invalid_amount())
    return value


class ExpenseService:
    """Service for managing expenses.

    Every mutation loads the current list, applies a pure transformation and
    saves the full list back.
    """

    def __init__(self, store: ExpenseStore):
        """Initialize expense service.

        Args:
            store: Expense store
        """
        self.store = store

    def list_expenses(self) -> list[Expense]:
        """List all expenses in stored order."""
        return self.store.load()

    def get_expense(self, expense_id: int) -> Expense:
        """Get expense by ID.

        Raises:
            NotFoundError: If expense doesn't exist
        """
        return find_expense(self.store.load(), expense_id)

    def add_expense(
        self,
        amount: Decimal,
        category: str,
        date: datetime,
        note: str = "",
        custom_category: Optional[str] = None,
        email_recipient: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Expense:
        """Create an expense.

        Args:
            amount: Positive amount
            category: Category name, or "Other" together with custom_category
            date: Expense date
            note: Optional note
            custom_category: Label used when category is "Other"
            email_recipient: Address the expense is about to be shared with
            now: Creation instant used for the ID (defaults to datetime.now())

        Returns:
            The stored expense

        Raises:
            ValidationError: If amount or category is invalid
        """
        value = validate_amount(amount)
        label = resolve_category(category, custom_category)
        if now is None:
            now = datetime.now()

        expenses = self.store.load()
        expense = Expense(
            id=next_expense_id(expenses, now),
            amount=value,
            category=label,
            date=date,
            note=(note or "").strip(),
            email_recipient=email_recipient,
        )
        self.store.save(append_expense(expenses, expense))
        logger.info("expense_added", expense_id=expense.id, category=label)
        return expense

    def edit_expense(
        self,
        expense_id: int,
        amount: Optional[Decimal] = None,
        category: Optional[str] = None,
        date: Optional[datetime] = None,
        note: Optional[str] = None,
        custom_category: Optional[str] = None,
    ) -> Expense:
        """Update expense fields. Fields left as None keep their value.

        A split expense gets its per-person share recomputed when the amount
        changes.

        Raises:
            NotFoundError: If expense doesn't exist
            ValidationError: If amount or category is invalid
        """
        expenses = self.store.load()
        current = find_expense(expenses, expense_id)
        updated = apply_changes(
            current,
            amount=amount,
            category=category,
            date=date,
            note=note,
            custom_category=custom_category,
        )
        self.store.save(update_expense(expenses, updated))
        logger.info("expense_updated", expense_id=expense_id)
        return updated

    def replace_expense(self, expense: Expense) -> Expense:
        """Store an already validated expense in place of the one with its ID.

        Raises:
            NotFoundError: If expense doesn't exist
        """
        expenses = self.store.load()
        self.store.save(update_expense(expenses, expense))
        logger.info("expense_updated", expense_id=expense.id)
        return expense

    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense.

        Raises:
            NotFoundError: If expense doesn't exist
        """
        expenses = self.store.load()
        self.store.save(remove_expense(expenses, expense_id))
        logger.info("expense_deleted", expense_id=expense_id)

    def split_expense(self, expense_id: int, total_people: int, paid_by: PaidBy) -> Expense:
        """Attach an equal split to an expense.

        Raises:
            NotFoundError: If expense doesn't exist
            ValidationError: If fewer than two people share it
        """
        expenses = self.store.load()
        updated = attach_split(find_expense(expenses, expense_id), total_people, paid_by)
        self.store.save(update_expense(expenses, updated))
        logger.info(
            "expense_split",
            expense_id=expense_id,
            total_people=total_people,
            paid_by=PaidBy(paid_by).value,
        )
        return updated

    def mark_shared(self, expense_id: int, recipient: str, sent_at: datetime) -> Expense:
        """Record that an expense summary was emailed.

        Raises:
            NotFoundError: If expense doesn't exist
        """
        expenses = self.store.load()
        updated = replace(
            find_expense(expenses, expense_id),
            shared_via_email=True,
            email_recipient=recipient,
            email_sent_at=sent_at,
        )
        self.store.save(update_expense(expenses, updated))
        logger.info("expense_shared", expense_id=expense_id)
        return updated


def apply_changes(
    expense: Expense,
    amount: Optional[Decimal] = None,
    category: Optional[str] = None,
    date: Optional[datetime] = None,
    note: Optional[str] = None,
    custom_category: Optional[str] = None,
) -> Expense:
    """Return expense with validated field changes applied.

    Raises:
        ValidationError: If amount or category is invalid
    """
    changes: dict = {}
    if amount is not None:
        changes["amount"] = validate_amount(amount)
    if category is not None:
        changes["category"] = resolve_category(category, custom_category)
    if date is not None:
        changes["date"] = date
    if note is not None:
        changes["note"] = note.strip()

    updated = replace(expense, **changes)
    if updated.split is not None and "amount" in changes:
        updated = replace(
            updated, split_amount=updated.amount / updated.split.total_people
        )
    return updated
