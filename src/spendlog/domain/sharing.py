"""Sharing expense summaries by email."""

import asyncio
import re
from datetime import datetime
from decimal import Decimal
from typing import Optional

import structlog

from spendlog.domain.entities import EmailOutcome, Expense, ExpenseSummary
from spendlog.domain.errors import (
    DomainError,
    EmailDispatchError,
    invalid_email_address,
)
from spendlog.domain.expense import ExpenseService, validate_amount
from spendlog.mailer.base import EmailDispatcher
from spendlog.utils.amount_parser import format_amount
from spendlog.utils.category_resolver import resolve_category
from spendlog.utils.date_parser import format_long_date

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NO_NOTE = "No additional notes"

# Seconds a status message stays visible
REJECTED_STATUS_SECONDS = 3.0
SENT_STATUS_SECONDS = 3.0
FAILED_STATUS_SECONDS = 4.0

logger = structlog.get_logger(__name__)


def validate_email(address: Optional[str]) -> bool:
    """Check that address looks like ``name@domain.tld``."""
    return bool(address) and EMAIL_PATTERN.match(address) is not None


def summarize_values(
    amount: Decimal, category: str, date: datetime, note: Optional[str] = None
) -> ExpenseSummary:
    """Build the summary sent to the email service from raw field values."""
    return ExpenseSummary(
        amount=amount,
        category=category,
        date=format_long_date(date),
        note=note or NO_NOTE,
        formatted_amount=format_amount(amount),
    )


def build_summary(expense: Expense) -> ExpenseSummary:
    """Build the summary sent to the email service for a stored expense."""
    return summarize_values(expense.amount, expense.category, expense.date, expense.note)


class EmailShareTask:
    """Sends one email at a time and exposes a self-clearing status.

    ``status`` and ``message`` describe the last attempt until a scheduled
    callback clears them. ``close`` cancels that callback and stops later
    completions from touching the status.
    """

    def __init__(self, dispatcher: EmailDispatcher):
        self.dispatcher = dispatcher
        self.status: Optional[EmailOutcome] = None
        self.message: Optional[str] = None
        self._sending = False
        self._closed = False
        self._clear_handle: Optional[asyncio.TimerHandle] = None

    @property
    def is_sending(self) -> bool:
        return self._sending

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, recipient: str, summary: ExpenseSummary) -> EmailOutcome:
        """Validate recipient and dispatch summary.

        Returns:
            REJECTED for an invalid address or while another send is in
            flight, FAILED when the service reports an error, SENT otherwise
        """
        if self._closed:
            raise DomainError("Email share task is closed")

        if not validate_email(recipient):
            self._show(EmailOutcome.REJECTED, invalid_email_address(), REJECTED_STATUS_SECONDS)
            return EmailOutcome.REJECTED

        if self._sending:
            logger.info("email_send_rejected_busy", recipient=recipient)
            return EmailOutcome.REJECTED

        self._sending = True
        self._clear()
        try:
            await self.dispatcher.send(recipient, summary)
        except EmailDispatchError as e:
            logger.warning("email_dispatch_failed", recipient=recipient, error=str(e))
            if not self._closed:
                self._show(
                    EmailOutcome.FAILED, f"Failed to send email: {e}", FAILED_STATUS_SECONDS
                )
            return EmailOutcome.FAILED
        finally:
            self._sending = False

        logger.info("email_dispatched", recipient=recipient)
        if not self._closed:
            self._show(
                EmailOutcome.SENT, f"Expense summary sent to {recipient}", SENT_STATUS_SECONDS
            )
        return EmailOutcome.SENT

    def close(self) -> None:
        """Cancel the pending status reset and ignore later completions."""
        self._closed = True
        self._cancel_timer()

    def _show(self, outcome: EmailOutcome, message: str, seconds: float) -> None:
        self._cancel_timer()
        self.status = outcome
        self.message = message
        loop = asyncio.get_running_loop()
        self._clear_handle = loop.call_later(seconds, self._expire)

    def _expire(self) -> None:
        self._clear_handle = None
        if not self._closed:
            self.status = None
            self.message = None

    def _clear(self) -> None:
        self._cancel_timer()
        self.status = None
        self.message = None

    def _cancel_timer(self) -> None:
        if self._clear_handle is not None:
            self._clear_handle.cancel()
            self._clear_handle = None


async def share_expense(
    service: ExpenseService,
    task: EmailShareTask,
    expense_id: int,
    recipient: str,
    now: Optional[datetime] = None,
) -> EmailOutcome:
    """Email a stored expense and mark it shared on success.

    A failed or rejected send leaves the stored expense unchanged.

    Raises:
        NotFoundError: If expense doesn't exist
    """
    expense = service.get_expense(expense_id)
    outcome = await task.send(recipient, build_summary(expense))
    if outcome == EmailOutcome.SENT:
        service.mark_shared(expense_id, recipient, now or datetime.now())
    return outcome


async def send_summary(
    task: EmailShareTask,
    recipient: str,
    amount: Decimal,
    category: str,
    date: datetime,
    note: str = "",
    custom_category: Optional[str] = None,
) -> EmailOutcome:
    """Email a summary of unsaved field values. Nothing is stored.

    Raises:
        ValidationError: If amount or category is invalid
    """
    value = validate_amount(amount)
    label = resolve_category(category, custom_category)
    return await task.send(recipient, summarize_values(value, label, date, (note or "").strip()))
