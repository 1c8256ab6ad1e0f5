"""Add-expense form state machine."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from spendlog.domain.entities import Expense
from spendlog.domain.errors import DomainError, ValidationError
from spendlog.domain.expense import ExpenseService, validate_amount
from spendlog.utils.category_resolver import resolve_category


class FormState(str, Enum):
    """Lifecycle of a form submission."""

    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    ERROR = "error"
    SUCCESS = "success"


@dataclass
class ExpenseDraft:
    """Field values entered into the add-expense form."""

    amount: Optional[Decimal] = None
    category: str = "Food"
    custom_category: str = ""
    date: Optional[datetime] = None
    note: str = ""


class ExpenseForm:
    """Validates and submits one expense at a time.

    ``submit`` moves IDLE -> VALIDATING -> SUBMITTING -> SUCCESS, or stops in
    ERROR with a message. Validation failures never touch the store.
    """

    def __init__(self, draft: Optional[ExpenseDraft] = None):
        self.draft = draft or ExpenseDraft()
        self.state = FormState.IDLE
        self.message: Optional[str] = None
        self.created: Optional[Expense] = None

    def validate(self) -> None:
        """Check the draft. Raises ValidationError on the first problem."""
        validate_amount(self.draft.amount)
        resolve_category(self.draft.category, self.draft.custom_category)

    def submit(self, service: ExpenseService, now: Optional[datetime] = None) -> Optional[Expense]:
        """Validate the draft and save it through service.

        Returns:
            The created expense, or None if the form ended in ERROR
        """
        if self.state == FormState.SUBMITTING:
            raise DomainError("Form is already submitting")

        if now is None:
            now = datetime.now()
        self.message = None
        self.created = None

        self.state = FormState.VALIDATING
        try:
            self.validate()
        except ValidationError as e:
            self._fail(str(e))
            return None

        self.state = FormState.SUBMITTING
        try:
            expense = service.add_expense(
                amount=self.draft.amount,
                category=self.draft.category,
                custom_category=self.draft.custom_category,
                date=self.draft.date or now,
                note=self.draft.note,
                now=now,
            )
        except DomainError as e:
            self._fail(str(e))
            return None

        self.created = expense
        self.state = FormState.SUCCESS
        self.message = "Expense added"
        self.draft = ExpenseDraft()
        return expense

    def reset(self) -> None:
        """Clear the draft and return to IDLE."""
        self.draft = ExpenseDraft()
        self.state = FormState.IDLE
        self.message = None
        self.created = None

    def _fail(self, message: str) -> None:
        self.state = FormState.ERROR
        self.message = message
