"""Edit session for a single expense."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from spendlog.domain.entities import Expense
from spendlog.domain.errors import DomainError
from spendlog.domain.expense import apply_changes


class EditState(str, Enum):
    """Whether an expense is being displayed or edited."""

    VIEWING = "viewing"
    EDITING = "editing"


class EditSession:
    """Two-state toggle holding draft field values for one expense.

    Drafts are kept in memory only; nothing is persisted until ``save``
    returns the updated expense to the caller.
    """

    def __init__(self, expense: Expense):
        self.expense = expense
        self.state = EditState.VIEWING
        self._drafts: dict = {}

    @property
    def is_editing(self) -> bool:
        return self.state == EditState.EDITING

    @property
    def drafts(self) -> dict:
        return dict(self._drafts)

    def begin(self) -> None:
        """Enter editing mode with empty drafts."""
        self._drafts = {}
        self.state = EditState.EDITING

    def set_field(
        self,
        amount: Optional[Decimal] = None,
        category: Optional[str] = None,
        date: Optional[datetime] = None,
        note: Optional[str] = None,
        custom_category: Optional[str] = None,
    ) -> None:
        """Record draft values. Raises DomainError when not editing."""
        self._require_editing()
        values = {
            "amount": amount,
            "category": category,
            "date": date,
            "note": note,
            "custom_category": custom_category,
        }
        self._drafts.update({k: v for k, v in values.items() if v is not None})

    def save(self) -> Expense:
        """Validate drafts, apply them and return to viewing.

        On a validation error the session stays in editing mode with its
        drafts intact.
        """
        self._require_editing()
        updated = apply_changes(self.expense, **self._drafts)
        self.expense = updated
        self._drafts = {}
        self.state = EditState.VIEWING
        return updated

    def cancel(self) -> None:
        """Discard drafts and return to viewing."""
        self._drafts = {}
        self.state = EditState.VIEWING

    def _require_editing(self) -> None:
        if self.state != EditState.EDITING:
            raise DomainError(f"Expense {self.expense.id} is not being edited")
