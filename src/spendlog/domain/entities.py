"""Domain model entities for spendlog.

These are pure data classes representing business concepts, independent of
the storage format. The JSON layout kept in storage lives in
``spendlog.database.mappers``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


CATEGORIES = (
    "Food",
    "Transportation",
    "Shopping",
    "Bills & Utilities",
    "Healthcare",
    "Travel",
    "Alcohol",
    "Gifts & Donations",
    "Other",
)

OTHER_CATEGORY = "Other"
ALL_CATEGORIES = "all"


class FilterMode(str, Enum):
    """Time window applied before display."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ALL = "all"


class SortField(str, Enum):
    """Expense attribute used for ordering."""

    DATE = "date"
    AMOUNT = "amount"
    CATEGORY = "category"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class PaidBy(str, Enum):
    """Who paid the full bill of a split expense."""

    YOU = "you"
    OTHERS = "others"


class EmailOutcome(str, Enum):
    """Observable result of an email share attempt."""

    REJECTED = "rejected"
    FAILED = "failed"
    SENT = "sent"


@dataclass(frozen=True)
class Split:
    """Split configuration attached to an expense."""

    total_people: int
    paid_by: PaidBy
    split_equally: bool = True
    custom_shares: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Expense:
    """Expense domain entity."""

    id: int
    amount: Decimal
    category: str
    date: datetime
    note: str = ""
    shared_via_email: bool = False
    email_recipient: Optional[str] = None
    email_sent_at: Optional[datetime] = None
    split: Optional[Split] = None
    split_amount: Optional[Decimal] = None


@dataclass(frozen=True)
class QueryResult:
    """Filtered and sorted expenses with their total amount."""

    expenses: tuple[Expense, ...]
    total: Decimal

    @property
    def count(self) -> int:
        return len(self.expenses)


@dataclass(frozen=True)
class CategoryTotal:
    """Sum of amounts for one category."""

    category: str
    total: Decimal


@dataclass(frozen=True)
class DailyTotal:
    """Sum of amounts for one calendar date."""

    date: date
    total: Decimal


@dataclass(frozen=True)
class ExpenseStats:
    """Summary statistics over a list of expenses."""

    total: Decimal
    count: int
    average: Decimal
    top_category: Optional[CategoryTotal]


@dataclass(frozen=True)
class SplitEntry:
    """Contribution of a single split expense to the balance."""

    expense: Expense
    amount: Decimal
    kind: str  # "owed" or "owe"


@dataclass(frozen=True)
class SplitSummary:
    """Reconciled balance across all split expenses."""

    you_owe: Decimal
    you_are_owed: Decimal
    net_balance: Decimal
    entries: tuple[SplitEntry, ...] = ()


@dataclass(frozen=True)
class SplitPreview:
    """Per-person share shown before a split is confirmed."""

    per_person: Decimal
    others_owe_you: Decimal
    you_owe: Decimal


@dataclass(frozen=True)
class ExpenseSummary:
    """Formatted expense details sent to the email service."""

    amount: Decimal
    category: str
    date: str
    note: str
    formatted_amount: str
