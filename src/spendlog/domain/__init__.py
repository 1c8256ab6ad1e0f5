"""Domain layer for spendlog application."""

from spendlog.domain.entities import (
    CATEGORIES,
    Expense,
    FilterMode,
    PaidBy,
    SortField,
    SortOrder,
    Split,
)
from spendlog.domain.errors import (
    ConflictError,
    DomainError,
    EmailDispatchError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "CATEGORIES",
    "Expense",
    "FilterMode",
    "PaidBy",
    "SortField",
    "SortOrder",
    "Split",
    "ConflictError",
    "DomainError",
    "EmailDispatchError",
    "NotFoundError",
    "ValidationError",
]
