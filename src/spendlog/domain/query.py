"""Category, text search and sort over expense lists."""

from decimal import Decimal
from typing import Sequence

from spendlog.domain.entities import (
    ALL_CATEGORIES,
    Expense,
    QueryResult,
    SortField,
    SortOrder,
)


def total_amount(expenses: Sequence[Expense]) -> Decimal:
    """Sum of expense amounts."""
    return sum((exp.amount for exp in expenses), Decimal("0"))


def list_categories(expenses: Sequence[Expense]) -> list[str]:
    """Distinct categories in order of first appearance."""
    seen: dict[str, None] = {}
    for exp in expenses:
        seen.setdefault(exp.category, None)
    return list(seen)


def filter_by_category(expenses: Sequence[Expense], category: str) -> list[Expense]:
    """Keep expenses in category; ``"all"`` keeps everything."""
    if category == ALL_CATEGORIES:
        return list(expenses)
    return [exp for exp in expenses if exp.category == category]


def search_expenses(expenses: Sequence[Expense], search: str) -> list[Expense]:
    """Case-insensitive substring match on category or note."""
    if not search or not search.strip():
        return list(expenses)
    needle = search.lower()
    return [
        exp
        for exp in expenses
        if needle in exp.category.lower() or needle in (exp.note or "").lower()
    ]


def sort_expenses(
    expenses: Sequence[Expense],
    sort_by: SortField = SortField.DATE,
    sort_order: SortOrder = SortOrder.DESC,
) -> list[Expense]:
    """Stable sort by date, amount or category."""
    sort_by = SortField(sort_by)
    sort_order = SortOrder(sort_order)

    if sort_by == SortField.AMOUNT:
        key = lambda exp: exp.amount
    elif sort_by == SortField.CATEGORY:
        key = lambda exp: exp.category.lower()
    else:
        key = lambda exp: exp.date

    return sorted(expenses, key=key, reverse=sort_order == SortOrder.DESC)


def query_expenses(
    expenses: Sequence[Expense],
    category: str = ALL_CATEGORIES,
    search: str = "",
    sort_by: SortField = SortField.DATE,
    sort_order: SortOrder = SortOrder.DESC,
) -> QueryResult:
    """Apply category filter, then text search, then sort.

    Args:
        expenses: Expenses to query
        category: Exact category to keep, or "all"
        search: Text matched against category and note
        sort_by: Field to sort on
        sort_order: asc or desc

    Returns:
        QueryResult with the matching expenses and their total amount
    """
    result = filter_by_category(expenses, category)
    result = search_expenses(result, search)
    result = sort_expenses(result, sort_by, sort_order)
    return QueryResult(expenses=tuple(result), total=total_amount(result))
