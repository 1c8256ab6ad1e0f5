"""Aggregate views over expense lists: category totals, daily totals, stats."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from spendlog.domain.entities import (
    CategoryTotal,
    DailyTotal,
    Expense,
    ExpenseStats,
)
from spendlog.domain.query import total_amount

DAILY_WINDOW = 7


def category_totals(expenses: Sequence[Expense]) -> list[CategoryTotal]:
    """Sum amounts per category, highest total first.

    Categories with equal totals keep the order in which they first appear
    in expenses.
    """
    totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for exp in expenses:
        totals[exp.category] += exp.amount

    results = [CategoryTotal(category=name, total=total) for name, total in totals.items()]
    return sorted(results, key=lambda item: item.total, reverse=True)


def daily_totals(
    expenses: Sequence[Expense], limit: int = DAILY_WINDOW
) -> list[DailyTotal]:
    """Sum amounts per calendar date for the most recent dates.

    Only dates that have at least one expense count, so the window covers the
    last ``limit`` distinct dates rather than a fixed run of calendar days.
    Results are in ascending date order.
    """
    totals: dict[date, Decimal] = defaultdict(lambda: Decimal("0"))
    for exp in expenses:
        totals[exp.date.date()] += exp.amount

    results = [DailyTotal(date=day, total=total) for day, total in sorted(totals.items())]
    if limit <= 0:
        return []
    return results[-limit:]


def highest_day(daily: Sequence[DailyTotal]) -> Optional[DailyTotal]:
    """Return the first entry with the largest total."""
    best: Optional[DailyTotal] = None
    for entry in daily:
        if best is None or entry.total > best.total:
            best = entry
    return best


def lowest_day(daily: Sequence[DailyTotal]) -> Optional[DailyTotal]:
    """Return the first entry with the smallest total."""
    best: Optional[DailyTotal] = None
    for entry in daily:
        if best is None or entry.total < best.total:
            best = entry
    return best


def summarize(expenses: Sequence[Expense]) -> ExpenseStats:
    """Total, count, average and top category for expenses.

    The average is zero for an empty list and the top category is None.
    """
    total = total_amount(expenses)
    count = len(expenses)
    average = total / count if count else Decimal("0")
    by_category = category_totals(expenses)
    return ExpenseStats(
        total=total,
        count=count,
        average=average,
        top_category=by_category[0] if by_category else None,
    )
