"""Time-window filtering of expenses."""

from datetime import datetime, timedelta
from typing import Optional, Sequence

from spendlog.domain.entities import Expense, FilterMode


def start_of_day(moment: datetime) -> datetime:
    """Return midnight of moment's calendar date."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    """Return midnight of the Sunday that starts now's week."""
    days_since_sunday = (now.weekday() + 1) % 7
    return start_of_day(now) - timedelta(days=days_since_sunday)


def start_of_month(now: datetime) -> datetime:
    """Return midnight of the first day of now's month."""
    return start_of_day(now).replace(day=1)


def period_bounds(
    mode: FilterMode, now: datetime
) -> tuple[Optional[datetime], Optional[datetime]]:
    """Return the (start, end) instants shown for a filter window.

    The end of the weekly window is ``now`` itself rather than the end of
    the day. ``FilterMode.ALL`` has no bounds.
    """
    mode = FilterMode(mode)
    if mode == FilterMode.DAILY:
        start = start_of_day(now)
        return start, start + timedelta(days=1) - timedelta(microseconds=1)
    if mode == FilterMode.WEEKLY:
        return start_of_week(now), now
    if mode == FilterMode.MONTHLY:
        start = start_of_month(now)
        if start.month == 12:
            next_month = start.replace(year=start.year + 1, month=1)
        else:
            next_month = start.replace(month=start.month + 1)
        return start, next_month - timedelta(microseconds=1)
    return None, None


def matches_period(expense: Expense, mode: FilterMode, now: datetime) -> bool:
    """Check whether expense falls inside the window for mode at now."""
    mode = FilterMode(mode)
    expense_day = start_of_day(expense.date)

    if mode == FilterMode.DAILY:
        return expense_day == start_of_day(now)
    if mode == FilterMode.WEEKLY:
        # Upper bound is the untruncated now; expense_day is truncated, so
        # anything dated today still counts.
        return start_of_week(now) <= expense_day <= now
    if mode == FilterMode.MONTHLY:
        return expense.date.year == now.year and expense.date.month == now.month
    return True


def filter_by_period(
    expenses: Sequence[Expense], mode: FilterMode, now: datetime
) -> list[Expense]:
    """Return the expenses inside the time window, preserving order.

    Args:
        expenses: Expenses to filter
        mode: daily, weekly, monthly or all
        now: Reference instant for the window

    Returns:
        New list of matching expenses
    """
    mode = FilterMode(mode)
    if mode == FilterMode.ALL:
        return list(expenses)
    return [exp for exp in expenses if matches_period(exp, mode, now)]
