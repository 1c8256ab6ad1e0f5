"""Tests for aggregate views."""

from datetime import date, datetime
from decimal import Decimal

from spendlog.domain.aggregation import (
    category_totals,
    daily_totals,
    highest_day,
    lowest_day,
    summarize,
)
from spendlog.domain.entities import CategoryTotal, DailyTotal


def test_category_totals_sorted_descending(expense_factory):
    expenses = [
        expense_factory(expense_id=1, category="Food", amount="100"),
        expense_factory(expense_id=2, category="Food", amount="50"),
        expense_factory(expense_id=3, category="Travel", amount="30"),
    ]

    totals = category_totals(expenses)

    assert totals == [
        CategoryTotal(category="Food", total=Decimal("150")),
        CategoryTotal(category="Travel", total=Decimal("30")),
    ]
    assert summarize(expenses).top_category.category == "Food"


def test_category_ties_keep_first_seen(expense_factory):
    expenses = [
        expense_factory(expense_id=1, category="Travel", amount="40"),
        expense_factory(expense_id=2, category="Food", amount="40"),
        expense_factory(expense_id=3, category="Shopping", amount="10"),
    ]

    totals = category_totals(expenses)

    assert [item.category for item in totals] == ["Travel", "Food", "Shopping"]
    assert summarize(expenses).top_category.category == "Travel"


def test_summarize_average(expense_factory):
    expenses = [
        expense_factory(expense_id=1, amount="10"),
        expense_factory(expense_id=2, amount="20"),
        expense_factory(expense_id=3, amount="45"),
    ]

    stats = summarize(expenses)

    assert stats.total == Decimal("75")
    assert stats.count == 3
    assert stats.average == stats.total / stats.count
    assert stats.average == Decimal("25")


def test_summarize_empty_has_zero_average():
    stats = summarize([])

    assert stats.total == Decimal("0")
    assert stats.count == 0
    assert stats.average == Decimal("0")
    assert stats.top_category is None


def test_daily_totals_group_by_date(expense_factory):
    expenses = [
        expense_factory(expense_id=1, amount="10", date=datetime(2024, 6, 15, 9, 0)),
        expense_factory(expense_id=2, amount="5", date=datetime(2024, 6, 14, 20, 0)),
        expense_factory(expense_id=3, amount="2.5", date=datetime(2024, 6, 15, 21, 0)),
    ]

    assert daily_totals(expenses) == [
        DailyTotal(date=date(2024, 6, 14), total=Decimal("5")),
        DailyTotal(date=date(2024, 6, 15), total=Decimal("12.5")),
    ]


def test_daily_totals_keep_last_seven_distinct_dates(expense_factory):
    """Gaps between dates do not count toward the window."""
    days = [1, 3, 4, 8, 10, 11, 20, 25, 30]
    expenses = [
        expense_factory(expense_id=i, amount="1", date=datetime(2024, 5, day, 12, 0))
        for i, day in enumerate(reversed(days))
    ]

    totals = daily_totals(expenses)

    assert [item.date.day for item in totals] == [4, 8, 10, 11, 20, 25, 30]


def test_daily_totals_custom_limit(expense_factory):
    expenses = [
        expense_factory(expense_id=1, date=datetime(2024, 6, 1)),
        expense_factory(expense_id=2, date=datetime(2024, 6, 2)),
    ]
    assert [item.date.day for item in daily_totals(expenses, limit=1)] == [2]
    assert daily_totals(expenses, limit=0) == []


def test_highest_and_lowest_day():
    daily = [
        DailyTotal(date=date(2024, 6, 1), total=Decimal("30")),
        DailyTotal(date=date(2024, 6, 2), total=Decimal("10")),
        DailyTotal(date=date(2024, 6, 3), total=Decimal("50")),
    ]

    assert highest_day(daily).date == date(2024, 6, 3)
    assert lowest_day(daily).date == date(2024, 6, 2)


def test_highest_and_lowest_ties_pick_earliest():
    daily = [
        DailyTotal(date=date(2024, 6, 1), total=Decimal("20")),
        DailyTotal(date=date(2024, 6, 2), total=Decimal("20")),
    ]

    assert highest_day(daily).date == date(2024, 6, 1)
    assert lowest_day(daily).date == date(2024, 6, 1)


def test_highest_and_lowest_empty():
    assert highest_day([]) is None
    assert lowest_day([]) is None
