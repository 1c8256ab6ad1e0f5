"""Tests for the split ledger."""

from decimal import Decimal

import pytest

from spendlog.domain.entities import PaidBy, Split
from spendlog.domain.errors import ValidationError
from spendlog.domain.split import (
    OWE,
    OWED,
    attach_split,
    preview_split,
    reconcile,
)


def test_attach_split_sets_share(expense_factory):
    expense = expense_factory(amount="100")

    split = attach_split(expense, 4, PaidBy.YOU)

    assert split.split == Split(total_people=4, paid_by=PaidBy.YOU)
    assert split.split_amount == Decimal("25")
    assert split.amount == Decimal("100")
    assert expense.split is None


@pytest.mark.parametrize("people", [1, 0, -3])
def test_attach_split_needs_two_people(expense_factory, people):
    with pytest.raises(ValidationError, match="at least 2 people"):
        attach_split(expense_factory(), people, PaidBy.YOU)


def test_reconcile_combines_both_directions(expense_factory):
    paid_by_you = attach_split(expense_factory(expense_id=1, amount="100"), 4, PaidBy.YOU)
    paid_by_others = attach_split(
        expense_factory(expense_id=2, amount="60"), 3, PaidBy.OTHERS
    )
    unsplit = expense_factory(expense_id=3, amount="500")

    summary = reconcile([paid_by_you, unsplit, paid_by_others])

    assert summary.you_are_owed == Decimal("75")
    assert summary.you_owe == Decimal("20")
    assert summary.net_balance == Decimal("55")
    assert [(entry.expense.id, entry.amount, entry.kind) for entry in summary.entries] == [
        (1, Decimal("75"), OWED),
        (2, Decimal("20"), OWE),
    ]


def test_reconcile_without_splits_is_zero(expense_factory):
    summary = reconcile([expense_factory()])

    assert summary.you_owe == Decimal("0")
    assert summary.you_are_owed == Decimal("0")
    assert summary.net_balance == Decimal("0")
    assert summary.entries == ()


def test_reconcile_falls_back_to_equal_share(expense_factory):
    """Records without a stored share use amount / people."""
    expense = expense_factory(
        amount="90", split=Split(total_people=3, paid_by=PaidBy.OTHERS)
    )

    summary = reconcile([expense])

    assert summary.you_owe == Decimal("30")
    assert summary.net_balance == Decimal("-30")


def test_preview_split():
    preview = preview_split(Decimal("100"), 4, PaidBy.YOU)
    assert preview.per_person == Decimal("25")
    assert preview.others_owe_you == Decimal("75")
    assert preview.you_owe == Decimal("0")

    preview = preview_split(Decimal("60"), 3, "others")
    assert preview.you_owe == Decimal("20")
    assert preview.others_owe_you == Decimal("0")
