"""Split ledger: per-expense splits and the reconciled balance."""

from dataclasses import replace
from decimal import Decimal
from typing import Sequence

from spendlog.domain.entities import (
    Expense,
    PaidBy,
    Split,
    SplitEntry,
    SplitPreview,
    SplitSummary,
)
from spendlog.domain.errors import ValidationError, invalid_split_size

MIN_PEOPLE = 2

OWED = "owed"
OWE = "owe"


def _validate_people(total_people: int) -> None:
    if isinstance(total_people, bool) or not isinstance(total_people, int):
        raise ValidationError(f"Number of people must be an integer, got {total_people!r}")
    if total_people < MIN_PEOPLE:
        raise ValidationError(invalid_split_size(total_people))


def preview_split(amount: Decimal, total_people: int, paid_by: PaidBy) -> SplitPreview:
    """Per-person share and what each side owes before confirming a split."""
    _validate_people(total_people)
    per_person = amount / total_people
    if PaidBy(paid_by) == PaidBy.YOU:
        return SplitPreview(
            per_person=per_person,
            others_owe_you=amount - per_person,
            you_owe=Decimal("0"),
        )
    return SplitPreview(
        per_person=per_person, others_owe_you=Decimal("0"), you_owe=per_person
    )


def attach_split(expense: Expense, total_people: int, paid_by: PaidBy) -> Expense:
    """Return expense with an equal split attached.

    Raises:
        ValidationError: If fewer than two people share the expense
    """
    _validate_people(total_people)
    split = Split(total_people=total_people, paid_by=PaidBy(paid_by))
    return replace(expense, split=split, split_amount=expense.amount / total_people)


def share_of(expense: Expense) -> Decimal:
    """Current user's share of a split expense."""
    if expense.split is None:
        return expense.amount
    if expense.split_amount:
        return expense.split_amount
    return expense.amount / expense.split.total_people


def reconcile(expenses: Sequence[Expense]) -> SplitSummary:
    """Fold every split expense into a single balance.

    When you paid, the rest of the group owes ``amount - share``. When others
    paid, you owe your share. ``net_balance`` is positive when you are owed.
    """
    you_owe = Decimal("0")
    you_are_owed = Decimal("0")
    entries = []

    for exp in expenses:
        if exp.split is None:
            continue
        share = share_of(exp)
        if exp.split.paid_by == PaidBy.YOU:
            others_share = exp.amount - share
            you_are_owed += others_share
            entries.append(SplitEntry(expense=exp, amount=others_share, kind=OWED))
        else:
            you_owe += share
            entries.append(SplitEntry(expense=exp, amount=share, kind=OWE))

    return SplitSummary(
        you_owe=you_owe,
        you_are_owed=you_are_owed,
        net_balance=you_are_owed - you_owe,
        entries=tuple(entries),
    )
