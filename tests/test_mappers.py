"""Tests for stored JSON mappers."""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from spendlog.database.mappers import (
    decode_expense_blob,
    expense_from_dict,
    expense_to_dict,
    expenses_to_json,
    parse_timestamp,
)
from spendlog.domain.entities import PaidBy, Split


class TestExpenseToDict:
    """Tests for converting entities to stored records."""

    def test_uses_camel_case_keys(self, expense_factory):
        expense = expense_factory(
            expense_id=7,
            amount="12.50",
            note="Lunch",
            shared_via_email=True,
            email_recipient="a@example.com",
            email_sent_at=datetime(2024, 6, 15, 12, 0),
        )

        data = expense_to_dict(expense)

        assert data == {
            "id": 7,
            "amount": 12.5,
            "category": "Food",
            "date": "2024-06-15T10:00:00",
            "note": "Lunch",
            "sharedViaEmail": True,
            "emailRecipient": "a@example.com",
            "emailSentAt": "2024-06-15T12:00:00",
        }

    def test_includes_split(self, expense_factory):
        expense = expense_factory(
            split=Split(total_people=4, paid_by=PaidBy.YOU),
            split_amount=Decimal("25"),
        )

        data = expense_to_dict(expense)

        assert data["split"] == {
            "totalPeople": 4,
            "paidBy": "you",
            "splitEqually": True,
            "customShares": {},
        }
        assert data["splitAmount"] == 25

    def test_whole_amounts_are_integers(self, expense_factory):
        data = expense_to_dict(expense_factory(amount="100.00"))
        assert data["amount"] == 100
        assert isinstance(data["amount"], int)


class TestExpenseFromDict:
    """Tests for converting stored records to entities."""

    def test_browser_record(self):
        """Records written by the browser version load unchanged."""
        record = {
            "id": 1718445600000,
            "amount": 250.75,
            "category": "Travel",
            "date": "2024-06-15",
            "note": "Taxi",
            "sharedViaEmail": False,
        }

        expense = expense_from_dict(record)

        assert expense.id == 1718445600000
        assert expense.amount == Decimal("250.75")
        assert expense.category == "Travel"
        assert expense.date == datetime(2024, 6, 15, 0, 0)
        assert expense.note == "Taxi"
        assert expense.split is None

    def test_missing_note_becomes_empty(self):
        expense = expense_from_dict(
            {"id": 1, "amount": 5, "category": "Food", "date": "2024-06-15"}
        )
        assert expense.note == ""
        assert expense.shared_via_email is False

    def test_split_without_payer_defaults_to_you(self):
        expense = expense_from_dict(
            {
                "id": 1,
                "amount": 60,
                "category": "Food",
                "date": "2024-06-15",
                "split": {"totalPeople": 3},
                "splitAmount": 20,
            }
        )
        assert expense.split == Split(total_people=3, paid_by=PaidBy.YOU)
        assert expense.split_amount == Decimal("20")

    @pytest.mark.parametrize(
        "record",
        [
            {"amount": 5, "category": "Food", "date": "2024-06-15"},
            {"id": 1, "category": "Food", "date": "2024-06-15"},
            {"id": 1, "amount": 5, "category": "", "date": "2024-06-15"},
            {"id": 1, "amount": "abc", "category": "Food", "date": "2024-06-15"},
            {"id": 1, "amount": 5, "category": "Food", "date": "not a date"},
            {"id": "1", "amount": 5, "category": "Food", "date": "2024-06-15"},
            {"id": 1, "amount": -5, "category": "Food", "date": "2024-06-15"},
            {"id": 1, "amount": 0, "category": "Food", "date": "2024-06-15"},
            {"id": 1, "amount": "NaN", "category": "Food", "date": "2024-06-15"},
            {"id": 1, "amount": 5, "category": "Food", "date": "2024-06-15", "note": 7},
            {"id": 1, "amount": 5, "category": "Food", "date": "2024-06-15", "emailRecipient": 1},
            {"id": 1, "amount": 5, "category": "Food", "date": "2024-06-15", "sharedViaEmail": "false"},
            {"id": 1, "amount": 5, "category": "Food", "date": "2024-06-15", "split": {"totalPeople": 0}},
            {"id": 1, "amount": 5, "category": "Food", "date": "2024-06-15", "split": {"totalPeople": 1}},
            {"id": 1, "amount": 5, "category": "Food", "date": "2024-06-15", "split": {"totalPeople": "4"}},
            {"id": 1, "amount": 5, "category": "Food", "date": "2024-06-15", "split": "yes"},
            {"id": 1, "amount": 5, "category": "Food", "date": "2024-06-15", "split": {"totalPeople": 2, "paidBy": "bob"}},
            {"id": 1, "amount": 5, "category": "Food", "date": "2024-06-15", "splitAmount": "Infinity"},
            ["not", "an", "object"],
        ],
    )
    def test_invalid_records_raise_value_error(self, record):
        with pytest.raises(ValueError):
            expense_from_dict(record)


def test_parse_timestamp_converts_utc_to_local():
    parsed = parse_timestamp("2024-06-15T10:00:00.000Z")
    expected = (
        datetime(2024, 6, 15, 10, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    )
    assert parsed == expected
    assert parsed.tzinfo is None


def test_expenses_to_json_is_array(expense_factory):
    blob = expenses_to_json([expense_factory(expense_id=1), expense_factory(expense_id=2)])
    assert [item["id"] for item in json.loads(blob)] == [1, 2]


def test_decode_expense_blob_rejects_non_array():
    with pytest.raises(ValueError):
        decode_expense_blob('{"id": 1}')


def test_decode_expense_blob_rejects_non_json():
    with pytest.raises(ValueError):
        decode_expense_blob("definitely not json")


def test_decode_expense_blob_reads_floats_as_decimal():
    records = decode_expense_blob('[{"amount": 0.1}]')
    assert records[0]["amount"] == Decimal("0.1")


def test_shared_flag_accepts_null():
    expense = expense_from_dict(
        {"id": 1, "amount": 5, "category": "Food", "date": "2024-06-15", "sharedViaEmail": None}
    )
    assert expense.shared_via_email is False


def test_nan_literal_in_blob_is_rejected():
    [record] = decode_expense_blob(
        '[{"id": 1, "amount": NaN, "category": "Food", "date": "2024-06-15"}]'
    )
    with pytest.raises(ValueError, match="finite"):
        expense_from_dict(record)
