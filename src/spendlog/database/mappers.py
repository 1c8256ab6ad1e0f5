"""Mapper functions to convert between domain entities and stored JSON.

Stored records use camelCase field names.
"""

import json
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from dateutil import parser as date_parser

from spendlog.domain.entities import Expense, PaidBy, Split
from spendlog.domain.split import MIN_PEOPLE


def _to_decimal(value: Any) -> Decimal:
    """Convert a stored number (or numeric string) to a finite Decimal."""
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def _optional_str(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Field {key} must be a string, got {value!r}")
    return value


def _to_number(value: Decimal) -> int | float:
    """Convert Decimal to a JSON number."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO date or timestamp into a naive local datetime.

    Date-only values ("2024-06-15") become midnight. Values carrying a UTC
    offset ("2024-06-15T10:00:00.000Z") are converted to local time.
    """
    if not isinstance(value, str):
        raise ValueError(f"Not a timestamp: {value!r}")
    dt = date_parser.isoparse(value)
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def split_to_dict(split: Split) -> dict[str, Any]:
    """Convert Split entity to its stored representation."""
    return {
        "totalPeople": split.total_people,
        "paidBy": split.paid_by.value,
        "splitEqually": split.split_equally,
        "customShares": dict(split.custom_shares),
    }


def _flag(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Field {key} must be true or false, got {value!r}")
    return value


def split_from_dict(data: dict[str, Any]) -> Split:
    """Convert stored split data to Split entity.

    Raises:
        ValueError: If the split is not an object or has fewer than two people
    """
    if not isinstance(data, dict):
        raise ValueError(f"Split must be an object, got {type(data).__name__}")
    total_people = data.get("totalPeople")
    if isinstance(total_people, bool) or not isinstance(total_people, int):
        raise ValueError(f"Split totalPeople must be an integer, got {total_people!r}")
    if total_people < MIN_PEOPLE:
        raise ValueError(f"Split needs at least {MIN_PEOPLE} people, got {total_people}")
    shares = data.get("customShares") or {}
    if not isinstance(shares, dict):
        raise ValueError(f"Split customShares must be an object, got {shares!r}")
    return Split(
        total_people=total_people,
        paid_by=PaidBy(data.get("paidBy") or PaidBy.YOU.value),
        split_equally=_flag(data, "splitEqually", True),
        custom_shares=dict(shares),
    )


def expense_to_dict(expense: Expense) -> dict[str, Any]:
    """Convert Expense entity to its stored representation."""
    data: dict[str, Any] = {
        "id": expense.id,
        "amount": _to_number(expense.amount),
        "category": expense.category,
        "date": expense.date.isoformat(),
        "note": expense.note,
        "sharedViaEmail": expense.shared_via_email,
    }
    if expense.email_recipient is not None:
        data["emailRecipient"] = expense.email_recipient
    if expense.email_sent_at is not None:
        data["emailSentAt"] = expense.email_sent_at.isoformat()
    if expense.split is not None:
        data["split"] = split_to_dict(expense.split)
    if expense.split_amount is not None:
        data["splitAmount"] = _to_number(expense.split_amount)
    return data


def expense_from_dict(data: dict[str, Any]) -> Expense:
    """Convert stored expense data to Expense entity.

    Raises:
        ValueError: If a required field is missing or malformed
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expense record must be an object, got {type(data).__name__}")
    try:
        expense_id = data["id"]
        amount = data["amount"]
        category = data["category"]
        date_value = data["date"]
    except KeyError as e:
        raise ValueError(f"Expense record missing field {e}") from e

    if isinstance(expense_id, bool) or not isinstance(expense_id, int):
        raise ValueError(f"Expense id must be an integer, got {expense_id!r}")
    if not isinstance(category, str) or not category:
        raise ValueError(f"Expense {expense_id} has no category")
    value = _to_decimal(amount)
    if value <= 0:
        raise ValueError(f"Expense {expense_id} amount must be positive, got {value}")
    note = _optional_str(data, "note")
    recipient = _optional_str(data, "emailRecipient")

    sent_at: Optional[datetime] = None
    if data.get("emailSentAt"):
        sent_at = parse_timestamp(data["emailSentAt"])

    split = None
    if data.get("split"):
        split = split_from_dict(data["split"])

    split_amount = None
    if data.get("splitAmount") is not None:
        split_amount = _to_decimal(data["splitAmount"])

    return Expense(
        id=expense_id,
        amount=value,
        category=category,
        date=parse_timestamp(date_value),
        note=note or "",
        shared_via_email=_flag(data, "sharedViaEmail", False),
        email_recipient=recipient,
        email_sent_at=sent_at,
        split=split,
        split_amount=split_amount,
    )


def expenses_to_json(expenses: Sequence[Expense]) -> str:
    """Serialize expenses to the stored JSON array."""
    return json.dumps([expense_to_dict(exp) for exp in expenses])


def decode_expense_blob(blob: str) -> list[Any]:
    """Decode a stored blob into a list of raw records.

    Raises:
        ValueError: If the blob is not JSON or not a JSON array
    """
    raw = json.loads(blob, parse_float=Decimal)
    if not isinstance(raw, list):
        raise ValueError(f"Expected a JSON array, got {type(raw).__name__}")
    return raw
