"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta
from typing import Optional

from dateutil import parser as date_parser


def parse_date(date_str: str, now: Optional[datetime] = None) -> datetime:
    """Parse a date string into a datetime.

    Supports:
    - Absolute dates and timestamps: "2024-01-15", "2024-01-15 18:30",
      "January 15, 2024", etc. Dates without a time are midnight.
    - Relative dates: "now", "today", "yesterday", "tomorrow". "now" keeps
      the time of day, the others are midnight.

    Args:
        date_str: Date string in various formats
        now: Reference instant for relative dates (defaults to datetime.now())

    Returns:
        Naive datetime

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    if now is None:
        now = datetime.now()
    today = datetime.combine(now.date(), time.min)

    relative_dates = {
        "now": now,
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if text in relative_dates:
        return relative_dates[text]

    try:
        dt = date_parser.parse(text)
    except (ValueError, OverflowError, TypeError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def format_long_date(value: date) -> str:
    """Format a date like "Saturday, June 15, 2024"."""
    return f"{value.strftime('%A')}, {value.strftime('%B')} {value.day}, {value.year}"


def format_short_date(value: date) -> str:
    """Format a date like "Sat, Jun 15"."""
    return f"{value.strftime('%a')}, {value.strftime('%b')} {value.day}"
