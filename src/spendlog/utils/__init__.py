"""Utility functions for spendlog."""

from spendlog.utils.date_parser import parse_date
from spendlog.utils.amount_parser import parse_amount
from spendlog.utils.category_resolver import resolve_category

__all__ = ["parse_date", "parse_amount", "resolve_category"]
