"""Utility for resolving category input to a stored label."""

from typing import Optional

from spendlog.domain.entities import CATEGORIES, OTHER_CATEGORY
from spendlog.domain.errors import ValidationError, missing_custom_category


def resolve_category(category: str, custom_category: Optional[str] = None) -> str:
    """Resolve category input to the label stored on an expense.

    Known categories match case-insensitively and come back in their
    canonical spelling. "Other" requires a non-empty custom label, which is
    returned instead. Any other non-empty text is kept as a custom label.

    Args:
        category: Category name as entered
        custom_category: Label used when category is "Other"

    Returns:
        Category label

    Raises:
        ValidationError: If the category is empty, or "Other" has no label
    """
    name = (category or "").strip()
    if not name:
        raise ValidationError("Category is required")

    for known in CATEGORIES:
        if known.lower() == name.lower():
            name = known
            break

    if name == OTHER_CATEGORY:
        label = (custom_category or "").strip()
        if not label:
            raise ValidationError(missing_custom_category())
        return label

    return name
