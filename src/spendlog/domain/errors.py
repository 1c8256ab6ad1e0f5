"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested expense does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a duplicate expense ID."""


class EmailDispatchError(DomainError):
    """The external email service rejected or failed to deliver a message."""


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def duplicate_expense_id(expense_id: int) -> str:
    """Return message for an expense ID that is already stored."""
    return f"Expense with ID {expense_id} already exists"


def invalid_amount() -> str:
    """Return message for a missing or non-positive amount."""
    return "Please enter a valid amount"


def missing_custom_category() -> str:
    """Return message when 'Other' is chosen without a label."""
    return "Please enter the expense type for 'Other'"


def invalid_email_address() -> str:
    """Return message for a malformed recipient address."""
    return "Please enter a valid email address"


def invalid_split_size(total_people: int) -> str:
    """Return message for a split with too few people."""
    return f"A split needs at least 2 people, got {total_people}"
