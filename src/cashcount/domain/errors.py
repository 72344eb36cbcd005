"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class AuthenticationError(DomainError):
    """Missing or invalid credentials."""


class ForbiddenError(DomainError):
    """Authenticated caller is not allowed to touch the resource."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class StorageError(DomainError):
    """Unclassified persistence failure."""


def unknown_denomination(denomination_id: int) -> str:
    """Return message for a denomination id missing from the catalog."""
    return f"Invalid denomination ID: {denomination_id}"


def unknown_denomination_value(value: Decimal) -> str:
    """Return message for a denomination value missing from the catalog."""
    return f"Invalid denomination value: {value}"


def negative_quantity(quantity: int) -> str:
    """Return message for a negative denomination count."""
    return f"Quantity must be a non-negative integer, got {quantity}"


def statement_not_found(statement_id: int) -> str:
    """Return message for missing statement."""
    return f"Statement {statement_id} not found"


def statement_access_denied() -> str:
    """Return message when a statement is missing or owned by someone else."""
    return "Statement not found or access denied"


def user_not_found(user_id: int) -> str:
    """Return message for missing user by ID."""
    return f"User {user_id} not found"


def duplicate_email(email: str) -> str:
    """Return message for an already registered email."""
    return f"Email already exists: {email}"


def duplicate_denomination(denomination_id: int) -> str:
    """Return message for an already used denomination id."""
    return f"Denomination {denomination_id} already exists"
