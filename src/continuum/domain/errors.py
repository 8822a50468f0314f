"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class DecodeError(DomainError):
    """Backup snapshot is malformed and cannot be imported."""


class PersistenceError(RuntimeError):
    """Reading from or writing to the backing store failed."""


def subscription_not_found(subscription_id: int) -> str:
    """Return message for missing subscription."""
    return f"Subscription {subscription_id} not found"


def asset_not_found(asset_id: int) -> str:
    """Return message for missing asset."""
    return f"Asset {asset_id} not found"


def warranty_not_found(warranty_id: int) -> str:
    """Return message for missing warranty."""
    return f"Warranty {warranty_id} not found"


def blank_field(field_name: str) -> str:
    """Return message for a required text field left empty."""
    return f"{field_name} cannot be empty"
