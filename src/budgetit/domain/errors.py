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


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class StorageError(Exception):
    """A write to the persistent store failed and was rolled back."""


def plan_not_found(plan_id: int) -> str:
    """Return message for missing plan."""
    return f"Plan {plan_id} not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_not_in_plan(account_id: int, plan_id: int) -> str:
    """Return message for an account that belongs to another plan."""
    return f"Account {account_id} does not belong to plan {plan_id}"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_group_not_found(group_id: int) -> str:
    """Return message for missing category group by ID."""
    return f"Category group {group_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def template_not_found(template_id: str) -> str:
    """Return message for unknown allocation template."""
    return f"Template '{template_id}' not found"


def account_delete_blocked(account_id: int, transaction_count: int) -> str:
    """Return message when account still has transactions."""
    return (
        f"Cannot delete account {account_id}: it has "
        f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}. "
        "Please reassign or delete them first."
    )
