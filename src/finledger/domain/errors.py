"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist or is not owned by the caller."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DuplicateOperationError(ConflictError):
    """An idempotency key was reused for a second logical operation."""


class ImmutableTransactionError(ConflictError):
    """A transaction that belongs to a ledger operation's audit trail was modified."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class ConsistencyError(DomainError):
    """An atomic multi-record write could not be committed.

    Nothing was written; the caller may retry.
    """


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def transaction_not_found(transaction_id: int) -> str:
    return f"Transaction {transaction_id} not found"


def goal_not_found(goal_id: int) -> str:
    return f"Savings goal {goal_id} not found"


def debt_not_found(debt_id: int) -> str:
    return f"Debt {debt_id} not found"


def schedule_not_found(schedule_id: int) -> str:
    return f"Recurring schedule {schedule_id} not found"


def non_positive_amount(amount) -> str:
    """Return message for a zero or negative amount."""
    return f"Amount must be greater than zero (got {amount})"


def duplicate_unique_id(unique_id: str) -> str:
    """Return message for a reused transaction token."""
    return f"Transaction with unique_id '{unique_id}' already exists"


def ledger_transaction_immutable(transaction_id: int, origin: str) -> str:
    return (
        f"Transaction {transaction_id} was created by a {origin.replace('_', ' ')} "
        "and cannot be changed"
    )


def account_delete_blocked(account_id: int, transaction_count: int) -> str:
    """Return message when account has dependent transactions."""
    return (
        f"Cannot delete account {account_id}: it has {transaction_count} "
        f"transaction{'s' if transaction_count != 1 else ''}. "
        "Please reassign or delete them first."
    )
