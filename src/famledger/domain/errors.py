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


class BatchTooLargeError(ValidationError):
    """More transactions selected than one confirmation may post."""


class ConfirmationInProgressError(ConflictError):
    """A confirmation is already running for this ledger session."""


class QuotaExceededError(ValidationError):
    """Monthly transaction quota has been used up."""


class CommitError(DomainError):
    """The backing store rejected an atomic batch; nothing was applied."""


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_account_name(name: str, group: str) -> str:
    """Return message for an account name already used within a group."""
    return f"Account with name '{name}' already exists in {group}"


def batch_too_large(selected: int, limit: int) -> str:
    """Return message when a confirmation selects too many transactions."""
    return (
        f"Cannot confirm {selected} transactions at once: "
        f"select at most {limit} per confirmation."
    )


def transaction_already_confirmed(transaction_id: str) -> str:
    """Return message when a confirmed entry would be changed."""
    return f"Transaction {transaction_id} is already confirmed and cannot be changed"


def quota_exceeded(month: str, limit: int) -> str:
    """Return message when the monthly quota is used up."""
    return f"Monthly transaction limit of {limit} reached for {month}"
