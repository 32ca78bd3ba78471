"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from famledger.domain.entities import (
    Account,
    Transaction,
    TransactionStatus,
    UsageCounter,
)
from famledger.domain.batch import LedgerBatch


class Database(ABC):
    """Abstract database interface for famledger.

    All data is partitioned per user; every operation takes the owning
    ``user_id``.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, user_id: str, account: Account) -> str:
        """Persist a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, user_id: str, account_id: str) -> Optional[Account]:
        """Get account by ID, including lot state and lot logs."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: str) -> list[Account]:
        """List all accounts of a user in creation order."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(self, user_id: str, transaction: Transaction) -> str:
        """Persist a pending draft. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, user_id: str, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: str,
        status: Optional[TransactionStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            user_id: Owner of the ledger
            status: Optional status filter
            start_date: Optional start date filter
            end_date: Optional end date filter
            account_id: Optional filter matching the debit or credit account
        """
        pass

    @abstractmethod
    def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        """Delete a pending draft."""
        pass

    # Usage counter operations
    @abstractmethod
    def get_usage(self, user_id: str) -> UsageCounter:
        """Get the monthly usage counter of a user."""
        pass

    @abstractmethod
    def set_monthly_limit(self, user_id: str, limit: int) -> None:
        """Set the monthly transaction limit of a user."""
        pass

    # Ledger operations
    @abstractmethod
    def commit_batch(self, user_id: str, batch: LedgerBatch) -> None:
        """Apply a ledger batch atomically.

        Either every queued write is applied or none is. Implementations
        must express balance and P&L updates as increments.

        Raises:
            CommitError: If the batch could not be applied
        """
        pass
