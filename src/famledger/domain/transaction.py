"""Transaction domain service.

Drafts are stored as pending entries until they are confirmed through the
``LedgerService``. Confirmed entries are immutable; only drafts can be
discarded.
"""

from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from famledger.database.base import Database
from famledger.domain.entities import (
    Transaction as TransactionEntity,
    TransactionGroup,
    TransactionStatus,
    TransactionType,
)
from famledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    transaction_already_confirmed,
    transaction_not_found,
)
from famledger.domain.usage import UsageService


class TransactionService:
    """Service for managing drafts and reading the ledger."""

    def __init__(self, db: Database, user_id: str):
        """Initialize transaction service.

        Args:
            db: Database instance
            user_id: Owner of the ledger
        """
        self.db = db
        self.user_id = user_id
        self.usage_service = UsageService(db, user_id)

    def create_draft(
        self,
        amount: Decimal,
        type: TransactionType | str,
        group: TransactionGroup | str,
        note: Optional[str] = None,
        category: Optional[str] = None,
        date: Optional[date] = None,
        debit_account_id: Optional[str] = None,
        credit_account_id: Optional[str] = None,
        asset_link_id: Optional[str] = None,
        units: Optional[Decimal] = None,
        price: Optional[Decimal] = None,
        fees: Optional[Decimal] = None,
        from_account_name: Optional[str] = None,
        to_account_name: Optional[str] = None,
    ) -> str:
        """Create a pending draft.

        Args:
            amount: Unsigned amount; only revaluations may be negative
            type: Transaction type
            group: INCOME, EXPENSES, ASSETS or CAPITAL
            note: Optional note
            category: Optional category label
            date: Optional booking date (defaults to the confirmation date)
            debit_account_id: Optional explicit debit account
            credit_account_id: Optional explicit credit account
            asset_link_id: Optional explicit asset account
            units: Units bought or sold (investment entries)
            price: Unit price (investment entries)
            fees: Fees (investment entries)
            from_account_name: Source account name used when no id is given
            to_account_name: Target account name used when no id is given

        Returns:
            Transaction ID

        Raises:
            ValidationError: If type, group or amounts are invalid
            QuotaExceededError: If this month's limit is used up
            NotFoundError: If an explicit account doesn't exist
        """
        try:
            group = TransactionGroup(group)
        except ValueError:
            raise ValidationError(f"Unknown transaction group '{group}'")
        try:
            type = TransactionType(type)
        except ValueError:
            raise ValidationError(f"Unknown transaction type '{type}'")

        amount = Decimal(amount)
        if amount < 0 and type != TransactionType.ASSET_REVALUATION:
            raise ValidationError("Amount must not be negative")
        for label, value in (("units", units), ("price", price), ("fees", fees)):
            if value is not None and Decimal(value) < 0:
                raise ValidationError(f"{label.capitalize()} must not be negative")

        # Verify explicit accounts
        for account_id in (debit_account_id, credit_account_id, asset_link_id):
            if account_id is not None and self.db.get_account(self.user_id, account_id) is None:
                raise NotFoundError(account_not_found(account_id))

        self.usage_service.check_quota()

        draft = TransactionEntity(
            id=uuid4().hex,
            amount=amount,
            type=type,
            group=group,
            status=TransactionStatus.PENDING,
            note=note,
            category=category,
            date=date,
            debit_account_id=debit_account_id,
            credit_account_id=credit_account_id,
            asset_link_id=asset_link_id,
            units=units,
            price=price,
            fees=fees,
            from_account_name=from_account_name,
            to_account_name=to_account_name,
            created_at=datetime.now(UTC),
        )
        self.db.create_transaction(self.user_id, draft)
        return draft.id

    def get_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(self.user_id, transaction_id)

    def list_drafts(self) -> list[TransactionEntity]:
        """List pending drafts in creation order."""
        return self.db.list_transactions(self.user_id, status=TransactionStatus.PENDING)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List confirmed ledger entries.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter
            account_id: Optional filter on either leg of the entry

        Returns:
            List of transaction entities
        """
        return self.db.list_transactions(
            self.user_id,
            status=TransactionStatus.CONFIRMED,
            start_date=start_date,
            end_date=end_date,
            account_id=account_id,
        )

    def discard_draft(self, transaction_id: str) -> None:
        """Delete a pending draft.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ConflictError: If the transaction is already confirmed
        """
        txn = self.db.get_transaction(self.user_id, transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        if txn.status == TransactionStatus.CONFIRMED:
            raise ConflictError(transaction_already_confirmed(transaction_id))

        self.db.delete_transaction(self.user_id, transaction_id)
