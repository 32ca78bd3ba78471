"""Ledger batch confirmation.

Confirming turns a selection of pending drafts into confirmed ledger entries.
Drafts are posted strictly in the order given: later drafts may reuse
accounts that earlier drafts in the same batch created. All account
creations, entries, balance increments, lot updates and the usage counter
are committed as one atomic batch.
"""

import threading
from dataclasses import replace
from datetime import datetime, UTC
from decimal import Decimal
from typing import Callable, Iterable, Optional, Sequence

from famledger.config import DEFAULT_TRANSACTION_CATEGORY, MAX_BATCH_SIZE
from famledger.database.base import Database
from famledger.domain.account import summarize_balances
from famledger.domain.batch import LedgerBatch, UsageIncrement
from famledger.domain.directory import AccountDirectory
from famledger.domain.entities import (
    Account,
    AccountGroup,
    ConfirmationResult,
    ReactionContext,
    Transaction,
    TransactionGroup,
    TransactionStatus,
)
from famledger.domain.errors import (
    BatchTooLargeError,
    ConfirmationInProgressError,
    ConflictError,
    NotFoundError,
    account_not_found,
    batch_too_large,
    transaction_already_confirmed,
)
from famledger.domain.posting_rules import Posting, PostingContext, post
from famledger.domain.usage import month_key
from famledger.logging_config import get_logger

logger = get_logger("domain.ledger")

ReactionCallback = Callable[[Transaction, ReactionContext], None]


def debit_delta(account: Account, amount: Decimal) -> Decimal:
    """Signed balance change of debiting ``account``."""
    return amount if account.group == AccountGroup.ASSETS else -amount


def credit_delta(account: Account, amount: Decimal) -> Decimal:
    """Signed balance change of crediting ``account``."""
    return amount if account.group == AccountGroup.CAPITAL else -amount


def reaction_context(accounts: Iterable[Account]) -> ReactionContext:
    sheet = summarize_balances(accounts)
    return ReactionContext(
        net_worth=sheet.net_worth, total_assets=sheet.total_assets, total_debt=sheet.total_debt
    )


def _is_larger_expense(txn: Transaction, current: Optional[Transaction]) -> bool:
    if txn.group != TransactionGroup.EXPENSES:
        return False
    return current is None or txn.amount > current.amount


class LedgerService:
    """Service confirming pending drafts into the ledger."""

    def __init__(
        self,
        db: Database,
        user_id: str,
        reaction: Optional[ReactionCallback] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize ledger service.

        Args:
            db: Database instance
            user_id: Owner of the ledger
            reaction: Optional hook called with the largest expense of a
                committed batch
            clock: Optional source of the current time
        """
        self.db = db
        self.user_id = user_id
        self.reaction = reaction
        self.clock = clock or (lambda: datetime.now(UTC))
        self._lock = threading.Lock()

    @property
    def is_saving(self) -> bool:
        return self._lock.locked()

    def confirm(
        self,
        pending_transactions: Sequence[Transaction],
        selected_ids: Iterable[str],
        accounts: Optional[Sequence[Account]] = None,
        added_by: Optional[str] = None,
    ) -> ConfirmationResult:
        """Confirm the selected drafts as one atomic batch.

        Args:
            pending_transactions: Drafts in posting order
            selected_ids: Ids of the drafts to confirm
            accounts: Account snapshot; read from the database when omitted
            added_by: Optional author recorded on each entry

        Returns:
            ConfirmationResult of the committed batch

        Raises:
            BatchTooLargeError: If more than MAX_BATCH_SIZE ids are selected
            ConfirmationInProgressError: If a confirmation is already running
            NotFoundError: If a draft names an unknown account id
            ConflictError: If a selected entry is already confirmed
            CommitError: If the store rejected the batch
        """
        selected = set(selected_ids)
        if len(selected) > MAX_BATCH_SIZE:
            raise BatchTooLargeError(batch_too_large(len(selected), MAX_BATCH_SIZE))

        if not self._lock.acquire(blocking=False):
            raise ConfirmationInProgressError("A confirmation is already in progress")
        try:
            return self._confirm(pending_transactions, selected, accounts, added_by)
        finally:
            self._lock.release()

    def _confirm(
        self,
        pending_transactions: Sequence[Transaction],
        selected: set[str],
        accounts: Optional[Sequence[Account]],
        added_by: Optional[str],
    ) -> ConfirmationResult:
        now = self.clock()
        snapshot = list(accounts) if accounts is not None else self.db.list_accounts(self.user_id)
        context = reaction_context(snapshot)

        drafts = [t for t in pending_transactions if t.id in selected]
        if not drafts:
            return ConfirmationResult(transactions=[], created_accounts=[], balance_deltas={})

        directory = AccountDirectory(snapshot, now)
        ctx = PostingContext(directory=directory, today=now.date(), now=now)
        batch = LedgerBatch(committed_at=now)
        batch.usage = UsageIncrement(month=month_key(now), count=len(drafts))

        largest_expense: Optional[Transaction] = None
        for txn in drafts:
            if txn.status == TransactionStatus.CONFIRMED:
                raise ConflictError(transaction_already_confirmed(txn.id))
            if _is_larger_expense(txn, largest_expense):
                largest_expense = txn

            posting = post(txn, ctx)
            self._apply_posting(posting, directory, batch)
            batch.transactions.append(
                replace(
                    txn,
                    amount=posting.amount,
                    status=TransactionStatus.CONFIRMED,
                    debit_account_id=posting.debit_id,
                    credit_account_id=posting.credit_id,
                    asset_link_id=posting.asset_link_id,
                    date=txn.date or ctx.today,
                    datetime=txn.datetime or now,
                    category=txn.category or DEFAULT_TRANSACTION_CATEGORY,
                    created_at=now,
                    added_by=added_by or txn.added_by,
                )
            )

        batch.new_accounts = directory.created

        logger.info(
            "ledger_batch_prepared",
            extra={
                "user_id": self.user_id,
                "transaction_count": len(batch.transactions),
                "new_account_count": len(batch.new_accounts),
            },
        )
        self.db.commit_batch(self.user_id, batch)
        logger.info(
            "ledger_batch_committed",
            extra={"user_id": self.user_id, "transaction_count": len(batch.transactions)},
        )

        if largest_expense is not None and self.reaction is not None:
            self._notify(largest_expense, context)

        return ConfirmationResult(
            transactions=batch.transactions,
            created_accounts=batch.new_accounts,
            balance_deltas=dict(batch.balance_deltas),
            largest_expense=largest_expense,
            usage_month=batch.usage.month,
        )

    def _apply_posting(self, posting: Posting, directory: AccountDirectory, batch: LedgerBatch) -> None:
        debit = directory.find(posting.debit_id)
        if debit is None:
            raise NotFoundError(account_not_found(posting.debit_id))
        credit = directory.find(posting.credit_id)
        if credit is None:
            raise NotFoundError(account_not_found(posting.credit_id))

        batch.increment_balance(debit.id, debit_delta(debit, posting.amount))
        batch.increment_balance(credit.id, credit_delta(credit, posting.amount))

        if posting.lot is not None or posting.unrealized_pnl:
            asset = directory.find(posting.asset_link_id)
            if asset is None:
                raise NotFoundError(account_not_found(posting.asset_link_id))
            # Later drafts in the batch must see the new lot state
            directory.update(
                replace(
                    asset,
                    investment_details=posting.lot.details if posting.lot else asset.investment_details,
                    investment_logs=asset.investment_logs + ((posting.lot.log,) if posting.lot else ()),
                    realized_pnl=asset.realized_pnl + posting.realized_pnl,
                    unrealized_pnl=asset.unrealized_pnl + posting.unrealized_pnl,
                )
            )
            if posting.lot is not None:
                batch.lot_seeds.setdefault(asset.id, posting.lot.details)
                batch.lot_logs.append((asset.id, posting.lot.log))
            if posting.realized_pnl:
                batch.realized_pnl[asset.id] += posting.realized_pnl
            if posting.unrealized_pnl:
                batch.unrealized_pnl[asset.id] += posting.unrealized_pnl

        if posting.pnl_fund_id is not None:
            batch.increment_balance(posting.pnl_fund_id, posting.realized_pnl)

    def _notify(self, transaction: Transaction, context: ReactionContext) -> None:
        # Runs after the commit; a failing hook never undoes the batch
        try:
            self.reaction(transaction, context)
        except Exception:
            logger.exception("reaction_failed", extra={"transaction_id": transaction.id})
