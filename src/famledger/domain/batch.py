"""Write set of one confirmation, committed all-or-nothing."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from famledger.domain.entities import Account, InvestmentDetails, InvestmentLog, Transaction


@dataclass(frozen=True)
class UsageIncrement:
    """Counter update queued with a ledger batch.

    The store adds ``count`` when its month equals ``month`` and resets the
    counter to ``count`` otherwise.
    """

    month: str
    count: int


@dataclass
class LedgerBatch:
    """Queued writes of a confirmation.

    Balances and P&L accumulators are expressed as increments so batches from
    different sessions compose. Lot logs are appended in order and replayed by
    the store onto the lot state it reads inside the commit; ``lot_seeds``
    only supplies the symbol and currency of accounts that have no lot yet.
    """

    committed_at: datetime
    new_accounts: list[Account] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    balance_deltas: dict[str, Decimal] = field(default_factory=lambda: defaultdict(Decimal))
    realized_pnl: dict[str, Decimal] = field(default_factory=lambda: defaultdict(Decimal))
    unrealized_pnl: dict[str, Decimal] = field(default_factory=lambda: defaultdict(Decimal))
    lot_seeds: dict[str, InvestmentDetails] = field(default_factory=dict)
    lot_logs: list[tuple[str, InvestmentLog]] = field(default_factory=list)
    usage: Optional[UsageIncrement] = None

    def increment_balance(self, account_id: str, delta: Decimal) -> None:
        self.balance_deltas[account_id] += delta
