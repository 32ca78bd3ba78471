"""Domain model entities for famledger.

These are pure data classes representing ledger concepts, independent of the
database schema. Accounts and transactions are frozen; the posting engine
derives updated copies with ``dataclasses.replace`` instead of mutating them.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from famledger.config import DEFAULT_CURRENCY, DEFAULT_MONTHLY_LIMIT, UNLIMITED


class AccountGroup(str, Enum):
    """Side of the balance sheet an account sits on."""

    ASSETS = "ASSETS"
    CAPITAL = "CAPITAL"


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"
    LIQUIDATED = "LIQUIDATED"
    LIQUIDATED_PARTIAL = "LIQUIDATED_PARTIAL"


class TransactionGroup(str, Enum):
    INCOME = "INCOME"
    EXPENSES = "EXPENSES"
    ASSETS = "ASSETS"
    CAPITAL = "CAPITAL"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"


class TransactionType(str, Enum):
    """Kinds of money movement a draft can describe."""

    DAILY_CASHFLOW = "DAILY_CASHFLOW"
    CREDIT_SPENDING = "CREDIT_SPENDING"
    CREDIT_PAYMENT = "CREDIT_PAYMENT"
    INTERNAL_TRANSFER = "INTERNAL_TRANSFER"
    ASSET_BUY = "ASSET_BUY"
    ASSET_SELL = "ASSET_SELL"
    ASSET_INVESTMENT = "ASSET_INVESTMENT"
    ASSET_REVALUATION = "ASSET_REVALUATION"
    LENDING = "LENDING"
    BORROWING = "BORROWING"
    DEBT_REPAYMENT = "DEBT_REPAYMENT"
    CAPITAL_INJECTION = "CAPITAL_INJECTION"
    CAPITAL_WITHDRAWAL = "CAPITAL_WITHDRAWAL"
    FUND_ALLOCATION = "FUND_ALLOCATION"
    INTEREST_LOG = "INTEREST_LOG"
    INITIAL_BALANCE = "INITIAL_BALANCE"


class LotEventType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    REVALUE = "REVALUE"


@dataclass(frozen=True)
class InvestmentDetails:
    """Lot state of an investment-style account."""

    symbol: str
    total_units: Decimal = Decimal("0")
    avg_price: Decimal = Decimal("0")
    market_price: Decimal = Decimal("0")
    last_sync: Optional[datetime] = None
    currency: str = DEFAULT_CURRENCY


@dataclass(frozen=True)
class InvestmentLog:
    """Single lot event. Logs are only ever appended."""

    id: str
    date: date
    type: LotEventType
    units: Decimal
    price: Decimal
    fees: Decimal = Decimal("0")
    note: Optional[str] = None


@dataclass(frozen=True)
class Account:
    """Named bucket of value on either side of the balance sheet."""

    id: str
    name: str
    group: AccountGroup
    category: str
    current_balance: Decimal = Decimal("0")
    status: AccountStatus = AccountStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    color_code: Optional[str] = None
    description: Optional[str] = None
    linked_fund_id: Optional[str] = None
    realized_pnl: Decimal = Decimal("0")
    unrealized_pnl: Decimal = Decimal("0")
    investment_details: Optional[InvestmentDetails] = None
    investment_logs: tuple[InvestmentLog, ...] = ()


@dataclass(frozen=True)
class Transaction:
    """Ledger entry, either a pending draft or a confirmed fact."""

    id: str
    amount: Decimal
    type: TransactionType | str
    group: TransactionGroup
    status: TransactionStatus = TransactionStatus.PENDING
    note: Optional[str] = None
    category: Optional[str] = None
    date: Optional[date] = None
    datetime: Optional[datetime] = None
    debit_account_id: Optional[str] = None
    credit_account_id: Optional[str] = None
    asset_link_id: Optional[str] = None
    linked_fund_id: Optional[str] = None
    units: Optional[Decimal] = None
    price: Optional[Decimal] = None
    fees: Optional[Decimal] = None
    from_account_name: Optional[str] = None
    to_account_name: Optional[str] = None
    created_at: Optional[datetime] = None
    added_by: Optional[str] = None


@dataclass(frozen=True)
class UsageCounter:
    """Monthly confirmed-transaction counter of a user."""

    month: str = ""
    count: int = 0
    limit: int = DEFAULT_MONTHLY_LIMIT

    def effective_count(self, month: str) -> int:
        """Count for ``month``; a counter from an older month reads as zero."""
        return self.count if self.month == month else 0

    def is_limit_reached(self, month: str) -> bool:
        if self.limit == UNLIMITED:
            return False
        return self.effective_count(month) >= self.limit


@dataclass(frozen=True)
class ReactionContext:
    """Rough balance-sheet figures handed to the post-commit reaction hook."""

    net_worth: Decimal
    total_assets: Decimal
    total_debt: Decimal


@dataclass(frozen=True)
class ConfirmationResult:
    """Outcome of a committed confirmation batch."""

    transactions: list[Transaction]
    created_accounts: list[Account]
    balance_deltas: dict[str, Decimal]
    largest_expense: Optional[Transaction] = None
    usage_month: str = ""

    @property
    def confirmed_ids(self) -> list[str]:
        return [t.id for t in self.transactions]


@dataclass
class BalanceSheet:
    """Totals over a user's accounts."""

    total_assets: Decimal = Decimal("0")
    total_debt: Decimal = Decimal("0")
    total_equity: Decimal = Decimal("0")
    accounts: list[Account] = field(default_factory=list)

    @property
    def net_worth(self) -> Decimal:
        return self.total_assets - self.total_debt
