"""Posting rules: which accounts a transaction debits and credits.

Each transaction type maps to one rule. A rule looks at the draft, resolves
its debit account, credit account and asset link through the batch's
``AccountDirectory``, and reports any lot accounting side effect. Explicit
account ids on the draft always win over defaults. Types without a rule of
their own are posted as daily cash flow.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

from famledger.config import DEFAULT_CREDIT_CARD_NAME, ZERO
from famledger.domain.directory import AccountDirectory
from famledger.domain.entities import (
    AccountGroup,
    InvestmentDetails,
    Transaction,
    TransactionGroup,
    TransactionType,
)
from famledger.domain.valuation import LotUpdate, apply_buy, apply_revaluation, apply_sell


@dataclass(frozen=True)
class Posting:
    """Resolved double-entry legs of one transaction."""

    debit_id: str
    credit_id: str
    amount: Decimal
    asset_link_id: Optional[str] = None
    lot: Optional[LotUpdate] = None
    pnl_fund_id: Optional[str] = None
    unrealized_pnl: Decimal = ZERO

    @property
    def realized_pnl(self) -> Decimal:
        return self.lot.realized_pnl if self.lot is not None else ZERO


@dataclass
class PostingContext:
    directory: AccountDirectory
    today: date
    now: datetime


Rule = Callable[[Transaction, PostingContext], Posting]


def _num(value: Optional[Decimal]) -> Decimal:
    return Decimal(value) if value is not None else ZERO


def _is_income(txn: Transaction) -> bool:
    return txn.group == TransactionGroup.INCOME


def _daily_cashflow(txn: Transaction, ctx: PostingContext) -> Posting:
    d = ctx.directory
    if _is_income(txn):
        debit = txn.debit_account_id or d.default_cash()
        credit = txn.credit_account_id or d.default_equity_fund()
    else:
        debit = txn.debit_account_id or d.default_equity_fund()
        credit = txn.credit_account_id or d.default_cash()
    return Posting(debit, credit, txn.amount)


def _credit_spending(txn: Transaction, ctx: PostingContext) -> Posting:
    d = ctx.directory
    debit = txn.debit_account_id or d.default_equity_fund()
    credit = (
        txn.credit_account_id
        or d.first_in_category("Credit Card")
        or d.resolve(DEFAULT_CREDIT_CARD_NAME, AccountGroup.CAPITAL, "Credit Card")
    )
    return Posting(debit, credit, txn.amount)


def _asset_buy(txn: Transaction, ctx: PostingContext) -> Posting:
    d = ctx.directory
    credit = txn.credit_account_id or d.default_cash()
    debit = txn.debit_account_id or d.resolve(
        txn.to_account_name or txn.note or "New Asset", AccountGroup.ASSETS, txn.category or "Stocks"
    )

    lot = None
    units = _num(txn.units)
    if units > 0:
        price = _num(txn.price)
        target = d.find(debit)
        details = None
        if target is not None:
            details = target.investment_details
        if details is None:
            details = InvestmentDetails(
                symbol=target.name if target is not None else "", market_price=price
            )
        lot = apply_buy(
            details, units, price, _num(txn.fees), txn.date or ctx.today, ctx.now, txn.note
        )
    return Posting(debit, credit, txn.amount, asset_link_id=debit, lot=lot)


def _asset_sell(txn: Transaction, ctx: PostingContext) -> Posting:
    d = ctx.directory
    debit = txn.debit_account_id or d.default_cash()
    credit = txn.credit_account_id or d.resolve(
        txn.from_account_name or "Asset Account", AccountGroup.ASSETS, txn.category or "Stocks"
    )

    target = d.find(credit)
    if target is None or target.investment_details is None:
        return Posting(debit, credit, txn.amount, asset_link_id=credit)

    lot = apply_sell(
        target.investment_details,
        _num(txn.units),
        _num(txn.price),
        _num(txn.fees),
        txn.date or ctx.today,
        ctx.now,
        txn.note,
    )
    fund = d.linked_fund(target) if lot.realized_pnl != 0 else None
    return Posting(debit, credit, txn.amount, asset_link_id=credit, lot=lot, pnl_fund_id=fund)


def _asset_revaluation(txn: Transaction, ctx: PostingContext) -> Posting:
    d = ctx.directory
    asset_id = txn.asset_link_id or d.resolve(
        txn.to_account_name or "Asset", AccountGroup.ASSETS, txn.category or "Stocks"
    )
    target = d.find(asset_id)
    fund = d.linked_fund(target)

    # The side swap carries the sign; both legs post the magnitude
    is_gain = txn.amount >= 0
    debit, credit = (asset_id, fund) if is_gain else (fund, asset_id)

    lot = None
    if target is not None and target.investment_details is not None:
        lot = apply_revaluation(
            target.investment_details,
            txn.price,
            txn.date or ctx.today,
            ctx.now,
            txn.note,
        )
    return Posting(
        debit,
        credit,
        abs(txn.amount),
        asset_link_id=asset_id,
        lot=lot,
        unrealized_pnl=txn.amount,
    )


def _capital_injection(txn: Transaction, ctx: PostingContext) -> Posting:
    d = ctx.directory
    credit = txn.credit_account_id or d.default_equity_fund()
    debit = txn.debit_account_id or d.default_cash()
    return Posting(debit, credit, txn.amount, asset_link_id=debit)


def _internal_transfer(txn: Transaction, ctx: PostingContext) -> Posting:
    d = ctx.directory
    credit = txn.credit_account_id or d.resolve(
        txn.from_account_name or "Source Wallet", AccountGroup.ASSETS, "Cash"
    )
    debit = txn.debit_account_id or d.resolve(
        txn.to_account_name or "Target Wallet", AccountGroup.ASSETS, "Cash"
    )
    return Posting(debit, credit, txn.amount)


def _fund_allocation(txn: Transaction, ctx: PostingContext) -> Posting:
    d = ctx.directory
    credit = txn.credit_account_id or d.resolve(
        txn.from_account_name or "General Fund", AccountGroup.CAPITAL, "Equity Fund"
    )
    debit = txn.debit_account_id or d.resolve(
        txn.to_account_name or "Specific Fund", AccountGroup.CAPITAL, "Equity Fund"
    )
    return Posting(debit, credit, txn.amount)


def _borrowing(txn: Transaction, ctx: PostingContext) -> Posting:
    d = ctx.directory
    debit = txn.debit_account_id or d.default_cash()
    credit = txn.credit_account_id or d.resolve(
        txn.from_account_name or txn.note or "Lender", AccountGroup.CAPITAL, "Liability"
    )
    return Posting(debit, credit, txn.amount, asset_link_id=credit)


def _debt_repayment(txn: Transaction, ctx: PostingContext) -> Posting:
    d = ctx.directory
    debit = txn.debit_account_id or d.resolve(
        txn.to_account_name or txn.note or "Loan Account", AccountGroup.CAPITAL, "Liability"
    )
    credit = txn.credit_account_id or d.default_cash()
    return Posting(debit, credit, txn.amount, asset_link_id=debit)


def _lending(txn: Transaction, ctx: PostingContext) -> Posting:
    d = ctx.directory
    debit = txn.debit_account_id or d.resolve(
        txn.to_account_name or txn.note or "Debtor", AccountGroup.ASSETS, "Receivables"
    )
    credit = txn.credit_account_id or d.default_cash()
    return Posting(debit, credit, txn.amount, asset_link_id=debit)


POSTING_RULES: dict[TransactionType, Rule] = {
    TransactionType.DAILY_CASHFLOW: _daily_cashflow,
    TransactionType.CREDIT_SPENDING: _credit_spending,
    TransactionType.ASSET_BUY: _asset_buy,
    TransactionType.ASSET_SELL: _asset_sell,
    TransactionType.ASSET_REVALUATION: _asset_revaluation,
    TransactionType.INITIAL_BALANCE: _capital_injection,
    TransactionType.CAPITAL_INJECTION: _capital_injection,
    TransactionType.INTERNAL_TRANSFER: _internal_transfer,
    TransactionType.FUND_ALLOCATION: _fund_allocation,
    TransactionType.BORROWING: _borrowing,
    TransactionType.DEBT_REPAYMENT: _debt_repayment,
    TransactionType.LENDING: _lending,
    # Interest follows the cash-flow direction of its group
    TransactionType.INTEREST_LOG: _daily_cashflow,
}


def rule_for(transaction_type: TransactionType | str) -> Rule:
    """Return the posting rule of a type, falling back to daily cash flow."""
    try:
        kind = TransactionType(transaction_type)
    except ValueError:
        return _daily_cashflow
    return POSTING_RULES.get(kind, _daily_cashflow)


def post(txn: Transaction, ctx: PostingContext) -> Posting:
    """Resolve the posting of a single draft."""
    return rule_for(txn.type)(txn, ctx)
