"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the database schema changes.
"""

from decimal import Decimal

from famledger.domain import entities as domain
from famledger.database.models import (
    Account as ORMAccount,
    InvestmentLog as ORMInvestmentLog,
    Transaction as ORMTransaction,
    User as ORMUser,
)
from famledger.config import DEFAULT_CURRENCY, DEFAULT_MONTHLY_LIMIT


def _decimal(value) -> Decimal:
    return Decimal(value) if value is not None else Decimal("0")


def _optional_decimal(value):
    return Decimal(value) if value is not None else None


def _value(member) -> str:
    return str(getattr(member, "value", member))


def _transaction_type(value: str) -> domain.TransactionType | str:
    try:
        return domain.TransactionType(value)
    except ValueError:
        return value


def investment_log_to_domain(orm_log: ORMInvestmentLog) -> domain.InvestmentLog:
    """Convert SQLAlchemy InvestmentLog model to domain InvestmentLog entity."""
    return domain.InvestmentLog(
        id=orm_log.id,
        date=orm_log.date,
        type=domain.LotEventType(orm_log.type),
        units=_decimal(orm_log.units),
        price=_decimal(orm_log.price),
        fees=_decimal(orm_log.fees),
        note=orm_log.note,
    )


def investment_details_to_domain(orm_account: ORMAccount):
    """Return the lot state of an account, or None when it has none."""
    if orm_account.symbol is None:
        return None
    return domain.InvestmentDetails(
        symbol=orm_account.symbol,
        total_units=_decimal(orm_account.total_units),
        avg_price=_decimal(orm_account.avg_price),
        market_price=_decimal(orm_account.market_price),
        last_sync=orm_account.last_sync,
        currency=orm_account.currency or DEFAULT_CURRENCY,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        group=domain.AccountGroup(orm_account.group),
        category=orm_account.category,
        current_balance=_decimal(orm_account.current_balance),
        status=domain.AccountStatus(orm_account.status),
        created_at=orm_account.created_at,
        updated_at=orm_account.updated_at,
        color_code=orm_account.color_code,
        description=orm_account.description,
        linked_fund_id=orm_account.linked_fund_id,
        realized_pnl=_decimal(orm_account.realized_pnl),
        unrealized_pnl=_decimal(orm_account.unrealized_pnl),
        investment_details=investment_details_to_domain(orm_account),
        investment_logs=tuple(investment_log_to_domain(log) for log in orm_account.investment_logs),
    )


def account_to_orm(user_id: str, account: domain.Account, seq: int) -> ORMAccount:
    """Build a new SQLAlchemy Account row from a domain Account entity."""
    orm_account = ORMAccount(
        id=account.id,
        user_id=user_id,
        seq=seq,
        name=account.name,
        group=account.group.value,
        category=account.category,
        current_balance=account.current_balance,
        status=account.status.value,
        created_at=account.created_at,
        updated_at=account.updated_at,
        color_code=account.color_code,
        description=account.description,
        linked_fund_id=account.linked_fund_id,
        realized_pnl=account.realized_pnl,
        unrealized_pnl=account.unrealized_pnl,
    )
    if account.investment_details is not None:
        apply_investment_details(orm_account, account.investment_details)
    return orm_account


def apply_investment_details(orm_account: ORMAccount, details: domain.InvestmentDetails) -> None:
    """Write lot state onto an Account row."""
    orm_account.symbol = details.symbol
    orm_account.total_units = details.total_units
    orm_account.avg_price = details.avg_price
    orm_account.market_price = details.market_price
    orm_account.last_sync = details.last_sync
    orm_account.currency = details.currency


def investment_log_to_orm(account_id: str, log: domain.InvestmentLog, seq: int) -> ORMInvestmentLog:
    return ORMInvestmentLog(
        id=log.id,
        account_id=account_id,
        seq=seq,
        date=log.date,
        type=log.type.value,
        units=log.units,
        price=log.price,
        fees=log.fees,
        note=log.note,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        amount=_decimal(orm_transaction.amount),
        type=_transaction_type(orm_transaction.type),
        group=domain.TransactionGroup(orm_transaction.group),
        status=domain.TransactionStatus(orm_transaction.status),
        note=orm_transaction.note,
        category=orm_transaction.category,
        date=orm_transaction.date,
        datetime=orm_transaction.datetime,
        debit_account_id=orm_transaction.debit_account_id,
        credit_account_id=orm_transaction.credit_account_id,
        asset_link_id=orm_transaction.asset_link_id,
        linked_fund_id=orm_transaction.linked_fund_id,
        units=_optional_decimal(orm_transaction.units),
        price=_optional_decimal(orm_transaction.price),
        fees=_optional_decimal(orm_transaction.fees),
        from_account_name=orm_transaction.from_account_name,
        to_account_name=orm_transaction.to_account_name,
        created_at=orm_transaction.created_at,
        added_by=orm_transaction.added_by,
    )


def apply_transaction(orm_transaction: ORMTransaction, transaction: domain.Transaction) -> None:
    """Copy every field of a domain Transaction onto a row."""
    orm_transaction.amount = transaction.amount
    orm_transaction.type = _value(transaction.type)
    orm_transaction.group = _value(transaction.group)
    orm_transaction.status = _value(transaction.status)
    orm_transaction.note = transaction.note
    orm_transaction.category = transaction.category
    orm_transaction.date = transaction.date
    orm_transaction.datetime = transaction.datetime
    orm_transaction.debit_account_id = transaction.debit_account_id
    orm_transaction.credit_account_id = transaction.credit_account_id
    orm_transaction.asset_link_id = transaction.asset_link_id
    orm_transaction.linked_fund_id = transaction.linked_fund_id
    orm_transaction.units = transaction.units
    orm_transaction.price = transaction.price
    orm_transaction.fees = transaction.fees
    orm_transaction.from_account_name = transaction.from_account_name
    orm_transaction.to_account_name = transaction.to_account_name
    if transaction.created_at is not None:
        orm_transaction.created_at = transaction.created_at
    orm_transaction.added_by = transaction.added_by


def usage_to_domain(orm_user: ORMUser) -> domain.UsageCounter:
    """Convert SQLAlchemy User model to domain UsageCounter entity."""
    limit = orm_user.monthly_transaction_limit
    return domain.UsageCounter(
        month=orm_user.transaction_usage_month or "",
        count=orm_user.transaction_usage_count or 0,
        limit=DEFAULT_MONTHLY_LIMIT if limit is None else limit,
    )
