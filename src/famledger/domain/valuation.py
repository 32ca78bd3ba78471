"""Weighted-average-cost lot accounting for investment accounts.

Average cost only moves on buys. Sells realize P&L against the current
average, revaluations move the market price. Every operation returns new
``InvestmentDetails`` plus the lot log entry to append; nothing is mutated.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional
from uuid import uuid4

from famledger.config import INVESTMENT_CATEGORIES, ZERO
from famledger.domain.entities import (
    Account,
    InvestmentDetails,
    InvestmentLog,
    LotEventType,
)


@dataclass(frozen=True)
class LotUpdate:
    """New lot state of an account and the log entry recording it."""

    details: InvestmentDetails
    log: InvestmentLog
    realized_pnl: Decimal = ZERO


@dataclass(frozen=True)
class Performance:
    cost_basis: Decimal
    market_value: Decimal
    unrealized_pnl: Decimal
    roi: Decimal
    realized_pnl: Decimal = ZERO

    @property
    def is_profit(self) -> bool:
        return self.unrealized_pnl >= 0


def calculate_new_wac(
    units_held: Decimal,
    avg_price: Decimal,
    units: Decimal,
    price: Decimal,
    fees: Decimal = ZERO,
) -> Decimal:
    """Return the average cost after buying ``units`` at ``price``.

    Fees are capitalized into the cost basis.
    """
    total_units = units_held + units
    if total_units <= 0:
        return ZERO
    return (units_held * avg_price + units * price + fees) / total_units


def calculate_realized_pnl(
    units: Decimal, sell_price: Decimal, avg_price: Decimal, fees: Decimal = ZERO
) -> Decimal:
    """Return profit of selling ``units`` at ``sell_price`` net of fees."""
    return units * (sell_price - avg_price) - fees


def _log(
    kind: LotEventType,
    on: date,
    units: Decimal,
    price: Decimal,
    fees: Decimal = ZERO,
    note: Optional[str] = None,
) -> InvestmentLog:
    return InvestmentLog(
        id=uuid4().hex, date=on, type=kind, units=units, price=price, fees=fees, note=note
    )


def apply_buy(
    details: InvestmentDetails,
    units: Decimal,
    price: Decimal,
    fees: Decimal,
    on: date,
    now: datetime,
    note: Optional[str] = None,
) -> LotUpdate:
    """Add a purchased lot to a position."""
    new_details = replace(
        details,
        total_units=details.total_units + units,
        avg_price=calculate_new_wac(details.total_units, details.avg_price, units, price, fees),
        market_price=price,
        last_sync=now,
    )
    return LotUpdate(new_details, _log(LotEventType.BUY, on, units, price, fees, note))


def apply_sell(
    details: InvestmentDetails,
    units: Decimal,
    price: Decimal,
    fees: Decimal,
    on: date,
    now: datetime,
    note: Optional[str] = None,
) -> LotUpdate:
    """Remove sold units from a position and realize P&L.

    Selling more units than held clamps the position at zero.
    """
    profit = calculate_realized_pnl(units, price, details.avg_price, fees)
    new_details = replace(
        details,
        total_units=max(ZERO, details.total_units - units),
        market_price=price,
        last_sync=now,
    )
    return LotUpdate(new_details, _log(LotEventType.SELL, on, units, price, fees, note), profit)


def apply_revaluation(
    details: InvestmentDetails,
    price: Optional[Decimal],
    on: date,
    now: datetime,
    note: Optional[str] = None,
) -> LotUpdate:
    """Mark a position to a new market price."""
    market_price = price if price else details.market_price
    new_details = replace(details, market_price=market_price, last_sync=now)
    return LotUpdate(
        new_details, _log(LotEventType.REVALUE, on, details.total_units, market_price, note=note)
    )


def replay_lot_event(details: InvestmentDetails, log: InvestmentLog, now: datetime) -> LotUpdate:
    """Re-apply a recorded lot event on top of ``details``."""
    if log.type == LotEventType.BUY:
        return apply_buy(details, log.units, log.price, log.fees, log.date, now, log.note)
    if log.type == LotEventType.SELL:
        return apply_sell(details, log.units, log.price, log.fees, log.date, now, log.note)
    return apply_revaluation(details, log.price, log.date, now, log.note)


def investment_performance(details: Optional[InvestmentDetails]) -> Optional[Performance]:
    """Return cost basis, market value and ROI of a position, or None when empty."""
    if details is None or details.total_units == 0:
        return None
    cost_basis = details.total_units * details.avg_price
    market_value = details.total_units * details.market_price
    unrealized = market_value - cost_basis
    roi = unrealized / cost_basis if cost_basis != 0 else ZERO
    return Performance(cost_basis, market_value, unrealized, roi)


def portfolio_performance(accounts: Iterable[Account]) -> Optional[Performance]:
    """Aggregate performance over investment accounts.

    Accounts without lot state contribute their balance as market value and
    the balance net of booked revaluations as cost.
    """
    investments = [acc for acc in accounts if acc.category in INVESTMENT_CATEGORIES]
    if not investments:
        return None

    cost_basis = ZERO
    market_value = ZERO
    realized = ZERO
    for acc in investments:
        details = acc.investment_details
        if details is not None and details.total_units > 0:
            cost_basis += details.total_units * details.avg_price
            market_value += details.total_units * details.market_price
        elif details is None:
            cost_basis += acc.current_balance - acc.unrealized_pnl
            market_value += acc.current_balance
        realized += acc.realized_pnl

    unrealized = market_value - cost_basis
    roi = unrealized / cost_basis if cost_basis != 0 else ZERO
    return Performance(cost_basis, market_value, unrealized, roi, realized)
