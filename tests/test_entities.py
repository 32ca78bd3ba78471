"""Tests for domain entities."""

from datetime import date
from decimal import Decimal

import pytest

from famledger.config import UNLIMITED
from famledger.domain.entities import (
    Account,
    AccountGroup,
    BalanceSheet,
    ConfirmationResult,
    Transaction,
    TransactionGroup,
    TransactionStatus,
    TransactionType,
    UsageCounter,
)


class TestUsageCounter:
    """Tests for the monthly usage counter."""

    def test_effective_count_same_month(self):
        counter = UsageCounter(month="2024-05", count=7, limit=300)
        assert counter.effective_count("2024-05") == 7

    def test_effective_count_resets_on_new_month(self):
        """A counter from an older month reads as zero."""
        counter = UsageCounter(month="2024-04", count=299, limit=300)
        assert counter.effective_count("2024-05") == 0
        assert not counter.is_limit_reached("2024-05")

    def test_limit_reached(self):
        counter = UsageCounter(month="2024-05", count=300, limit=300)
        assert counter.is_limit_reached("2024-05")

    def test_unlimited_never_reached(self):
        counter = UsageCounter(month="2024-05", count=10_000, limit=UNLIMITED)
        assert not counter.is_limit_reached("2024-05")


class TestEntities:
    def test_transaction_defaults_to_pending(self):
        txn = Transaction(
            id="t1",
            amount=Decimal("100"),
            type=TransactionType.DAILY_CASHFLOW,
            group=TransactionGroup.EXPENSES,
        )
        assert txn.status == TransactionStatus.PENDING
        assert txn.date is None

    def test_entities_are_frozen(self):
        account = Account(id="a1", name="Cash", group=AccountGroup.ASSETS, category="Cash")
        with pytest.raises(AttributeError):
            account.current_balance = Decimal("5")

    def test_string_enums_compare_to_values(self):
        assert TransactionType("ASSET_BUY") is TransactionType.ASSET_BUY
        assert AccountGroup.CAPITAL == "CAPITAL"

    def test_confirmed_ids(self):
        txns = [
            Transaction(id=i, amount=Decimal("1"), type="X", group=TransactionGroup.INCOME, date=date(2024, 1, 1))
            for i in ("a", "b")
        ]
        result = ConfirmationResult(transactions=txns, created_accounts=[], balance_deltas={})
        assert result.confirmed_ids == ["a", "b"]

    def test_balance_sheet_net_worth(self):
        sheet = BalanceSheet(total_assets=Decimal("900"), total_debt=Decimal("300"))
        assert sheet.net_worth == Decimal("600")
