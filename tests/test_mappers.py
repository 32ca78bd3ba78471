"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from famledger.database.models import (
    Account as ORMAccount,
    InvestmentLog as ORMInvestmentLog,
    Transaction as ORMTransaction,
    User as ORMUser,
)
from famledger.database.mappers import (
    account_to_domain,
    account_to_orm,
    apply_transaction,
    transaction_to_domain,
    usage_to_domain,
)
from famledger.domain.entities import (
    Account,
    AccountGroup,
    AccountStatus,
    InvestmentDetails,
    LotEventType,
    Transaction,
    TransactionGroup,
    TransactionStatus,
    TransactionType,
)


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain_without_lot(self):
        orm_account = ORMAccount(
            id="a1",
            user_id="u",
            name="Cash Wallet",
            group="ASSETS",
            category="Cash",
            current_balance=Decimal("12.5"),
            status="ACTIVE",
            realized_pnl=Decimal("0"),
            unrealized_pnl=Decimal("0"),
            created_at=datetime.now(UTC),
        )

        account = account_to_domain(orm_account)

        assert isinstance(account, Account)
        assert account.group == AccountGroup.ASSETS
        assert account.status == AccountStatus.ACTIVE
        assert account.current_balance == Decimal("12.5")
        assert account.investment_details is None
        assert account.investment_logs == ()

    def test_account_to_domain_with_lot(self):
        orm_account = ORMAccount(
            id="a2",
            user_id="u",
            name="VNM",
            group="ASSETS",
            category="Stocks",
            status="ACTIVE",
            symbol="VNM",
            total_units=Decimal("3"),
            avg_price=Decimal("10"),
            market_price=Decimal("12"),
            currency=None,
        )
        orm_account.investment_logs = [
            ORMInvestmentLog(id="l1", seq=1, date=date(2024, 1, 1), type="BUY", units=Decimal("3"), price=Decimal("10"), fees=None)
        ]

        account = account_to_domain(orm_account)

        assert account.investment_details.symbol == "VNM"
        assert account.investment_details.currency == "VND"
        assert account.current_balance == Decimal("0")
        assert account.investment_logs[0].type == LotEventType.BUY
        assert account.investment_logs[0].fees == Decimal("0")

    def test_account_to_orm(self):
        account = Account(
            id="a3",
            name="Gold",
            group=AccountGroup.ASSETS,
            category="Gold",
            investment_details=InvestmentDetails(symbol="SJC", total_units=Decimal("1")),
        )

        orm_account = account_to_orm("u", account, seq=4)

        assert orm_account.user_id == "u"
        assert orm_account.seq == 4
        assert orm_account.group == "ASSETS"
        assert orm_account.symbol == "SJC"
        assert orm_account.total_units == Decimal("1")


class TestTransactionMapper:
    def test_round_trip_keeps_unknown_type(self):
        txn = Transaction(
            id="t1",
            amount=Decimal("99"),
            type="LEGACY_TYPE",
            group=TransactionGroup.INCOME,
            status=TransactionStatus.CONFIRMED,
            units=Decimal("2"),
        )
        orm_transaction = ORMTransaction(id="t1", user_id="u")

        apply_transaction(orm_transaction, txn)
        result = transaction_to_domain(orm_transaction)

        assert orm_transaction.type == "LEGACY_TYPE"
        assert orm_transaction.status == "confirmed"
        assert result.type == "LEGACY_TYPE"
        assert result.status == TransactionStatus.CONFIRMED
        assert result.units == Decimal("2")
        assert result.price is None

    def test_known_type_maps_to_enum(self):
        orm_transaction = ORMTransaction(
            id="t2", user_id="u", amount=Decimal("1"), type="LENDING", group="ASSETS", status="pending"
        )
        assert transaction_to_domain(orm_transaction).type == TransactionType.LENDING

    def test_missing_created_at_is_not_written(self):
        orm_transaction = ORMTransaction(id="t3", user_id="u", created_at=datetime(2024, 1, 1))
        txn = Transaction(id="t3", amount=Decimal("1"), type=TransactionType.LENDING, group=TransactionGroup.ASSETS)

        apply_transaction(orm_transaction, txn)

        assert orm_transaction.created_at == datetime(2024, 1, 1)


def test_usage_to_domain_defaults():
    usage = usage_to_domain(ORMUser(id="u", transaction_usage_month=None, transaction_usage_count=None))
    assert usage.month == ""
    assert usage.count == 0
    assert usage.limit == 300
