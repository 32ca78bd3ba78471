"""SQLAlchemy models for famledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

# Wide enough for unit counts with fractional shares and large VND amounts
MONEY = Numeric(24, 6)


class User(Base):
    """Per-user partition root, carrying the monthly usage counter."""

    __tablename__ = "users"

    id = Column(String, primary_key=True)
    transaction_usage_month = Column(String, nullable=False, default="")
    transaction_usage_count = Column(Integer, nullable=False, default=0)
    monthly_transaction_limit = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    accounts = relationship("Account", back_populates="user", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="user", cascade="all, delete-orphan")


class Account(Base):
    """Ledger account model."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    seq = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False)
    group = Column(String, nullable=False)
    category = Column(String, nullable=False)
    current_balance = Column(MONEY, nullable=False, default=0)
    status = Column(String, nullable=False, default="ACTIVE")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, nullable=True)
    color_code = Column(String, nullable=True)
    description = Column(String, nullable=True)
    linked_fund_id = Column(String, nullable=True)
    realized_pnl = Column(MONEY, nullable=False, default=0)
    unrealized_pnl = Column(MONEY, nullable=False, default=0)

    # Lot state; symbol is NULL for accounts without lot accounting
    symbol = Column(String, nullable=True)
    total_units = Column(MONEY, nullable=True)
    avg_price = Column(MONEY, nullable=True)
    market_price = Column(MONEY, nullable=True)
    last_sync = Column(DateTime, nullable=True)
    currency = Column(String, nullable=True)

    __table_args__ = (Index("ix_accounts_user_seq", "user_id", "seq"),)

    # Relationships
    user = relationship("User", back_populates="accounts")
    investment_logs = relationship(
        "InvestmentLog",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="InvestmentLog.seq",
    )


class InvestmentLog(Base):
    """Append-only lot event model."""

    __tablename__ = "investment_logs"

    id = Column(String, primary_key=True)
    account_id = Column(String, ForeignKey("accounts.id"), nullable=False)
    seq = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False)
    units = Column(MONEY, nullable=False)
    price = Column(MONEY, nullable=False)
    fees = Column(MONEY, nullable=False, default=0)
    note = Column(String, nullable=True)

    # Relationships
    account = relationship("Account", back_populates="investment_logs")


class Transaction(Base):
    """Ledger entry model; pending drafts and confirmed entries share the table."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    seq = Column(Integer, nullable=False, default=0)
    amount = Column(MONEY, nullable=False)
    type = Column(String, nullable=False)
    group = Column(String, nullable=False)
    status = Column(String, nullable=False, default="pending")
    note = Column(String, nullable=True)
    category = Column(String, nullable=True)
    date = Column(Date, nullable=True)
    datetime = Column(DateTime, nullable=True)
    debit_account_id = Column(String, nullable=True)
    credit_account_id = Column(String, nullable=True)
    asset_link_id = Column(String, nullable=True)
    linked_fund_id = Column(String, nullable=True)
    units = Column(MONEY, nullable=True)
    price = Column(MONEY, nullable=True)
    fees = Column(MONEY, nullable=True)
    from_account_name = Column(String, nullable=True)
    to_account_name = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    added_by = Column(String, nullable=True)

    __table_args__ = (Index("ix_transactions_user_status", "user_id", "status"),)

    # Relationships
    user = relationship("User", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
