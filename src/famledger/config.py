"""Engine-wide constants and environment configuration."""

import os
from decimal import Decimal
from pathlib import Path
from typing import Optional

# Environment variables
DB_PATH_ENV = "FAMLEDGER_DB_PATH"
USER_ENV = "FAMLEDGER_USER"
LOG_LEVEL_ENV = "FAMLEDGER_LOG_LEVEL"

DEFAULT_USER_ID = "default"
DEFAULT_LOG_LEVEL = "WARNING"

# Backends reject very large multi-document writes
MAX_BATCH_SIZE = 150

# Monthly transaction quota; -1 disables the limit
DEFAULT_MONTHLY_LIMIT = 300
UNLIMITED = -1

# Default accounts created on first use per user
DEFAULT_CASH_NAME = "Cash Wallet"
DEFAULT_CASH_CATEGORY = "Cash"
DEFAULT_FUND_NAME = "Spending Fund"
DEFAULT_FUND_CATEGORY = "Equity Fund"
DEFAULT_CREDIT_CARD_NAME = "Default Credit Card"
CAPITAL_COLOR_CODE = "#4F46E5"

DEFAULT_CURRENCY = "VND"
DEFAULT_TRANSACTION_CATEGORY = "Other"

INVESTMENT_CATEGORIES = ("Stocks", "Crypto", "Gold", "Real Estate")

ZERO = Decimal("0")


def default_database_path() -> str:
    """Return the database path from FAMLEDGER_DB_PATH or ~/.famledger/famledger.db."""
    database_path: Optional[str] = os.environ.get(DB_PATH_ENV)
    if database_path is None:
        db_dir = Path.home() / ".famledger"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "famledger.db")
    return database_path
