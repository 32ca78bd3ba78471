"""Shared pytest fixtures for famledger tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from famledger.database.factories import create_sqlite_database
from famledger.domain.account import AccountService
from famledger.domain.entities import TransactionGroup, TransactionType
from famledger.domain.ledger import LedgerService
from famledger.domain.transaction import TransactionService
from famledger.domain.usage import UsageService
from famledger.logging_config import reset_logging

USER_ID = "family-1"


@pytest.fixture(autouse=True)
def clean_logging():
    """Drop any log handler a test or CLI invocation installed."""
    yield
    reset_logging()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_id():
    return USER_ID


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db, USER_ID)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db, USER_ID)


@pytest.fixture
def usage_service(temp_db):
    """Create a UsageService with a temporary database."""
    return UsageService(temp_db, USER_ID)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db, USER_ID)


@pytest.fixture
def confirm_all(transaction_service, ledger_service):
    """Confirm every pending draft and return the ConfirmationResult."""

    def _confirm(service=None):
        drafts = transaction_service.list_drafts()
        return (service or ledger_service).confirm(drafts, [t.id for t in drafts])

    return _confirm


@pytest.fixture
def funded_ledger(transaction_service, confirm_all):
    """Ledger with 1,000,000 injected into the default cash wallet and fund."""
    transaction_service.create_draft(
        amount=Decimal("1000000"),
        type=TransactionType.CAPITAL_INJECTION,
        group=TransactionGroup.CAPITAL,
        note="Opening balance",
    )
    confirm_all()


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
