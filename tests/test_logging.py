"""Tests for structured logging."""

import io
import json
from decimal import Decimal

import pytest

from famledger.domain.entities import AccountGroup
from famledger.logging_config import configure_logging, get_logger, reset_logging


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    configure_logging("INFO", stream)
    yield stream
    reset_logging()


def _records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_records_are_json_with_extras(log_stream):
    get_logger("test").info("hello", extra={"amount": Decimal("1.5"), "group": AccountGroup.CAPITAL})

    record = _records(log_stream)[0]
    assert record["logger"] == "famledger.test"
    assert record["level"] == "INFO"
    assert record["message"] == "hello"
    assert record["amount"] == "1.5"
    assert record["group"] == "CAPITAL"


def test_level_filters(log_stream):
    configure_logging("WARNING", log_stream)
    get_logger("test").info("dropped")
    get_logger("test").warning("kept")

    assert [r["message"] for r in _records(log_stream)] == ["kept"]


def test_exception_info(log_stream):
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        get_logger("test").exception("failed")

    record = _records(log_stream)[0]
    assert record["exc_type"] == "RuntimeError"
    assert record["exc_message"] == "boom"


def test_confirmation_logs_batch(log_stream, transaction_service, confirm_all):
    transaction_service.create_draft(amount=Decimal("5"), type="DAILY_CASHFLOW", group="EXPENSES")
    confirm_all()

    messages = [r["message"] for r in _records(log_stream)]
    assert messages.count("account_synthesized") == 2
    assert "ledger_batch_committed" in messages
