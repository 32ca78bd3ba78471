"""Tests for resolving account names to IDs."""

import pytest

from famledger.domain.entities import AccountGroup
from famledger.domain.errors import NotFoundError, ValidationError
from famledger.utils.account_resolver import resolve_account


def test_resolve_by_id(account_service):
    account_id = account_service.open_account("Bank", AccountGroup.ASSETS, "Bank")
    assert resolve_account(account_service, account_id) == account_id


def test_resolve_by_name_case_insensitive(account_service):
    account_id = account_service.open_account("Vietcombank", AccountGroup.ASSETS, "Bank")
    assert resolve_account(account_service, "vietcombank") == account_id


def test_ambiguous_name_needs_group(account_service):
    account_service.open_account("Mom", AccountGroup.ASSETS, "Receivables")
    capital_id = account_service.open_account("Mom", AccountGroup.CAPITAL, "Liability")

    with pytest.raises(ValidationError):
        resolve_account(account_service, "Mom")
    assert resolve_account(account_service, "Mom", AccountGroup.CAPITAL) == capital_id


def test_unknown_account(account_service):
    with pytest.raises(NotFoundError):
        resolve_account(account_service, "Nowhere")
