"""End-to-end tests for the command line interface."""

import re

from famledger.cli.main import cli


def _invoke(cli_runner, temp_db, *args, input=None):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--user", "family-1", *args], input=input)


def _draft_ids(output):
    return re.findall(r"Created draft ([0-9a-f]{32})", output)


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "confirm" in result.output


def test_account_open_and_list(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "account", "open", "Vietcombank", "--group", "assets", "--category", "Bank")
    assert result.exit_code == 0
    assert "Opened account 'Vietcombank'" in result.output

    result = _invoke(cli_runner, temp_db, "account", "list")
    assert result.exit_code == 0
    assert "Vietcombank" in result.output
    assert "Net worth:" in result.output


def test_account_open_duplicate(cli_runner, temp_db):
    _invoke(cli_runner, temp_db, "account", "open", "Bank", "--group", "ASSETS", "--category", "Bank")
    result = _invoke(cli_runner, temp_db, "account", "open", "bank", "--group", "ASSETS", "--category", "Bank")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_account_list_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "account", "list")
    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_draft_confirm_view_workflow(cli_runner, temp_db):
    result = _invoke(
        cli_runner, temp_db, "add", "--type", "CAPITAL_INJECTION", "--group", "CAPITAL", "--amount", "1m"
    )
    assert result.exit_code == 0
    result = _invoke(
        cli_runner, temp_db, "add", "--group", "EXPENSES", "--amount", "200k", "--note", "Groceries", "--date", "2024-05-02"
    )
    assert result.exit_code == 0
    assert "Amount: 200,000" in result.output

    result = _invoke(cli_runner, temp_db, "drafts")
    assert "2 pending draft(s)" in result.output

    result = _invoke(cli_runner, temp_db, "confirm", "--all")
    assert result.exit_code == 0
    assert "Confirmed 2 transaction(s)" in result.output
    assert "Created account 'Cash Wallet'" in result.output
    assert "Largest expense: 200,000 (Groceries)" in result.output

    result = _invoke(cli_runner, temp_db, "account", "list")
    assert "Total assets: 800,000" in result.output
    assert "Total equity: 800,000" in result.output

    result = _invoke(cli_runner, temp_db, "view", "--start-date", "2024-05-01", "--end-date", "2024-05-31")
    assert result.exit_code == 0
    assert "Found 1 transaction(s)" in result.output
    assert "Spending Fund <- Cash Wallet" in result.output

    result = _invoke(cli_runner, temp_db, "drafts")
    assert "No pending drafts" in result.output


def test_confirm_selected_ids(cli_runner, temp_db):
    first = _draft_ids(_invoke(cli_runner, temp_db, "add", "--group", "INCOME", "--amount", "100").output)
    _invoke(cli_runner, temp_db, "add", "--group", "INCOME", "--amount", "50")

    result = _invoke(cli_runner, temp_db, "confirm", *first)

    assert result.exit_code == 0
    assert "Confirmed 1 transaction(s)" in result.output
    assert "1 pending draft(s)" in _invoke(cli_runner, temp_db, "drafts").output


def test_confirm_requires_selection(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "confirm")
    assert result.exit_code == 1


def test_confirm_unknown_id(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "confirm", "deadbeef")
    assert result.exit_code == 1
    assert "No pending draft" in result.output


def test_add_invalid_amount(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "add", "--group", "EXPENSES", "--amount", "lots")
    assert result.exit_code == 1
    assert "Invalid amount" in result.output


def test_add_unknown_account(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "add", "--group", "EXPENSES", "--amount", "5", "--credit", "Nowhere")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_discard(cli_runner, temp_db):
    ids = _draft_ids(_invoke(cli_runner, temp_db, "add", "--group", "EXPENSES", "--amount", "5").output)

    result = _invoke(cli_runner, temp_db, "discard", ids[0], input="y\n")

    assert result.exit_code == 0
    assert "Discarded draft" in result.output
    assert "No pending drafts" in _invoke(cli_runner, temp_db, "drafts").output


def test_usage_limit(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "usage", "--limit", "1")
    assert result.exit_code == 0
    assert "0 / 1 transactions" in result.output

    _invoke(cli_runner, temp_db, "add", "--group", "EXPENSES", "--amount", "5")
    _invoke(cli_runner, temp_db, "confirm", "--all")
    result = _invoke(cli_runner, temp_db, "add", "--group", "EXPENSES", "--amount", "5")
    assert result.exit_code == 1
    assert "limit" in result.output


def test_portfolio_and_account_show(cli_runner, temp_db):
    _invoke(
        cli_runner, temp_db,
        "add", "--type", "ASSET_BUY", "--group", "ASSETS", "--amount", "1005000",
        "--units", "10", "--price", "100k", "--fees", "5000", "--to", "VNM",
    )
    _invoke(cli_runner, temp_db, "confirm", "--all")

    result = _invoke(cli_runner, temp_db, "portfolio")
    assert result.exit_code == 0
    assert "VNM" in result.output
    assert "1,005,000" in result.output

    result = _invoke(cli_runner, temp_db, "account", "show", "vnm")
    assert result.exit_code == 0
    assert "Average price:  100,500" in result.output
    assert "BUY" in result.output


def test_users_are_isolated(cli_runner, temp_db):
    _invoke(cli_runner, temp_db, "account", "open", "Bank", "--group", "ASSETS", "--category", "Bank")
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--user", "other", "account", "list"])
    assert "No accounts found" in result.output
