"""Add draft command."""

import click
from famledger.domain.transaction import TransactionService
from famledger.domain.account import AccountService
from famledger.domain.entities import TransactionGroup, TransactionType
from famledger.domain.errors import DomainError
from famledger.cli.account_resolution import resolve_optional_account
from famledger.cli.error_handling import format_amount, handle_domain_error
from famledger.utils.date_parser import parse_date
from famledger.utils.amount_parser import parse_amount


def _parse_optional_amount(ctx, label: str, value: str | None):
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label} format: {e}", err=True)
        ctx.exit(1)


@click.command("add")
@click.option(
    "--type",
    "txn_type",
    default=TransactionType.DAILY_CASHFLOW.value,
    show_default=True,
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    help="Kind of money movement",
)
@click.option(
    "--group",
    required=True,
    type=click.Choice([g.value for g in TransactionGroup], case_sensitive=False),
    help="INCOME, EXPENSES, ASSETS or CAPITAL",
)
@click.option("--amount", required=True, help="Amount (e.g., 150000, 1.5m, 200k)")
@click.option("--note", help="Note")
@click.option("--category", help="Category label (defaults to 'Other' on confirmation)")
@click.option(
    "--date",
    "date_str",
    help="Booking date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--debit", help="Debit account name or ID")
@click.option("--credit", help="Credit account name or ID")
@click.option("--asset", help="Asset account name or ID (investment entries)")
@click.option("--units", help="Units bought or sold")
@click.option("--price", help="Unit price")
@click.option("--fees", help="Fees")
@click.option("--from", "from_name", help="Source account name, created on confirmation if missing")
@click.option("--to", "to_name", help="Target account name, created on confirmation if missing")
@click.pass_context
def add_draft(
    ctx,
    txn_type: str,
    group: str,
    amount: str,
    note: str | None,
    category: str | None,
    date_str: str | None,
    debit: str | None,
    credit: str | None,
    asset: str | None,
    units: str | None,
    price: str | None,
    fees: str | None,
    from_name: str | None,
    to_name: str | None,
):
    """Record a pending draft.

    Drafts do not touch any balance until they are confirmed.

    Examples:
        famledger add --group EXPENSES --amount 200k --note "Groceries"
        famledger add --type ASSET_BUY --group ASSETS --amount 1m --units 10 --price 100k --to VNM
        famledger add --type INTERNAL_TRANSFER --group ASSETS --amount 5m --from Cash --to Bank
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    transaction_service = TransactionService(db, user_id)
    account_service = AccountService(db, user_id)

    debit_id = resolve_optional_account(ctx, account_service, debit)
    credit_id = resolve_optional_account(ctx, account_service, credit)
    asset_id = resolve_optional_account(ctx, account_service, asset)

    txn_date = None
    if date_str is not None:
        try:
            txn_date = parse_date(date_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    txn_amount = _parse_optional_amount(ctx, "amount", amount)
    txn_units = _parse_optional_amount(ctx, "units", units)
    txn_price = _parse_optional_amount(ctx, "price", price)
    txn_fees = _parse_optional_amount(ctx, "fees", fees)

    try:
        transaction_id = transaction_service.create_draft(
            amount=txn_amount,
            type=txn_type.upper(),
            group=group.upper(),
            note=note,
            category=category,
            date=txn_date,
            debit_account_id=debit_id,
            credit_account_id=credit_id,
            asset_link_id=asset_id,
            units=txn_units,
            price=txn_price,
            fees=txn_fees,
            from_account_name=from_name,
            to_account_name=to_name,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created draft {transaction_id}")
    click.echo(f"  Type: {txn_type.upper()} ({group.upper()})")
    click.echo(f"  Amount: {format_amount(txn_amount)}")
    if txn_date:
        click.echo(f"  Date: {txn_date}")
    if note:
        click.echo(f"  Note: {note}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_draft)
