"""Ledger viewing commands."""

import click
from famledger.cli.account_resolution import resolve_optional_account
from famledger.cli.commands.transaction import describe_legs
from famledger.cli.error_handling import format_amount
from famledger.domain.account import AccountService
from famledger.domain.transaction import TransactionService
from famledger.utils.date_parser import parse_date


@click.command("view")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@click.option("--account", help="Account name or ID (matches either leg)")
@click.option("--verbose", "-v", is_flag=True, help="Show every field of each entry")
@click.pass_context
def view_transactions(ctx, start_date: str, end_date: str, account: str, verbose: bool):
    """View confirmed ledger entries with optional filters."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = TransactionService(db, user_id)
    account_service = AccountService(db, user_id)

    # Parse dates
    start = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    end = None
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    account_id = resolve_optional_account(ctx, account_service, account)

    transactions = service.list_transactions(start_date=start, end_date=end, account_id=account_id)
    if not transactions:
        click.echo("No transactions found.")
        return

    names = {acc.id: acc.name for acc in account_service.list_accounts()}

    if verbose:
        click.echo(f"\nFound {len(transactions)} transaction(s):")
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.date}")
            click.echo(f"  Type: {getattr(txn.type, 'value', txn.type)} ({txn.group.value})")
            click.echo(f"  Amount: {format_amount(txn.amount)}")
            click.echo(f"  Debit: {names.get(txn.debit_account_id, txn.debit_account_id)}")
            click.echo(f"  Credit: {names.get(txn.credit_account_id, txn.credit_account_id)}")
            click.echo(f"  Category: {txn.category}")
            if txn.asset_link_id:
                click.echo(f"  Asset: {names.get(txn.asset_link_id, txn.asset_link_id)}")
            if txn.units is not None:
                click.echo(
                    f"  Units: {txn.units.normalize():f} @ {format_amount(txn.price)}"
                    f" (fees {format_amount(txn.fees)})"
                )
            if txn.note:
                click.echo(f"  Note: {txn.note}")
            if txn.added_by:
                click.echo(f"  Added by: {txn.added_by}")
            click.echo(f"  Confirmed: {txn.created_at}")
            click.echo("-" * 100)
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(f"{'Date':<12} {'Category':<16} {'Amount':>15}  Debit <- Credit")
    click.echo("-" * 100)
    for txn in transactions:
        click.echo(
            f"{str(txn.date):<12} {(txn.category or '')[:16]:<16} "
            f"{format_amount(txn.amount):>15}  {describe_legs(txn, names)}"
        )


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_transactions)
