"""Draft management commands."""

import click
from famledger.cli.error_handling import format_amount, handle_domain_error
from famledger.domain.account import AccountService
from famledger.domain.errors import DomainError
from famledger.domain.transaction import TransactionService


def describe_legs(txn, names: dict[str, str]) -> str:
    """Render the debit/credit side of an entry, falling back to account names."""
    debit = names.get(txn.debit_account_id) if txn.debit_account_id else txn.to_account_name
    credit = names.get(txn.credit_account_id) if txn.credit_account_id else txn.from_account_name
    return f"{debit or '(auto)'} <- {credit or '(auto)'}"


@click.command("drafts")
@click.pass_context
def list_drafts(ctx) -> None:
    """List pending drafts in the order they will be posted."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    drafts = TransactionService(db, user_id).list_drafts()

    if not drafts:
        click.echo("No pending drafts.")
        return

    names = {acc.id: acc.name for acc in AccountService(db, user_id).list_accounts()}
    click.echo(f"\n{len(drafts)} pending draft(s):")
    click.echo("-" * 110)
    for txn in drafts:
        txn_type = getattr(txn.type, "value", txn.type)
        click.echo(
            f"{txn.id} | {txn_type:18s} | {format_amount(txn.amount):>15s} | "
            f"{describe_legs(txn, names)} | {txn.note or ''}"
        )


@click.command("discard")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def discard_draft(ctx, transaction_id: str, yes: bool) -> None:
    """Discard a pending draft.

    Examples:
        famledger discard 3f2b9c...
    """
    service = TransactionService(ctx.obj["db"], ctx.obj["user_id"])

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to discard draft {transaction_id}?"):
        click.echo("Discard cancelled.")
        return

    try:
        service.discard_draft(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Discarded draft {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register draft commands with main CLI."""
    cli.add_command(list_drafts)
    cli.add_command(discard_draft)
