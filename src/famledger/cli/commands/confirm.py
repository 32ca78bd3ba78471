"""Confirm drafts into the ledger."""

import click
from famledger.cli.error_handling import format_amount, handle_domain_error
from famledger.domain.entities import ReactionContext, Transaction
from famledger.domain.errors import DomainError
from famledger.domain.ledger import LedgerService
from famledger.domain.transaction import TransactionService


def echo_reaction(transaction: Transaction, context: ReactionContext) -> None:
    """Print a short remark on the largest expense of a confirmed batch."""
    note = f" ({transaction.note})" if transaction.note else ""
    click.echo(
        f"Largest expense: {format_amount(transaction.amount)}{note}. "
        f"Net worth before this batch: {format_amount(context.net_worth)}"
    )


@click.command("confirm")
@click.argument("transaction_ids", nargs=-1)
@click.option("--all", "confirm_all", is_flag=True, help="Confirm every pending draft")
@click.option("--by", "added_by", help="Name recorded as the author of the entries")
@click.pass_context
def confirm_drafts(ctx, transaction_ids: tuple[str, ...], confirm_all: bool, added_by: str | None):
    """Confirm pending drafts as one atomic batch.

    Drafts are posted in creation order. Either every selected draft is
    confirmed or none is.

    Examples:
        famledger confirm 3f2b9c... a81d04...
        famledger confirm --all
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]

    if not transaction_ids and not confirm_all:
        click.echo("Error: Pass draft IDs or --all", err=True)
        ctx.exit(1)

    drafts = TransactionService(db, user_id).list_drafts()
    selected = [t.id for t in drafts] if confirm_all else list(transaction_ids)

    pending_ids = {t.id for t in drafts}
    unknown = [i for i in selected if i not in pending_ids]
    if unknown:
        click.echo(f"Error: No pending draft with ID {unknown[0]}", err=True)
        ctx.exit(1)

    service = LedgerService(db, user_id, reaction=echo_reaction)
    try:
        result = service.confirm(drafts, selected, added_by=added_by)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not result.transactions:
        click.echo("Nothing to confirm.")
        return

    click.echo(f"Confirmed {len(result.transactions)} transaction(s)")
    for acc in result.created_accounts:
        click.echo(f"  Created account '{acc.name}' ({acc.group.value} / {acc.category})")


def register_commands(cli: click.Group) -> None:
    """Register confirm command with main CLI."""
    cli.add_command(confirm_drafts)
