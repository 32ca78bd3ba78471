"""Monthly usage counter commands."""

from datetime import datetime, UTC

import click
from famledger.cli.error_handling import handle_domain_error
from famledger.config import UNLIMITED
from famledger.domain.errors import DomainError
from famledger.domain.usage import UsageService, month_key


@click.command("usage")
@click.option("--limit", type=int, help="Set the monthly limit (-1 for unlimited)")
@click.pass_context
def show_usage(ctx, limit: int | None):
    """Show or set the monthly confirmed-transaction counter."""
    service = UsageService(ctx.obj["db"], ctx.obj["user_id"])

    if limit is not None:
        try:
            service.set_limit(limit)
        except DomainError as e:
            handle_domain_error(ctx, e)
            return
        click.echo(f"Monthly limit set to {'unlimited' if limit == UNLIMITED else limit}")

    month = month_key(datetime.now(UTC))
    usage = service.get_usage()
    limit_str = "unlimited" if usage.limit == UNLIMITED else str(usage.limit)
    click.echo(f"{month}: {usage.effective_count(month)} / {limit_str} transactions")


def register_commands(cli):
    """Register usage command with main CLI."""
    cli.add_command(show_usage)
