"""CLI error handling helpers."""

from decimal import Decimal
from typing import Optional

import click

from famledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def format_amount(amount: Optional[Decimal]) -> str:
    """Format a money amount with thousands separators."""
    if amount is None:
        return "-"
    if amount == amount.to_integral_value():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"
