"""Investment portfolio summary."""

import click
from famledger.cli.error_handling import format_amount
from famledger.config import INVESTMENT_CATEGORIES
from famledger.domain.account import AccountService
from famledger.domain.valuation import investment_performance, portfolio_performance


@click.command("portfolio")
@click.pass_context
def show_portfolio(ctx):
    """Show cost basis, market value and ROI of investment accounts."""
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])
    accounts = service.list_accounts()

    total = portfolio_performance(accounts)
    if total is None:
        click.echo("No investment accounts found.")
        return

    click.echo(f"\n{'Account':<20} {'Cost':>16} {'Market':>16} {'ROI':>9}")
    click.echo("-" * 64)
    for acc in accounts:
        if acc.category not in INVESTMENT_CATEGORIES:
            continue
        performance = investment_performance(acc.investment_details)
        if performance is None:
            click.echo(f"{acc.name[:20]:<20} {format_amount(acc.current_balance):>16} {'-':>16} {'-':>9}")
            continue
        click.echo(
            f"{acc.name[:20]:<20} {format_amount(performance.cost_basis):>16} "
            f"{format_amount(performance.market_value):>16} {performance.roi * 100:>8.2f}%"
        )

    click.echo("-" * 64)
    click.echo(
        f"{'Total':<20} {format_amount(total.cost_basis):>16} "
        f"{format_amount(total.market_value):>16} {total.roi * 100:>8.2f}%"
    )
    click.echo(f"Unrealized P&L: {format_amount(total.unrealized_pnl)}")
    click.echo(f"Realized P&L:   {format_amount(total.realized_pnl)}")


def register_commands(cli):
    """Register portfolio command with main CLI."""
    cli.add_command(show_portfolio)
