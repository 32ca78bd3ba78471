"""Account management commands."""

import click
from famledger.cli.account_resolution import resolve_account_or_exit
from famledger.cli.error_handling import format_amount, handle_domain_error
from famledger.domain.account import AccountService
from famledger.domain.entities import AccountGroup
from famledger.domain.errors import DomainError
from famledger.domain.valuation import investment_performance

GROUP_CHOICE = click.Choice([g.value for g in AccountGroup], case_sensitive=False)


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("open")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--group", "group", type=GROUP_CHOICE, required=True, help="ASSETS or CAPITAL")
@click.option("--category", required=True, help="Category (Cash, Bank, Stocks, Equity Fund, ...)")
@click.option("--fund", help="Equity fund (name or ID) receiving this account's P&L")
@click.option("--description", help="Optional description")
@click.pass_context
def open_account(ctx, name: str, group: str, category: str, fund: str | None, description: str | None):
    """Open a new account with a zero balance.

    Examples:
        famledger account open "Vietcombank" --group ASSETS --category Bank
        famledger account open "Retirement" --group CAPITAL --category "Equity Fund"
        famledger account open "VNM" --group ASSETS --category Stocks --fund Retirement
    """
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])

    fund_id = None
    if fund is not None:
        fund_id = resolve_account_or_exit(ctx, service, fund, AccountGroup.CAPITAL)

    try:
        account_id = service.open_account(
            name=name,
            group=group.upper(),
            category=category,
            linked_fund_id=fund_id,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Opened account '{name}' (ID: {account_id})")


@account_group.command("list")
@click.option("--group", "group", type=GROUP_CHOICE, help="Only list accounts of this group")
@click.pass_context
def list_accounts(ctx, group: str | None):
    """List accounts with their balances."""
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])

    accounts = service.list_accounts(AccountGroup(group.upper()) if group else None)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 96)
    for acc in accounts:
        click.echo(
            f"{acc.id} | {acc.name[:20]:20s} | {acc.group.value:7s} | "
            f"{acc.category[:14]:14s} | {format_amount(acc.current_balance):>18s}"
        )

    if group is None:
        sheet = service.balance_sheet()
        click.echo("-" * 96)
        click.echo(f"Total assets: {format_amount(sheet.total_assets)}")
        click.echo(f"Total debt:   {format_amount(sheet.total_debt)}")
        click.echo(f"Total equity: {format_amount(sheet.total_equity)}")
        click.echo(f"Net worth:    {format_amount(sheet.net_worth)}")


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show an account with its lot state and lot history.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["db"], ctx.obj["user_id"])
    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.require_account(account_id)

    click.echo(f"\n{acc.name} ({acc.group.value} / {acc.category})")
    click.echo("-" * 60)
    click.echo(f"ID:             {acc.id}")
    click.echo(f"Status:         {acc.status.value}")
    click.echo(f"Balance:        {format_amount(acc.current_balance)}")
    if acc.description:
        click.echo(f"Description:    {acc.description}")
    if acc.linked_fund_id:
        fund = service.get_account(acc.linked_fund_id)
        click.echo(f"Linked fund:    {fund.name if fund else acc.linked_fund_id}")

    details = acc.investment_details
    if details is None:
        return

    click.echo(f"Symbol:         {details.symbol} ({details.currency})")
    click.echo(f"Units:          {details.total_units.normalize():f}")
    click.echo(f"Average price:  {format_amount(details.avg_price)}")
    click.echo(f"Market price:   {format_amount(details.market_price)}")
    click.echo(f"Realized P&L:   {format_amount(acc.realized_pnl)}")
    click.echo(f"Unrealized P&L: {format_amount(acc.unrealized_pnl)}")

    performance = investment_performance(details)
    if performance is not None:
        click.echo(f"ROI:            {performance.roi * 100:.2f}%")

    if acc.investment_logs:
        click.echo("\nLot history:")
        for log in acc.investment_logs:
            click.echo(
                f"{log.date} | {log.type.value:7s} | {log.units.normalize():f} units @ "
                f"{format_amount(log.price)} | fees {format_amount(log.fees)}"
            )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
