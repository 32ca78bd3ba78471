"""Account domain service."""

from datetime import datetime, UTC
from typing import Iterable, Optional

from famledger.config import CAPITAL_COLOR_CODE, DEFAULT_FUND_CATEGORY
from famledger.database.base import Database
from famledger.domain.directory import new_account_id
from famledger.domain.entities import (
    Account as AccountEntity,
    AccountGroup,
    AccountStatus,
    BalanceSheet,
)
from famledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    duplicate_account_name,
)


def summarize_balances(accounts: Iterable[AccountEntity]) -> BalanceSheet:
    """Total up a set of accounts.

    Debt is every capital account that is not an equity fund; equity funds
    count towards total equity instead.
    """
    sheet = BalanceSheet()
    for acc in accounts:
        sheet.accounts.append(acc)
        if acc.group == AccountGroup.ASSETS:
            sheet.total_assets += acc.current_balance
        elif acc.category == DEFAULT_FUND_CATEGORY:
            sheet.total_equity += acc.current_balance
        else:
            sheet.total_debt += acc.current_balance
    return sheet


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database, user_id: str):
        """Initialize account service.

        Args:
            db: Database instance
            user_id: Owner of the accounts
        """
        self.db = db
        self.user_id = user_id

    def open_account(
        self,
        name: str,
        group: AccountGroup | str,
        category: str,
        linked_fund_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> str:
        """Open a new account with a zero balance.

        Balances are only ever changed by confirming transactions; to start
        an account with money in it, confirm an INITIAL_BALANCE entry.

        Args:
            name: Account name
            group: ASSETS or CAPITAL
            category: Free-form category (Cash, Stocks, Equity Fund, ...)
            linked_fund_id: Optional equity fund that receives the account's P&L
            description: Optional description

        Returns:
            Account ID

        Raises:
            ValidationError: If group is unknown or the name is empty
            ConflictError: If the name already exists in the group
            NotFoundError: If the linked fund does not exist
        """
        try:
            group = AccountGroup(group)
        except ValueError:
            raise ValidationError(f"Unknown account group '{group}'")
        if not name or not name.strip():
            raise ValidationError("Account name cannot be empty")
        name = name.strip()

        # Check if account with same name exists in the group
        accounts = self.db.list_accounts(self.user_id)
        for acc in accounts:
            if acc.group == group and acc.name.lower() == name.lower():
                raise ConflictError(duplicate_account_name(name, group.value))

        if linked_fund_id is not None:
            fund = self.db.get_account(self.user_id, linked_fund_id)
            if fund is None or fund.group != AccountGroup.CAPITAL:
                raise NotFoundError(f"Equity fund {linked_fund_id} not found")

        now = datetime.now(UTC)
        account = AccountEntity(
            id=new_account_id(),
            name=name,
            group=group,
            category=category,
            status=AccountStatus.ACTIVE,
            created_at=now,
            updated_at=now,
            color_code=CAPITAL_COLOR_CODE if group == AccountGroup.CAPITAL else None,
            description=description,
            linked_fund_id=linked_fund_id,
        )
        self.db.create_account(self.user_id, account)
        return account.id

    def get_account(self, account_id: str) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(self.user_id, account_id)

    def require_account(self, account_id: str) -> AccountEntity:
        account = self.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, group: Optional[AccountGroup] = None) -> list[AccountEntity]:
        """List accounts, optionally restricted to one group."""
        accounts = self.db.list_accounts(self.user_id)
        if group is not None:
            accounts = [acc for acc in accounts if acc.group == group]
        return accounts

    def balance_sheet(self) -> BalanceSheet:
        return summarize_balances(self.list_accounts())
