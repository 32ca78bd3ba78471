"""In-batch account directory.

Resolves account lookups against a point-in-time snapshot and synthesizes
missing accounts. Accounts created here are visible to later lookups in the
same batch, and are only persisted when the batch commits.
"""

from datetime import datetime
from typing import Iterable, Optional
from uuid import uuid4

from famledger.config import (
    CAPITAL_COLOR_CODE,
    DEFAULT_CASH_CATEGORY,
    DEFAULT_CASH_NAME,
    DEFAULT_FUND_CATEGORY,
    DEFAULT_FUND_NAME,
)
from famledger.domain.entities import Account, AccountGroup, AccountStatus
from famledger.logging_config import get_logger

logger = get_logger("domain.directory")


def new_account_id() -> str:
    """Return a fresh opaque account identifier."""
    return uuid4().hex


class AccountDirectory:
    """Working snapshot of a user's accounts for one confirmation batch."""

    def __init__(self, snapshot: Iterable[Account], now: datetime):
        """Initialize directory.

        Args:
            snapshot: Accounts as read before the batch started
            now: Timestamp stamped on accounts created in this batch
        """
        self.now = now
        self._accounts: list[Account] = list(snapshot)
        self._created: list[Account] = []
        self._default_cash_id: Optional[str] = None
        self._default_fund_id: Optional[str] = None

    @property
    def accounts(self) -> list[Account]:
        """Current working view, snapshot order followed by creations."""
        return list(self._accounts)

    @property
    def created(self) -> list[Account]:
        """Accounts synthesized during this batch, as first created.

        Balances, P&L and lot state reach the store as batch increments, so
        in-batch changes to these accounts are not reflected here.
        """
        return list(self._created)

    def find(self, account_id: Optional[str]) -> Optional[Account]:
        if not account_id:
            return None
        for acc in self._accounts:
            if acc.id == account_id:
                return acc
        return None

    def update(self, account: Account) -> None:
        """Replace the working copy of an account."""
        for i, acc in enumerate(self._accounts):
            if acc.id == account.id:
                self._accounts[i] = account
                return
        raise KeyError(account.id)

    def resolve(self, name: str, group: AccountGroup, category: str) -> str:
        """Return the id of the account named ``name`` in ``group``.

        Matching is case-insensitive on the name. When nothing matches, a new
        account with the given category is created.
        """
        wanted = name.lower()
        for acc in self._accounts:
            if acc.group == group and acc.name.lower() == wanted:
                return acc.id
        return self._create(name, group, category)

    def resolve_default(self, name: str, group: AccountGroup, category: str) -> str:
        """Return a default account, preferring ``name`` but accepting any in ``category``."""
        wanted = name.lower()
        for acc in self._accounts:
            if acc.group == group and acc.category == category and acc.name.lower() == wanted:
                return acc.id
        for acc in self._accounts:
            if acc.group == group and acc.category == category:
                return acc.id
        color_code = CAPITAL_COLOR_CODE if group == AccountGroup.CAPITAL else None
        return self._create(name, group, category, color_code=color_code)

    def first_in_category(self, category: str) -> Optional[str]:
        for acc in self._accounts:
            if acc.category == category:
                return acc.id
        return None

    def default_cash(self) -> str:
        """Default cash wallet, created on first use."""
        if self._default_cash_id is None:
            self._default_cash_id = self.resolve_default(
                DEFAULT_CASH_NAME, AccountGroup.ASSETS, DEFAULT_CASH_CATEGORY
            )
        return self._default_cash_id

    def default_equity_fund(self) -> str:
        """Default spending fund, created on first use."""
        if self._default_fund_id is None:
            self._default_fund_id = self.resolve_default(
                DEFAULT_FUND_NAME, AccountGroup.CAPITAL, DEFAULT_FUND_CATEGORY
            )
        return self._default_fund_id

    def linked_fund(self, account: Optional[Account]) -> str:
        """Fund an asset's P&L lands in; falls back to the default fund."""
        if account is not None and self.find(account.linked_fund_id) is not None:
            return account.linked_fund_id
        return self.default_equity_fund()

    def _create(
        self,
        name: str,
        group: AccountGroup,
        category: str,
        color_code: Optional[str] = None,
    ) -> str:
        account = Account(
            id=new_account_id(),
            name=name,
            group=group,
            category=category,
            status=AccountStatus.ACTIVE,
            created_at=self.now,
            updated_at=self.now,
            color_code=color_code,
        )
        self._accounts.append(account)
        self._created.append(account)
        logger.info(
            "account_synthesized",
            extra={"account_id": account.id, "account_name": name, "group": group, "category": category},
        )
        return account.id

