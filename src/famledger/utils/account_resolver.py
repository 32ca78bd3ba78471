"""Utility for resolving account names to IDs."""

from typing import Optional

from famledger.domain.account import AccountService
from famledger.domain.entities import AccountGroup
from famledger.domain.errors import NotFoundError, ValidationError


def resolve_account(
    account_service: AccountService, account: str, group: Optional[AccountGroup] = None
) -> str:
    """Resolve account name or ID to account ID.

    Args:
        account_service: AccountService instance
        account: Account ID or name (names match case-insensitively)
        group: Optional group restricting name matches

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
        ValidationError: If the name matches accounts in both groups
    """
    if account_service.get_account(account) is not None:
        return account

    wanted = account.strip().lower()
    matches = [
        acc
        for acc in account_service.list_accounts(group)
        if acc.name.lower() == wanted
    ]
    if not matches:
        raise NotFoundError(f"Account '{account}' not found")
    if len(matches) > 1:
        raise ValidationError(
            f"Account name '{account}' is ambiguous; pass an account ID or a group"
        )
    return matches[0].id
