"""Utility for resolving account names to IDs."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from budgetit.domain.account import AccountService


def resolve_account(account_service: AccountService, plan_id: int, account: str | int) -> int:
    """Resolve account name or ID to account ID within a plan.

    Args:
        account_service: AccountService instance
        plan_id: Plan the account must belong to
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        ValueError: If account is not found in the plan
    """
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None:
        account_obj = account_service.get_account(account_id)
        if account_obj is None or account_obj.plan_id != plan_id:
            raise ValueError(f"Account ID {account_id} not found")
        return account_id

    wanted = str(account).strip().lower()
    for acc in account_service.list_accounts(plan_id):
        if acc.name.lower() == wanted:
            return acc.id

    raise ValueError(f"Account '{account}' not found")
