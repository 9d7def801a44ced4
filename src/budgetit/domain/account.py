"""Account domain service."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from budgetit.domain.entities import Account as AccountEntity, AccountSummary, AccountType
from budgetit.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
    account_not_in_plan,
    plan_not_found,
)

if TYPE_CHECKING:
    from budgetit.database.base import Database


class AccountService:
    """Service for managing accounts.

    Balances are never edited here after creation; they move only through
    ``AccountLedger`` in response to transactions.
    """

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        plan_id: int,
        name: str,
        account_type: AccountType,
        opening_balance: Decimal = Decimal("0"),
        on_budget: bool = True,
    ) -> int:
        """Create a new account.

        For liability types the opening balance is the amount owed, entered as
        a positive number; it is stored as a negative signed balance.

        Args:
            plan_id: Owning plan
            name: Account name (unique within the plan)
            account_type: Account type
            opening_balance: Starting balance (or debt for liabilities)
            on_budget: Whether the balance counts towards money to budget

        Returns:
            Account ID

        Raises:
            NotFoundError: If the plan does not exist
            ValidationError: If the name is blank
            ConflictError: If account name already exists in the plan
        """
        if self.db.get_plan(plan_id) is None:
            raise NotFoundError(plan_not_found(plan_id))

        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name is required")

        self._check_unique_name(plan_id, name)

        balance = Decimal(opening_balance)
        if account_type.is_liability:
            balance = -abs(balance)

        return self.db.create_account(
            plan_id=plan_id,
            name=name,
            account_type=account_type,
            balance=balance,
            on_budget=on_budget,
        )

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int, plan_id: Optional[int] = None) -> AccountEntity:
        """Get an account, optionally checking it belongs to ``plan_id``.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If it belongs to a different plan
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        if plan_id is not None and account.plan_id != plan_id:
            raise ValidationError(account_not_in_plan(account_id, plan_id))
        return account

    def list_accounts(self, plan_id: int, include_closed: bool = True) -> list[AccountEntity]:
        """List a plan's accounts.

        Args:
            plan_id: Plan ID
            include_closed: If False, closed accounts are left out

        Returns:
            List of account entities
        """
        accounts = self.db.list_accounts(plan_id)
        if not include_closed:
            accounts = [acc for acc in accounts if not acc.closed]
        return accounts

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        account_type: Optional[AccountType] = None,
        on_budget: Optional[bool] = None,
    ) -> None:
        """Update an account's name, type or on-budget flag.

        Raises:
            NotFoundError: If account not found
            ConflictError: If the new name is already used in the plan
        """
        account = self.require_account(account_id)

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Account name is required")
            self._check_unique_name(account.plan_id, name, exclude_id=account_id)

        self.db.update_account(
            account_id, name=name, account_type=account_type, on_budget=on_budget
        )

    def close_account(self, account_id: int) -> None:
        """Mark an account closed. Closed accounts drop out of money to budget."""
        self.require_account(account_id)
        self.db.update_account(account_id, closed=True)

    def reopen_account(self, account_id: int) -> None:
        """Reopen a closed account."""
        self.require_account(account_id)
        self.db.update_account(account_id, closed=False)

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Args:
            account_id: Account ID to delete

        Raises:
            NotFoundError: If account not found
            DependencyError: If transactions still reference the account
        """
        self.require_account(account_id)

        transaction_count = self.db.get_account_transaction_count(account_id)
        if transaction_count > 0:
            raise DependencyError(account_delete_blocked(account_id, transaction_count))

        self.db.delete_account(account_id)

    def get_summary(self, plan_id: int) -> AccountSummary:
        """Summarize open accounts into assets, liabilities and net worth.

        Accounts are split by the sign of their balance; liabilities are
        reported as a positive magnitude.
        """
        accounts = self.list_accounts(plan_id, include_closed=False)
        positive = [acc.balance for acc in accounts if acc.balance > 0]
        negative = [acc.balance for acc in accounts if acc.balance < 0]

        total_assets = sum(positive, Decimal("0"))
        total_liabilities = -sum(negative, Decimal("0"))
        return AccountSummary(
            total_assets=total_assets,
            total_liabilities=total_liabilities,
            net_worth=total_assets - total_liabilities,
            asset_count=len(positive),
            liability_count=len(negative),
        )

    def _check_unique_name(self, plan_id: int, name: str, exclude_id: Optional[int] = None) -> None:
        for acc in self.db.list_accounts(plan_id):
            if acc.id != exclude_id and acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")
