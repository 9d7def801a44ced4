"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from budgetit.domain.entities import (
    Plan,
    Account,
    AccountType,
    CategoryGroup,
    Category,
    Transaction,
    ClearingStatus,
    FlagColor,
    Envelope,
)


class Database(ABC):
    """Abstract database interface for budgetit.

    Every mutating method commits on its own. Writes that fail raise
    ``StorageError`` after the session has been rolled back.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Plan operations
    @abstractmethod
    def create_plan(self, name: str, description: Optional[str] = None, currency: str = "USD") -> int:
        """Create a plan. Returns plan ID."""
        pass

    @abstractmethod
    def get_plan(self, plan_id: int) -> Optional[Plan]:
        """Get plan by ID."""
        pass

    @abstractmethod
    def list_plans(self) -> list[Plan]:
        """List all plans ordered by ID."""
        pass

    @abstractmethod
    def update_plan(
        self, plan_id: int, name: Optional[str] = None, description: Optional[str] = None
    ) -> None:
        """Update plan name and/or description."""
        pass

    @abstractmethod
    def delete_plan(self, plan_id: int) -> None:
        """Delete a plan and everything it owns."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        plan_id: int,
        name: str,
        account_type: AccountType,
        balance: Decimal = Decimal("0"),
        on_budget: bool = True,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, plan_id: int) -> list[Account]:
        """List a plan's accounts: on-budget first, closed last, then by name."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        account_type: Optional[AccountType] = None,
        on_budget: Optional[bool] = None,
        closed: Optional[bool] = None,
    ) -> None:
        """Update account attributes other than the balance."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, account_id: int) -> int:
        """Count transactions referencing the account on either side."""
        pass

    @abstractmethod
    def increment_account_balance(self, account_id: int, delta: Decimal) -> None:
        """Atomically add ``delta`` to the account balance.

        Raises:
            NotFoundError: If the account does not exist
        """
        pass

    # Category operations
    @abstractmethod
    def create_category_group(self, plan_id: int, name: str, sort_order: int = 0) -> int:
        """Create a category group. Returns group ID."""
        pass

    @abstractmethod
    def get_category_group(self, group_id: int) -> Optional[CategoryGroup]:
        """Get category group by ID."""
        pass

    @abstractmethod
    def list_category_groups(self, plan_id: int) -> list[CategoryGroup]:
        """List a plan's category groups by sort order."""
        pass

    @abstractmethod
    def update_category_group(
        self,
        group_id: int,
        name: Optional[str] = None,
        hidden: Optional[bool] = None,
        sort_order: Optional[int] = None,
    ) -> None:
        """Update category group attributes."""
        pass

    @abstractmethod
    def create_category(self, group_id: int, name: str, sort_order: int = 0) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, plan_id: int, group_id: Optional[int] = None) -> list[Category]:
        """List a plan's categories ordered by group then sort order."""
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        hidden: Optional[bool] = None,
        group_id: Optional[int] = None,
        sort_order: Optional[int] = None,
    ) -> None:
        """Update category attributes."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        plan_id: int,
        date: date,
        amount: Decimal,
        from_account_id: int,
        to_account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        payee: Optional[str] = None,
        memo: Optional[str] = None,
        status: ClearingStatus = ClearingStatus.UNCLEARED,
        flag: Optional[FlagColor] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def replace_transaction(self, transaction: Transaction) -> None:
        """Overwrite every editable field of a stored transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        plan_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        account_id: Optional[int] = None,
        uncategorized: bool = False,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first.

        Args:
            plan_id: Plan whose transactions to list
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            category_id: Optional category ID filter
            account_id: Optional account ID filter (matches either side of a transfer)
            uncategorized: If True, only return transactions without a category
        """
        pass

    # Envelope operations
    @abstractmethod
    def get_envelope(self, plan_id: int, category_id: int, month: date) -> Optional[Envelope]:
        """Get the envelope for a plan, category and month."""
        pass

    @abstractmethod
    def list_envelopes(self, plan_id: int, month: date) -> list[Envelope]:
        """List every envelope of a plan for a month."""
        pass

    @abstractmethod
    def create_envelope(
        self,
        plan_id: int,
        category_id: int,
        month: date,
        budgeted: Decimal,
        activity: Decimal,
        available: Decimal,
    ) -> None:
        """Insert an envelope. Raises StorageError if the key already exists."""
        pass

    @abstractmethod
    def increment_envelope(
        self,
        plan_id: int,
        category_id: int,
        month: date,
        activity_delta: Decimal,
        available_delta: Decimal,
    ) -> bool:
        """Atomically add to activity and available.

        Returns:
            True if a record was updated, False if none exists
        """
        pass

    @abstractmethod
    def set_envelope_budgeted(
        self, plan_id: int, category_id: int, month: date, budgeted: Decimal
    ) -> bool:
        """Set budgeted on an existing envelope, shifting available by the change.

        Returns:
            True if a record was updated, False if none exists
        """
        pass
