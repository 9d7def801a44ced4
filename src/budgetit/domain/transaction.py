"""Transaction domain service."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, TYPE_CHECKING

from budgetit.domain.effects import EntryEffectApplier, ReversalCoordinator
from budgetit.domain.entities import ClearingStatus, FlagColor, Transaction as TransactionEntity
from budgetit.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    account_not_in_plan,
    category_not_found,
    plan_not_found,
    transaction_not_found,
)

if TYPE_CHECKING:
    from budgetit.database.base import Database

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def coerce_amount(amount) -> Decimal:
    """Convert an int, str or Decimal amount to a Decimal rounded to cents.

    Raises:
        ValidationError: If the value is not numeric or is zero
    """
    if isinstance(amount, bool):
        raise ValidationError(f"Amount must be numeric, got {amount!r}")
    try:
        value = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Amount must be numeric, got {amount!r}")
    if not value.is_finite():
        raise ValidationError(f"Amount must be numeric, got {amount!r}")

    value = value.quantize(CENTS)
    if value == 0:
        raise ValidationError("Amount must be non-zero")
    return value


class TransactionService:
    """Service for managing transactions and keeping derived state in step.

    Every create applies the transaction's effects once. Update and delete
    first reverse the effects of the stored version, then (for update) apply
    the effects of the new version.
    """

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.applier = EntryEffectApplier(db)
        self.reversal = ReversalCoordinator(db)

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
        """Create a transaction and apply its effects.

        Args:
            plan_id: Owning plan
            date: Transaction date
            amount: Signed amount; negative is an outflow from the source account
            from_account_id: Source account
            to_account_id: Destination account, making this a transfer
            category_id: Optional category (ignored for transfers)
            payee: Optional payee
            memo: Optional memo
            status: Clearing status
            flag: Optional flag color

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the amount is invalid, an account belongs to
                another plan, or the transfer targets its own source
            NotFoundError: If the plan, an account or the category doesn't exist
        """
        if self.db.get_plan(plan_id) is None:
            raise NotFoundError(plan_not_found(plan_id))

        amount = coerce_amount(amount)
        self._validate(plan_id, date, from_account_id, to_account_id, category_id)

        transaction_id = self.db.create_transaction(
            plan_id=plan_id,
            date=date,
            amount=amount,
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            category_id=category_id,
            payee=payee,
            memo=memo,
            status=status,
            flag=flag,
        )
        logger.info("Created transaction %s: %s on account %s", transaction_id, amount, from_account_id)

        self.applier.apply(self.db.get_transaction(transaction_id))
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int, plan_id: Optional[int] = None) -> TransactionEntity:
        """Get a transaction, optionally checking it belongs to ``plan_id``.

        An entry of another plan is reported as not found.

        Raises:
            NotFoundError: If the transaction does not exist in the plan
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None or (plan_id is not None and txn.plan_id != plan_id):
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        plan_id: int,
        transaction_id: int,
        date: Optional[date] = None,
        amount: Optional[Decimal] = None,
        from_account_id: Optional[int] = None,
        to_account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        payee: Optional[str] = None,
        memo: Optional[str] = None,
        status: Optional[ClearingStatus] = None,
        flag: Optional[FlagColor] = None,
        clear_to_account: bool = False,
        clear_category: bool = False,
        clear_flag: bool = False,
    ) -> None:
        """Update transaction fields.

        Only the provided fields change. The stored version's effects are
        reversed before the new version's effects are applied.

        Args:
            plan_id: Plan the transaction must belong to
            transaction_id: Transaction ID to update
            date: Optional new date
            amount: Optional new amount
            from_account_id: Optional new source account
            to_account_id: Optional new destination account
            category_id: Optional new category ID
            payee: Optional new payee
            memo: Optional new memo
            status: Optional new clearing status
            flag: Optional new flag
            clear_to_account: If True, turn a transfer back into a regular transaction
            clear_category: If True, clear the category
            clear_flag: If True, remove the flag

        Raises:
            NotFoundError: If the transaction is not in the plan, or an account
                or the category doesn't exist
            ValidationError: If the merged values are invalid
        """
        previous = self.require_transaction(transaction_id, plan_id)

        if clear_category and category_id is not None:
            raise ValidationError("Cannot set both category_id and clear_category")
        if clear_to_account and to_account_id is not None:
            raise ValidationError("Cannot set both to_account_id and clear_to_account")
        if clear_flag and flag is not None:
            raise ValidationError("Cannot set both flag and clear_flag")

        changes = {}
        if date is not None:
            changes["date"] = date
        if amount is not None:
            changes["amount"] = coerce_amount(amount)
        if from_account_id is not None:
            changes["from_account_id"] = from_account_id
        if to_account_id is not None or clear_to_account:
            changes["to_account_id"] = to_account_id
        if category_id is not None or clear_category:
            changes["category_id"] = category_id
        if payee is not None:
            changes["payee"] = payee
        if memo is not None:
            changes["memo"] = memo
        if status is not None:
            changes["status"] = status
        if flag is not None or clear_flag:
            changes["flag"] = flag

        updated = dataclasses.replace(previous, **changes)
        self._validate(
            updated.plan_id,
            updated.date,
            updated.from_account_id,
            updated.to_account_id,
            updated.category_id,
        )

        self.db.replace_transaction(updated)
        logger.info("Updated transaction %s", transaction_id)

        self.reversal.reverse(previous)
        self.applier.apply(self.db.get_transaction(transaction_id))

    def delete_transaction(self, plan_id: int, transaction_id: int) -> None:
        """Reverse a transaction's effects and delete it.

        Args:
            plan_id: Plan the transaction must belong to
            transaction_id: Transaction ID to delete

        Raises:
            NotFoundError: If the transaction doesn't exist in the plan
        """
        snapshot = self.require_transaction(transaction_id, plan_id)

        self.reversal.reverse(snapshot)
        self.db.delete_transaction(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)

    def list_transactions(
        self,
        plan_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        account_id: Optional[int] = None,
        uncategorized: bool = False,
    ) -> list[TransactionEntity]:
        """List a plan's transactions with filters, newest first."""
        return self.db.list_transactions(
            plan_id=plan_id,
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
            account_id=account_id,
            uncategorized=uncategorized,
        )

    def _validate(
        self,
        plan_id: int,
        txn_date: date,
        from_account_id: Optional[int],
        to_account_id: Optional[int],
        category_id: Optional[int],
    ) -> None:
        if not isinstance(txn_date, date):
            raise ValidationError("Transaction date is required")
        if from_account_id is None:
            raise ValidationError("Source account is required")

        self._require_plan_account(plan_id, from_account_id)

        if to_account_id is not None:
            if to_account_id == from_account_id:
                raise ValidationError("Cannot transfer to the same account")
            self._require_plan_account(plan_id, to_account_id)

        if category_id is not None:
            category = self.db.get_category(category_id)
            if category is None:
                raise NotFoundError(category_not_found(category_id))
            group = self.db.get_category_group(category.group_id)
            if group is None or group.plan_id != plan_id:
                raise ValidationError(f"Category {category_id} does not belong to plan {plan_id}")

    def _require_plan_account(self, plan_id: int, account_id: int) -> None:
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        if account.plan_id != plan_id:
            raise ValidationError(account_not_in_plan(account_id, plan_id))
