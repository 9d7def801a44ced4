"""Account balance propagation for transactions."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from budgetit.database.base import Database

logger = logging.getLogger(__name__)


class AccountLedger:
    """Applies a transaction's signed amount to account balances.

    A regular transaction moves ``from_account`` by ``amount``. A transfer
    also moves ``to_account`` by ``-amount``, so the two balances always sum to
    the same total. Each balance change is one atomic increment in the store.
    """

    def __init__(self, db: Database):
        self.db = db

    def apply_to_account(
        self, from_account_id: int, to_account_id: Optional[int], amount: Decimal
    ) -> None:
        """Apply ``amount`` to the source account and its inverse to the destination.

        Raises:
            NotFoundError: If either account no longer exists
            StorageError: If a balance write fails
        """
        self.db.increment_account_balance(from_account_id, amount)
        logger.debug("Account %s balance %+.2f", from_account_id, amount)

        if to_account_id is not None:
            self.db.increment_account_balance(to_account_id, -amount)
            logger.debug("Account %s balance %+.2f", to_account_id, -amount)

    def reverse_on_account(
        self, from_account_id: int, to_account_id: Optional[int], amount: Decimal
    ) -> None:
        """Undo a previous ``apply_to_account`` call with the same arguments."""
        self.apply_to_account(from_account_id, to_account_id, -amount)
