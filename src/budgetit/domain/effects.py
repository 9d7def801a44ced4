"""Secondary effects of transactions on balances and envelopes.

A transaction write is the primary record. Its effects on account balances
and envelopes are secondary and follow a best-effort policy: each effect step
runs on its own, and a step that fails is logged and skipped rather than
failing the transaction. Drift caused by a skipped step shows up on the next
read and is not repaired automatically.
"""

from __future__ import annotations

import logging
from typing import Callable, TYPE_CHECKING

from budgetit.domain.account_ledger import AccountLedger
from budgetit.domain.entities import Transaction
from budgetit.domain.envelope import EnvelopeStore
from budgetit.domain.errors import NotFoundError, StorageError

if TYPE_CHECKING:
    from budgetit.database.base import Database

logger = logging.getLogger(__name__)


def _best_effort(description: str, transaction_id: int, step: Callable[[], object]) -> bool:
    """Run one effect step, logging and swallowing store failures."""
    try:
        step()
    except (StorageError, NotFoundError):
        logger.exception("Failed to %s for transaction %s", description, transaction_id)
        return False
    return True


class EntryEffectApplier:
    """Applies a transaction's effects using its current field values."""

    def __init__(self, db: Database):
        self.ledger = AccountLedger(db)
        self.envelopes = EnvelopeStore(db)

    def apply(self, entry: Transaction) -> bool:
        """Apply balance and envelope effects for ``entry``.

        The account ledger always runs. The envelope for the entry's month is
        touched only for categorized, non-transfer entries, with the amount's
        magnitude for both expenses and income.

        Returns:
            True if every effect step succeeded
        """
        ok = _best_effort(
            "update account balances",
            entry.id,
            lambda: self.ledger.apply_to_account(entry.from_account_id, entry.to_account_id, entry.amount),
        )

        if entry.affects_envelope:
            ok = _best_effort(
                "update budget activity",
                entry.id,
                lambda: self.envelopes.apply_activity(entry.plan_id, entry.category_id, entry.date, abs(entry.amount)),
            ) and ok

        return ok


class ReversalCoordinator:
    """Undoes the effects of a transaction's previous version."""

    def __init__(self, db: Database):
        self.ledger = AccountLedger(db)
        self.envelopes = EnvelopeStore(db)

    def reverse(self, snapshot: Transaction) -> bool:
        """Reverse balance and envelope effects recorded for ``snapshot``.

        Args:
            snapshot: The transaction as it was before the update or delete

        Returns:
            True if every reversal step succeeded
        """
        ok = _best_effort(
            "reverse account balances",
            snapshot.id,
            lambda: self.ledger.reverse_on_account(
                snapshot.from_account_id, snapshot.to_account_id, snapshot.amount
            ),
        )

        if snapshot.affects_envelope:
            ok = _best_effort(
                "reverse budget activity",
                snapshot.id,
                lambda: self.envelopes.reverse_activity(
                    snapshot.plan_id, snapshot.category_id, snapshot.date, abs(snapshot.amount)
                ),
            ) and ok

        return ok
