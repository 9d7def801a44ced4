"""Envelope store: per category, per month budget records."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from budgetit.domain.entities import Envelope
from budgetit.domain.errors import StorageError
from budgetit.utils.date_parser import month_start

if TYPE_CHECKING:
    from budgetit.database.base import Database

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class EnvelopeStore:
    """Owns the budgeted / activity / available triple of each envelope.

    Activity is tracked as a magnitude: applying any categorized amount adds
    its absolute value to ``activity`` and takes it from ``available``, and
    reversing does the opposite. Envelopes are keyed by the first day of the
    month and created lazily with ``budgeted = 0``.
    """

    def __init__(self, db: Database):
        self.db = db

    def apply_activity(
        self, plan_id: int, category_id: int, when: date, magnitude_delta: Decimal
    ) -> Envelope:
        """Record activity against the envelope for ``when``'s month.

        Args:
            plan_id: Plan ID
            category_id: Category ID
            when: Any date in the target month
            magnitude_delta: Amount whose absolute value is recorded

        Returns:
            The envelope after the change
        """
        month = month_start(when)
        magnitude = abs(Decimal(magnitude_delta))

        if not self.db.increment_envelope(plan_id, category_id, month, magnitude, -magnitude):
            try:
                self.db.create_envelope(
                    plan_id=plan_id,
                    category_id=category_id,
                    month=month,
                    budgeted=ZERO,
                    activity=magnitude,
                    available=-magnitude,
                )
                logger.debug("Created envelope plan=%s category=%s month=%s", plan_id, category_id, month)
            except StorageError:
                # Another writer created the record between our update and insert
                if not self.db.increment_envelope(plan_id, category_id, month, magnitude, -magnitude):
                    raise

        logger.debug(
            "Envelope plan=%s category=%s month=%s activity +%.2f", plan_id, category_id, month, magnitude
        )
        return self.db.get_envelope(plan_id, category_id, month)

    def reverse_activity(
        self, plan_id: int, category_id: int, when: date, magnitude_delta: Decimal
    ) -> bool:
        """Remove previously applied activity.

        Does nothing when no envelope exists for the month, so reversing never
        creates a record.

        Returns:
            True if an envelope was adjusted
        """
        month = month_start(when)
        magnitude = abs(Decimal(magnitude_delta))
        reversed_ = self.db.increment_envelope(plan_id, category_id, month, -magnitude, magnitude)
        if reversed_:
            logger.debug(
                "Envelope plan=%s category=%s month=%s activity -%.2f", plan_id, category_id, month, magnitude
            )
        else:
            logger.debug("No envelope to reverse for plan=%s category=%s month=%s", plan_id, category_id, month)
        return reversed_

    def set_budgeted(self, plan_id: int, category_id: int, month: date, amount: Decimal) -> Envelope:
        """Set the planned amount for a category and month.

        Activity is left untouched; available moves by the change in budgeted
        so that ``available == budgeted - activity`` keeps holding.
        """
        month = month_start(month)
        amount = Decimal(amount)

        if not self.db.set_envelope_budgeted(plan_id, category_id, month, amount):
            try:
                self.db.create_envelope(
                    plan_id=plan_id,
                    category_id=category_id,
                    month=month,
                    budgeted=amount,
                    activity=ZERO,
                    available=amount,
                )
            except StorageError:
                if not self.db.set_envelope_budgeted(plan_id, category_id, month, amount):
                    raise

        return self.db.get_envelope(plan_id, category_id, month)

    def get_envelope(self, plan_id: int, category_id: int, month: date) -> Optional[Envelope]:
        """Get the envelope for a category and month, if one exists."""
        return self.db.get_envelope(plan_id, category_id, month_start(month))

    def list_envelopes(self, plan_id: int, month: date) -> list[Envelope]:
        """List every stored envelope of a plan for a month."""
        return self.db.list_envelopes(plan_id, month_start(month))
