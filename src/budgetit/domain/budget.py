"""Monthly budget view and the plan-wide aggregate calculation."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, TYPE_CHECKING

from budgetit.domain.entities import Envelope, EnvelopeRow, PlanSummary
from budgetit.domain.envelope import EnvelopeStore
from budgetit.domain.errors import NotFoundError, category_not_found, plan_not_found
from budgetit.utils.date_parser import month_start

if TYPE_CHECKING:
    from budgetit.database.base import Database

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def calculate_plan_summary(
    month: date, rows: Iterable[EnvelopeRow], total_income: Decimal
) -> PlanSummary:
    """Derive plan-wide totals for a month.

    Pure function: hidden rows are ignored, every other row contributes its
    budgeted, activity and available figures.

    Args:
        month: Budget month
        rows: Envelope rows for every category of the plan
        total_income: Money available to budget

    Returns:
        PlanSummary with ``to_be_budgeted = total_income - total_budgeted``
    """
    visible = tuple(row for row in rows if not row.hidden)
    total_budgeted = sum((row.budgeted for row in visible), ZERO)
    return PlanSummary(
        month=month_start(month),
        total_income=total_income,
        total_budgeted=total_budgeted,
        to_be_budgeted=total_income - total_budgeted,
        total_activity=sum((row.activity for row in visible), ZERO),
        total_available=sum((row.available for row in visible), ZERO),
        rows=visible,
    )


class BudgetService:
    """Reads and edits a plan's monthly budget."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db
        self.envelopes = EnvelopeStore(db)

    def get_total_income(self, plan_id: int) -> Decimal:
        """Money available to budget: the sum of open, on-budget account balances."""
        return sum(
            (acc.balance for acc in self.db.list_accounts(plan_id) if acc.on_budget and not acc.closed),
            ZERO,
        )

    def get_envelope_rows(self, plan_id: int, month: date) -> list[EnvelopeRow]:
        """Build one row per category in display order.

        Categories without an envelope for the month show zeros. Rows for
        hidden categories, or categories in hidden groups, are flagged hidden.
        """
        groups = {g.id: g for g in self.db.list_category_groups(plan_id)}
        envelopes: dict[int, Envelope] = {
            e.category_id: e for e in self.envelopes.list_envelopes(plan_id, month)
        }

        rows = []
        for category in self.db.list_categories(plan_id):
            group = groups[category.group_id]
            envelope = envelopes.get(category.id)
            rows.append(
                EnvelopeRow(
                    category_id=category.id,
                    category_name=category.name,
                    group_id=group.id,
                    group_name=group.name,
                    budgeted=envelope.budgeted if envelope else ZERO,
                    activity=envelope.activity if envelope else ZERO,
                    available=envelope.available if envelope else ZERO,
                    hidden=category.hidden or group.hidden,
                )
            )
        return rows

    def get_month_summary(self, plan_id: int, month: date) -> PlanSummary:
        """Recompute the plan summary for a month from the current store state.

        Raises:
            NotFoundError: If the plan doesn't exist
        """
        if self.db.get_plan(plan_id) is None:
            raise NotFoundError(plan_not_found(plan_id))

        month = month_start(month)
        return calculate_plan_summary(
            month,
            self.get_envelope_rows(plan_id, month),
            self.get_total_income(plan_id),
        )

    def set_budgeted(self, plan_id: int, category_id: int, month: date, amount: Decimal) -> Envelope:
        """Set the budgeted amount of one category for a month.

        Args:
            plan_id: Plan ID
            category_id: Category ID
            month: Any date in the budget month
            amount: New budgeted amount

        Returns:
            The updated envelope

        Raises:
            NotFoundError: If the category doesn't belong to the plan
        """
        category = self.db.get_category(category_id)
        group = self.db.get_category_group(category.group_id) if category else None
        if group is None or group.plan_id != plan_id:
            raise NotFoundError(category_not_found(category_id))

        envelope = self.envelopes.set_budgeted(plan_id, category_id, month, Decimal(amount))
        logger.info(
            "Budgeted %s for category %s in %s", envelope.budgeted, category_id, envelope.month.strftime("%Y-%m")
        )
        return envelope
