"""Plan domain service."""

from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from budgetit.domain.entities import Plan as PlanEntity
from budgetit.domain.errors import ConflictError, DependencyError, NotFoundError, ValidationError, plan_not_found

if TYPE_CHECKING:
    from budgetit.database.base import Database

logger = logging.getLogger(__name__)


class PlanService:
    """Service for managing budget plans."""

    def __init__(self, db: Database):
        """Initialize plan service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_plan(self, name: str, description: Optional[str] = None, currency: str = "USD") -> int:
        """Create a new plan.

        Args:
            name: Plan name (unique)
            description: Optional description
            currency: Currency label used for display

        Returns:
            Plan ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If a plan with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Plan name is required")

        for plan in self.db.list_plans():
            if plan.name == name:
                raise ConflictError(f"Plan with name '{name}' already exists")

        plan_id = self.db.create_plan(
            name=name,
            description=description.strip() if description else None,
            currency=currency,
        )
        logger.info("Created plan %s (%s)", plan_id, name)
        return plan_id

    def get_plan(self, plan_id: int) -> Optional[PlanEntity]:
        """Get plan by ID."""
        return self.db.get_plan(plan_id)

    def require_plan(self, plan_id: int) -> PlanEntity:
        """Get plan by ID or raise NotFoundError."""
        plan = self.db.get_plan(plan_id)
        if plan is None:
            raise NotFoundError(plan_not_found(plan_id))
        return plan

    def list_plans(self) -> list[PlanEntity]:
        """List all plans."""
        return self.db.list_plans()

    def default_plan(self) -> Optional[PlanEntity]:
        """Return the plan used when none is specified (lowest ID)."""
        plans = self.db.list_plans()
        return plans[0] if plans else None

    def update_plan(
        self, plan_id: int, name: Optional[str] = None, description: Optional[str] = None
    ) -> None:
        """Rename a plan and/or change its description.

        Raises:
            NotFoundError: If the plan does not exist
            ConflictError: If another plan already uses the name
        """
        self.require_plan(plan_id)

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Plan name is required")
            for plan in self.db.list_plans():
                if plan.id != plan_id and plan.name == name:
                    raise ConflictError(f"Plan with name '{name}' already exists")

        self.db.update_plan(plan_id, name=name, description=description)

    def delete_plan(self, plan_id: int) -> None:
        """Delete a plan with all its accounts, categories, transactions and envelopes.

        Raises:
            NotFoundError: If the plan does not exist
            DependencyError: If it is the only plan
        """
        self.require_plan(plan_id)
        if len(self.db.list_plans()) <= 1:
            raise DependencyError("Cannot delete the only plan. At least one plan must exist.")

        self.db.delete_plan(plan_id)
        logger.info("Deleted plan %s", plan_id)
