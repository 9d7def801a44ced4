"""Utility for resolving the active plan."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from budgetit.domain.plan import PlanService


def resolve_plan(plan_service: PlanService, plan: Optional[str | int]) -> int:
    """Resolve a plan name or ID to a plan ID.

    With no plan given, the first plan (lowest ID) is used.

    Raises:
        ValueError: If the plan is not found or no plan exists
    """
    if plan is None:
        default = plan_service.default_plan()
        if default is None:
            raise ValueError("No plan found. Create one with 'budgetit plan create NAME'.")
        return default.id

    try:
        plan_id = int(plan)
    except (ValueError, TypeError):
        plan_id = None

    if plan_id is not None:
        if plan_service.get_plan(plan_id) is None:
            raise ValueError(f"Plan ID {plan_id} not found")
        return plan_id

    for candidate in plan_service.list_plans():
        if candidate.name == plan:
            return candidate.id

    raise ValueError(f"Plan '{plan}' not found")
