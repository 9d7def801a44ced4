"""CLI helpers for plan, account and category resolution."""

from __future__ import annotations

import click
from budgetit.domain.account import AccountService
from budgetit.domain.category import CategoryService
from budgetit.domain.entities import Category
from budgetit.domain.plan import PlanService
from budgetit.utils.account_resolver import resolve_account
from budgetit.utils.plan_resolver import resolve_plan


def resolve_plan_or_exit(ctx: click.Context) -> int:
    """Resolve the plan selected with the root --plan option, or exit with a CLI error."""
    db = ctx.obj["db"]
    try:
        return resolve_plan(PlanService(db), ctx.obj.get("plan"))
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, plan_id: int, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error."""
    try:
        return resolve_account(account_service, plan_id, account)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_category_or_exit(
    ctx: click.Context, category_service: CategoryService, plan_id: int, category: str
) -> Category:
    """Resolve a category ID, "Group > Category" path or unique name, or exit."""
    if category.isdigit():
        found = category_service.get_category(int(category))
        if found is not None and category_service.require_group(found.group_id).plan_id == plan_id:
            return found
    else:
        found = category_service.get_category_by_path(plan_id, category)
        if found is not None:
            return found

    click.echo(f"Error: Category '{category}' not found", err=True)
    ctx.exit(1)
