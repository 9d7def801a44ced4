"""Plan management commands."""

import click
from budgetit.domain.errors import DomainError
from budgetit.domain.plan import PlanService
from budgetit.cli.error_handling import handle_domain_error
from budgetit.utils.plan_resolver import resolve_plan


@click.group()
def plan_group():
    """Manage budget plans."""
    pass


@plan_group.command("create")
@click.argument("name", metavar="PLAN_NAME")
@click.option("--description", help="Plan description")
@click.option("--currency", default="USD", show_default=True, help="Currency label")
@click.pass_context
def create_plan(ctx, name: str, description: str | None, currency: str):
    """Create a new plan.

    Examples:
        budgetit plan create "Household"
        budgetit plan create "Travel" --description "Trip savings" --currency EUR
    """
    service = PlanService(ctx.obj["db"])
    try:
        plan_id = service.create_plan(name=name, description=description, currency=currency)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created plan '{name.strip()}' (ID: {plan_id})")


@plan_group.command("list")
@click.pass_context
def list_plans(ctx):
    """List all plans. The default plan is marked with '*'."""
    service = PlanService(ctx.obj["db"])

    plans = service.list_plans()
    if not plans:
        click.echo("No plans found.")
        return

    default = plans[0].id
    click.echo("\nPlans:")
    click.echo("-" * 60)
    for p in plans:
        marker = "*" if p.id == default else " "
        description = f" - {p.description}" if p.description else ""
        click.echo(f"{marker} ID: {p.id:3d} | {p.name:20s} | {p.currency}{description}")


@plan_group.command("rename")
@click.argument("plan", metavar="PLAN")
@click.argument("new_name", metavar="NEW_NAME")
@click.option("--description", help="New description")
@click.pass_context
def rename_plan(ctx, plan: str, new_name: str, description: str | None) -> None:
    """Rename a plan.

    PLAN can be a plan name or ID.
    """
    service = PlanService(ctx.obj["db"])
    try:
        plan_id = resolve_plan(service, plan)
        service.update_plan(plan_id, name=new_name, description=description)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed plan to '{new_name.strip()}'")


@plan_group.command("delete")
@click.argument("plan", metavar="PLAN")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_plan(ctx, plan: str, yes: bool) -> None:
    """Delete a plan and everything in it.

    PLAN can be a plan name or ID. The only remaining plan cannot be deleted.
    """
    service = PlanService(ctx.obj["db"])
    try:
        plan_id = resolve_plan(service, plan)
    except ValueError as e:
        handle_domain_error(ctx, e)

    plan_obj = service.get_plan(plan_id)
    if not yes and not click.confirm(
        f"Delete plan '{plan_obj.name}' with all its accounts, categories and transactions?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_plan(plan_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted plan '{plan_obj.name}'")


def register_commands(cli):
    """Register plan commands with main CLI."""
    cli.add_command(plan_group, name="plan")
