"""Monthly budget commands."""

from itertools import groupby

import click
from budgetit.domain.budget import BudgetService
from budgetit.domain.category import CategoryService
from budgetit.domain.entities import PlanSummary
from budgetit.domain.errors import DomainError
from budgetit.cli.account_resolution import resolve_category_or_exit, resolve_plan_or_exit
from budgetit.cli.error_handling import handle_domain_error
from budgetit.utils.amount_parser import parse_amount
from budgetit.utils.date_parser import parse_month


def _parse_month_or_exit(ctx, month: str | None):
    try:
        return parse_month(month)
    except ValueError as e:
        click.echo(f"Error: Invalid month: {e}", err=True)
        ctx.exit(1)


def print_plan_summary(summary: PlanSummary) -> None:
    """Print the plan totals for a month."""
    click.echo(f"{'Money to budget':<24} {f'${summary.total_income:,.2f}':>15}")
    click.echo(f"{'Budgeted':<24} {f'${summary.total_budgeted:,.2f}':>15}")
    click.echo(f"{'To be budgeted':<24} {f'${summary.to_be_budgeted:,.2f}':>15}")
    click.echo(f"{'Activity':<24} {f'${summary.total_activity:,.2f}':>15}")
    click.echo(f"{'Available':<24} {f'${summary.total_available:,.2f}':>15}")


@click.group()
def budget_group():
    """View and edit the monthly budget."""
    pass


@budget_group.command("show")
@click.option("--month", help="Budget month (YYYY-MM or relative like 'last month'; default: this month)")
@click.pass_context
def show_budget(ctx, month: str | None):
    """Show budgeted, activity and available per category for a month."""
    plan_id = resolve_plan_or_exit(ctx)
    service = BudgetService(ctx.obj["db"])
    month_date = _parse_month_or_exit(ctx, month)

    try:
        summary = service.get_month_summary(plan_id, month_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nBudget for {summary.month.strftime('%B %Y')}")
    click.echo("=" * 80)
    if not summary.rows:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
    else:
        click.echo(f"{'Category':<34} {'Budgeted':>14} {'Activity':>14} {'Available':>14}")
        for group_name, rows in groupby(summary.rows, key=lambda row: row.group_name):
            click.echo(f"\n{group_name}")
            for row in rows:
                click.echo(
                    f"  {row.category_name:<32} {f'${row.budgeted:,.2f}':>14} "
                    f"{f'${row.activity:,.2f}':>14} {f'${row.available:,.2f}':>14}"
                )
    click.echo("-" * 80)
    print_plan_summary(summary)


@budget_group.command("set")
@click.argument("category")
@click.argument("amount")
@click.option("--month", help="Budget month (YYYY-MM; default: this month)")
@click.pass_context
def set_budget(ctx, category: str, amount: str, month: str | None):
    """Set the budgeted amount of a category.

    CATEGORY can be an ID, a "Group > Category" path or a unique name.

    Examples:
        budgetit budget set Groceries 400
        budgetit budget set "Bills > Rent" 1200 --month 2024-02
    """
    db = ctx.obj["db"]
    plan_id = resolve_plan_or_exit(ctx)
    category_obj = resolve_category_or_exit(ctx, CategoryService(db), plan_id, category)
    month_date = _parse_month_or_exit(ctx, month)

    try:
        budgeted = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        envelope = BudgetService(db).set_budgeted(plan_id, category_obj.id, month_date, budgeted)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Budgeted ${envelope.budgeted:,.2f} for '{category_obj.name}' in "
        f"{envelope.month.strftime('%Y-%m')} (available: ${envelope.available:,.2f})"
    )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
