"""Initialize default categories."""

import click
from budgetit.domain.category import CategoryService
from budgetit.cli.account_resolution import resolve_plan_or_exit


# Default groups and their categories, in display order
DEFAULT_CATEGORY_GROUPS = [
    ("Bills", ["Rent", "Electric", "Water", "Internet", "Phone"]),
    ("Everyday Expenses", ["Groceries", "Gas & Fuel", "Dining Out", "Household Goods"]),
    ("Health", ["Medical", "Health Insurance"]),
    ("Fun", ["Entertainment", "Hobbies", "Subscriptions"]),
    ("Debt Payments", ["Credit Card Payment", "Student Loan"]),
    ("Savings Goals", ["Emergency Fund", "Vacation Fund", "Car Repairs"]),
    ("Investments", ["Retirement"]),
]


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Create the default category groups and categories.

    Existing groups and categories are kept; only missing ones are added.
    """
    plan_id = resolve_plan_or_exit(ctx)
    service = CategoryService(ctx.obj["db"])

    click.echo("Creating default categories...")
    created = service.seed_categories(plan_id, DEFAULT_CATEGORY_GROUPS)
    if created == 0:
        click.echo("All default categories already exist.")
    else:
        click.echo(f"Successfully created {created} categories.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
