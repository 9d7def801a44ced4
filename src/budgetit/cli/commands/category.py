"""Category management commands."""

import click
from budgetit.domain.category import CategoryService
from budgetit.domain.entities import CategoryGroup
from budgetit.domain.errors import DomainError
from budgetit.cli.account_resolution import resolve_category_or_exit, resolve_plan_or_exit
from budgetit.cli.error_handling import handle_domain_error


def _resolve_group_or_exit(ctx, service: CategoryService, plan_id: int, group: str) -> CategoryGroup:
    if group.isdigit():
        found = service.get_group(int(group))
        if found is not None and found.plan_id == plan_id:
            return found
    else:
        found = service.get_group_by_name(plan_id, group)
        if found is not None:
            return found

    click.echo(f"Error: Category group '{group}' not found", err=True)
    ctx.exit(1)


@click.group()
def category_group():
    """Manage category groups and categories."""
    pass


@category_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include hidden groups and categories")
@click.pass_context
def list_categories(ctx, show_all: bool):
    """List category groups with their categories."""
    plan_id = resolve_plan_or_exit(ctx)
    service = CategoryService(ctx.obj["db"])

    tree = service.get_category_tree(plan_id, include_hidden=show_all)
    if not tree:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo("\nCategories:")
    for node in tree:
        group = node["group"]
        hidden = " [hidden]" if group.hidden else ""
        click.echo(f"{group.name} (ID: {group.id}){hidden}")
        for cat in node["categories"]:
            hidden = " [hidden]" if cat.hidden else ""
            click.echo(f"  {cat.name} (ID: {cat.id}){hidden}")


@category_group.command("create-group")
@click.argument("name")
@click.pass_context
def create_group(ctx, name: str):
    """Create a new category group."""
    plan_id = resolve_plan_or_exit(ctx)
    service = CategoryService(ctx.obj["db"])
    try:
        group_id = service.create_group(plan_id, name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category group '{name.strip()}' (ID: {group_id})")


@category_group.command("create")
@click.argument("name")
@click.option("--group", required=True, help="Category group name or ID")
@click.pass_context
def create_category(ctx, name: str, group: str):
    """Create a new category in a group.

    Examples:
        budgetit category create "Groceries" --group "Everyday Expenses"
    """
    plan_id = resolve_plan_or_exit(ctx)
    service = CategoryService(ctx.obj["db"])
    group_obj = _resolve_group_or_exit(ctx, service, plan_id, group)
    try:
        category_id = service.create_category(group_obj.id, name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name.strip()}' under '{group_obj.name}' (ID: {category_id})")


@category_group.command("rename")
@click.argument("category")
@click.argument("new_name")
@click.option("--group", "is_group", is_flag=True, help="Rename a category group instead")
@click.pass_context
def rename_category(ctx, category: str, new_name: str, is_group: bool):
    """Rename a category (or with --group, a category group).

    CATEGORY can be an ID, a "Group > Category" path or a unique name.
    """
    plan_id = resolve_plan_or_exit(ctx)
    service = CategoryService(ctx.obj["db"])
    try:
        if is_group:
            service.rename_group(_resolve_group_or_exit(ctx, service, plan_id, category).id, new_name)
        else:
            service.rename_category(resolve_category_or_exit(ctx, service, plan_id, category).id, new_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed '{category}' to '{new_name.strip()}'")


def _set_hidden(ctx, category: str, is_group: bool, hidden: bool) -> None:
    plan_id = resolve_plan_or_exit(ctx)
    service = CategoryService(ctx.obj["db"])
    if is_group:
        target = _resolve_group_or_exit(ctx, service, plan_id, category)
        service.set_group_hidden(target.id, hidden)
    else:
        target = resolve_category_or_exit(ctx, service, plan_id, category)
        service.set_category_hidden(target.id, hidden)
    click.echo(f"{'Hid' if hidden else 'Unhid'} '{target.name}'")


@category_group.command("hide")
@click.argument("category")
@click.option("--group", "is_group", is_flag=True, help="Hide a category group instead")
@click.pass_context
def hide_category(ctx, category: str, is_group: bool):
    """Hide a category. Hidden categories are left out of budget totals."""
    _set_hidden(ctx, category, is_group, True)


@category_group.command("unhide")
@click.argument("category")
@click.option("--group", "is_group", is_flag=True, help="Unhide a category group instead")
@click.pass_context
def unhide_category(ctx, category: str, is_group: bool):
    """Show a hidden category again."""
    _set_hidden(ctx, category, is_group, False)


@category_group.command("move")
@click.argument("category")
@click.argument("group")
@click.pass_context
def move_category(ctx, category: str, group: str):
    """Move a category to the end of another group.

    Examples:
        budgetit category move "Gym" "Health"
    """
    plan_id = resolve_plan_or_exit(ctx)
    service = CategoryService(ctx.obj["db"])
    category_obj = resolve_category_or_exit(ctx, service, plan_id, category)
    group_obj = _resolve_group_or_exit(ctx, service, plan_id, group)
    try:
        service.move_category(category_obj.id, group_obj.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Moved '{category_obj.name}' to '{group_obj.name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
