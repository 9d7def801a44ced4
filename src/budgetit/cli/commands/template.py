"""Quick-budget template commands."""

import click
from budgetit.domain.allocation import AllocationService
from budgetit.domain.entities import AllocationPreview
from budgetit.domain.errors import DomainError
from budgetit.cli.account_resolution import resolve_plan_or_exit
from budgetit.cli.commands.budget import print_plan_summary
from budgetit.cli.error_handling import handle_domain_error
from budgetit.utils.amount_parser import parse_amount
from budgetit.utils.date_parser import parse_month


def _print_preview(preview: AllocationPreview) -> None:
    click.echo(f"{'Category':<30} {'Bucket':<12} {'Current':>12} {'New':>12}")
    click.echo("-" * 70)
    for line in preview.lines:
        click.echo(
            f"{line.category_name[:30]:<30} {line.bucket.value:<12} "
            f"{f'${line.current_budgeted:,.2f}':>12} {f'${line.new_budgeted:,.2f}':>12}"
        )
    click.echo("-" * 70)
    click.echo(f"Target:     ${preview.target:,.2f}")
    click.echo(f"Assigned:   ${preview.total_assigned:,.2f}")
    click.echo(f"Unassigned: ${preview.unassigned:,.2f}")
    if preview.empty_buckets:
        names = ", ".join(b.value for b in preview.empty_buckets)
        click.echo(f"Note: no categories for {names}; their share stays unassigned.")
    if preview.unassigned < 0:
        click.echo(f"Warning: assigns ${-preview.unassigned:,.2f} more than the target.")


def _load_preview(ctx, template_id: str, income: str, month: str | None):
    plan_id = resolve_plan_or_exit(ctx)
    try:
        target = parse_amount(income)
        month_date = parse_month(month)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    service = AllocationService(ctx.obj["db"])
    try:
        preview = service.preview(plan_id, template_id, target, month_date)
    except DomainError as e:
        handle_domain_error(ctx, e)
    return service, plan_id, preview


@click.group()
def template_group():
    """Distribute an amount across categories with a budgeting template."""
    pass


@template_group.command("list")
@click.pass_context
def list_templates(ctx):
    """List the available templates."""
    service = AllocationService(ctx.obj["db"])
    for template in service.list_templates():
        shares = ", ".join(f"{bucket.value} {pct}%" for bucket, pct in template.breakdown.items() if pct)
        click.echo(f"{template.id:<20} {template.name}")
        click.echo(f"{'':<20} {template.description} ({shares})")


@template_group.command("preview")
@click.argument("template_id")
@click.argument("income")
@click.option("--month", help="Budget month (YYYY-MM; default: this month)")
@click.pass_context
def preview_template(ctx, template_id: str, income: str, month: str | None):
    """Show what a template would budget, without writing anything.

    Examples:
        budgetit template preview 50-30-20 5000
    """
    _, _, preview = _load_preview(ctx, template_id, income, month)
    _print_preview(preview)


@template_group.command("apply")
@click.argument("template_id")
@click.argument("income")
@click.option("--month", help="Budget month (YYYY-MM; default: this month)")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def apply_template(ctx, template_id: str, income: str, month: str | None, yes: bool):
    """Budget every visible category using a template.

    Existing budgeted amounts of the affected categories are overwritten.

    Examples:
        budgetit template apply 50-30-20 5000 --month 2024-03
    """
    service, plan_id, preview = _load_preview(ctx, template_id, income, month)
    _print_preview(preview)
    if not preview.lines:
        click.echo("Nothing to apply.")
        return
    if not yes and not click.confirm("Apply these amounts?"):
        click.echo("Cancelled.")
        return

    result = service.apply(plan_id, template_id, preview.target, preview.month)

    click.echo(f"\nApplied {len(result.succeeded)} of {len(preview.lines)} amounts.")
    for category_id, amount in result.failed:
        click.echo(f"Warning: could not budget ${amount:,.2f} for category {category_id}", err=True)
    if result.summary is not None:
        print_plan_summary(result.summary)
    if not result.complete:
        ctx.exit(1)


def register_commands(cli):
    """Register template commands with main CLI."""
    cli.add_command(template_group, name="template")
