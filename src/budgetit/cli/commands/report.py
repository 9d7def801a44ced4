"""Report commands."""

import click
from budgetit.domain.account import AccountService
from budgetit.domain.report import ReportService
from budgetit.cli.account_resolution import resolve_account_or_exit, resolve_plan_or_exit
from budgetit.utils.date_parser import parse_month


@click.group()
def report_group():
    """Reports over the plan's transactions."""
    pass


@report_group.command("spending")
@click.option("--month", help="Month to report (YYYY-MM or relative like 'last month'; default: this month)")
@click.option("--account", help="Only include spending from this account (name or ID)")
@click.option("--by-group", is_flag=True, help="Group totals by category group")
@click.pass_context
def spending(ctx, month: str | None, account: str | None, by_group: bool):
    """Show a month's spending per category, largest first.

    Transfers and inflows are not counted.
    """
    db = ctx.obj["db"]
    plan_id = resolve_plan_or_exit(ctx)

    try:
        month_date = parse_month(month)
    except ValueError as e:
        click.echo(f"Error: Invalid month: {e}", err=True)
        ctx.exit(1)

    account_id = None
    if account:
        account_id = resolve_account_or_exit(ctx, AccountService(db), plan_id, account)

    report = ReportService(db).spending_report(plan_id, month_date, account_id=account_id)
    if not report.by_category:
        click.echo("No spending found.")
        return

    click.echo(f"\nSpending for {report.month.strftime('%B %Y')}")
    click.echo("-" * 70)
    lines = report.by_group if by_group else report.by_category
    for line in lines:
        label = line.name if by_group else f"{line.group_name} > {line.name}"
        share = line.amount / report.total * 100
        click.echo(f"{label[:40]:<40} {f'${line.amount:,.2f}':>14} {share:5.1f}%  ({line.count})")
    click.echo("-" * 70)
    click.echo(f"{'Total':<40} {f'${report.total:,.2f}':>14}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
