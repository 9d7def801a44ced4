"""Account management commands."""

import click
from decimal import Decimal
from budgetit.domain.account import AccountService
from budgetit.domain.entities import AccountType
from budgetit.domain.errors import DomainError
from budgetit.cli.account_resolution import resolve_account_or_exit, resolve_plan_or_exit
from budgetit.cli.error_handling import handle_domain_error
from budgetit.utils.amount_parser import parse_amount

ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    default=AccountType.CHECKING.value,
    show_default=True,
    help="Account type",
)
@click.option("--balance", default="0", help="Opening balance (amount owed for liabilities)")
@click.option("--off-budget", is_flag=True, help="Track the account without budgeting its balance")
@click.pass_context
def create_account(ctx, name: str, account_type: str, balance: str, off_budget: bool):
    """Create a new account.

    For credit cards, loans and other liabilities, --balance is the amount
    owed and is stored as a negative balance.

    Examples:
        budgetit account create "Checking" --balance 2500
        budgetit account create "Visa" --type credit_card --balance 340.12
        budgetit account create "Brokerage" --type investment --off-budget
    """
    plan_id = resolve_plan_or_exit(ctx)
    service = AccountService(ctx.obj["db"])

    try:
        opening = parse_amount(balance)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        account_id = service.create_account(
            plan_id=plan_id,
            name=name,
            account_type=AccountType(account_type.lower()),
            opening_balance=opening,
            on_budget=not off_budget,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    account_obj = service.get_account(account_id)
    click.echo(f"Created account '{account_obj.name}' (ID: {account_id})")
    click.echo(f"  Balance: ${account_obj.balance:,.2f}")


@account_group.command("list")
@click.option("--open-only", is_flag=True, help="Hide closed accounts")
@click.pass_context
def list_accounts(ctx, open_only: bool):
    """List the plan's accounts."""
    plan_id = resolve_plan_or_exit(ctx)
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts(plan_id, include_closed=not open_only)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        flags = []
        if not acc.on_budget:
            flags.append("off-budget")
        if acc.closed:
            flags.append("closed")
        suffix = f" ({', '.join(flags)})" if flags else ""
        balance = f"${acc.balance:,.2f}"
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | {acc.type.value:16s} | {balance:>14s}{suffix}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", "new_name", help="New account name")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="New account type",
)
@click.option("--on-budget/--off-budget", default=None, help="Change whether the account is budgeted")
@click.pass_context
def update_account(
    ctx, account: str, new_name: str | None, account_type: str | None, on_budget: bool | None
) -> None:
    """Update an account.

    ACCOUNT can be an account name or ID.

    Examples:
        budgetit account update "Checking" --name "Joint Checking"
        budgetit account update 3 --off-budget
    """
    plan_id = resolve_plan_or_exit(ctx)
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, plan_id, account)

    try:
        service.update_account(
            account_id,
            name=new_name,
            account_type=AccountType(account_type.lower()) if account_type else None,
            on_budget=on_budget,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account {account_id}")


@account_group.command("close")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def close_account(ctx, account: str) -> None:
    """Close an account. ACCOUNT can be an account name or ID."""
    plan_id = resolve_plan_or_exit(ctx)
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, plan_id, account)

    account_obj = service.get_account(account_id)
    if account_obj.balance != Decimal("0"):
        click.echo(f"Warning: closing account with a balance of ${account_obj.balance:,.2f}", err=True)
    service.close_account(account_id)
    click.echo(f"Closed account '{account_obj.name}'")


@account_group.command("reopen")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def reopen_account(ctx, account: str) -> None:
    """Reopen a closed account. ACCOUNT can be an account name or ID."""
    plan_id = resolve_plan_or_exit(ctx)
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, plan_id, account)

    service.reopen_account(account_id)
    click.echo(f"Reopened account '{service.get_account(account_id).name}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if it has no transactions. Use
    'transaction delete' to remove them first, or close the account instead.
    """
    plan_id = resolve_plan_or_exit(ctx)
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, plan_id, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


@account_group.command("summary")
@click.pass_context
def account_summary(ctx) -> None:
    """Show total assets, liabilities and net worth of open accounts."""
    plan_id = resolve_plan_or_exit(ctx)
    summary = AccountService(ctx.obj["db"]).get_summary(plan_id)

    click.echo(f"{'Assets':<20} {f'${summary.total_assets:,.2f}':>15}  ({summary.asset_count} accounts)")
    click.echo(f"{'Liabilities':<20} {f'${summary.total_liabilities:,.2f}':>15}  ({summary.liability_count} accounts)")
    click.echo("-" * 40)
    click.echo(f"{'Net worth':<20} {f'${summary.net_worth:,.2f}':>15}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
