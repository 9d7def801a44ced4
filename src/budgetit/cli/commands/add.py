"""Add transaction command."""

import click
from budgetit.domain.transaction import TransactionService
from budgetit.domain.account import AccountService
from budgetit.domain.category import CategoryService
from budgetit.domain.entities import ClearingStatus, FlagColor
from budgetit.domain.errors import DomainError
from budgetit.cli.account_resolution import (
    resolve_account_or_exit,
    resolve_category_or_exit,
    resolve_plan_or_exit,
)
from budgetit.cli.error_handling import handle_domain_error
from budgetit.utils.date_parser import parse_date
from budgetit.utils.amount_parser import parse_amount

STATUSES = [s.value for s in ClearingStatus]
FLAGS = [f.value for f in FlagColor]


@click.command("add")
@click.option("--account", required=True, help="Source account name or ID")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--amount", required=True, help="Transaction amount (e.g., -42.50 for spending, 1000 for income)"
)
@click.option("--to-account", help="Destination account name or ID (makes this a transfer)")
@click.option("--category", help="Category ID, path (e.g., 'Everyday Expenses > Groceries') or name")
@click.option("--payee", help="Payee")
@click.option("--memo", help="Memo")
@click.option("--status", type=click.Choice(STATUSES), default=ClearingStatus.UNCLEARED.value, show_default=True)
@click.option("--flag", type=click.Choice(FLAGS), help="Flag color")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    date: str,
    amount: str,
    to_account: str | None,
    category: str | None,
    payee: str | None,
    memo: str | None,
    status: str,
    flag: str | None,
):
    """Add a transaction manually.

    Negative amounts leave the source account. For a transfer the same
    amount enters the destination account with the opposite sign.

    Examples:
        budgetit add --account Checking --amount -42.50 --category Groceries --payee "Corner Market"
        budgetit add --account Checking --amount 2500 --date 2024-01-01 --payee Employer
        budgetit add --account Checking --amount -300 --to-account Savings
    """
    db = ctx.obj["db"]
    plan_id = resolve_plan_or_exit(ctx)
    transaction_service = TransactionService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)

    account_id = resolve_account_or_exit(ctx, account_service, plan_id, account)
    to_account_id = None
    if to_account:
        to_account_id = resolve_account_or_exit(ctx, account_service, plan_id, to_account)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    category_obj = None
    if category:
        category_obj = resolve_category_or_exit(ctx, category_service, plan_id, category)

    try:
        transaction_id = transaction_service.create_transaction(
            plan_id=plan_id,
            date=txn_date,
            amount=txn_amount,
            from_account_id=account_id,
            to_account_id=to_account_id,
            category_id=category_obj.id if category_obj else None,
            payee=payee,
            memo=memo,
            status=ClearingStatus(status),
            flag=FlagColor(flag) if flag else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Account: {account_service.get_account(account_id).name}")
    if to_account_id is not None:
        click.echo(f"  Transfer to: {account_service.get_account(to_account_id).name}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: ${txn_amount:,.2f}")
    if payee:
        click.echo(f"  Payee: {payee}")
    if category_obj:
        click.echo(f"  Category: {category_obj.name}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
