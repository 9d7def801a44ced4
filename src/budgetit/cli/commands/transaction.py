"""Transaction management commands."""

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


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Source account name or ID")
@click.option("--to-account", help="Destination account name or ID, or empty string to stop being a transfer")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--amount", help="Transaction amount (e.g., 123.45 or -123.45)")
@click.option("--category", help="Category path or ID, or empty string to clear")
@click.option("--payee", help="Payee")
@click.option("--memo", help="Memo")
@click.option("--status", type=click.Choice(STATUSES), help="Clearing status")
@click.option("--flag", help=f"Flag color ({', '.join(FLAGS)}) or empty string to clear")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    to_account: str | None,
    date: str | None,
    amount: str | None,
    category: str | None,
    payee: str | None,
    memo: str | None,
    status: str | None,
    flag: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Account balances and category
    envelopes are adjusted to match.

    Examples:
        budgetit transaction update 1 --amount -75.00
        budgetit transaction update 1 --category "Everyday Expenses > Groceries"
        budgetit transaction update 1 --category ""  # Clear category
    """
    db = ctx.obj["db"]
    plan_id = resolve_plan_or_exit(ctx)
    transaction_service = TransactionService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, account_service, plan_id, account)

    to_account_id = None
    clear_to_account = to_account == ""
    if to_account:
        to_account_id = resolve_account_or_exit(ctx, account_service, plan_id, to_account)

    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    category_id = None
    clear_category = category == ""
    if category:
        category_id = resolve_category_or_exit(ctx, category_service, plan_id, category).id

    flag_value = None
    clear_flag = flag == ""
    if flag:
        if flag not in FLAGS:
            click.echo(f"Error: Invalid flag '{flag}'. Choose from: {', '.join(FLAGS)}", err=True)
            ctx.exit(1)
        flag_value = FlagColor(flag)

    try:
        transaction_service.update_transaction(
            plan_id=plan_id,
            transaction_id=transaction_id,
            date=txn_date,
            amount=txn_amount,
            from_account_id=account_id,
            to_account_id=to_account_id,
            category_id=category_id,
            payee=payee,
            memo=memo,
            status=ClearingStatus(status) if status else None,
            flag=flag_value,
            clear_to_account=clear_to_account,
            clear_category=clear_category,
            clear_flag=clear_flag,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--category", help="Category path or ID")
@click.option("--account", help="Account name or ID")
@click.option("--uncategorized", is_flag=True, help="Show only uncategorized transactions")
@click.option("--verbose", "-v", is_flag=True, help="Show all fields including memo, status and flag")
@click.pass_context
def list_transactions(
    ctx, start_date: str, end_date: str, category: str, account: str, uncategorized: bool, verbose: bool
):
    """View transactions with optional filters.

    Use --uncategorized to show only transactions without a category.
    Account can be specified by name or ID and matches either side of a transfer.
    """
    db = ctx.obj["db"]
    plan_id = resolve_plan_or_exit(ctx)
    service = TransactionService(db)
    category_service = CategoryService(db)
    account_service = AccountService(db)

    start = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    end = None
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    account_id = None
    if account:
        account_id = resolve_account_or_exit(ctx, account_service, plan_id, account)

    category_id = None
    if category:
        category_id = resolve_category_or_exit(ctx, category_service, plan_id, category).id

    transactions = service.list_transactions(
        plan_id,
        start_date=start,
        end_date=end,
        category_id=category_id,
        account_id=account_id,
        uncategorized=uncategorized,
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc.name for acc in account_service.list_accounts(plan_id)}
    categories = {cat.id: cat.name for cat in category_service.list_categories(plan_id)}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':>12}  {'Account':<20} {'Category':<22} {'Payee':<30}"
    )
    click.echo("-" * 110)

    for txn in transactions:
        account_name = accounts.get(txn.from_account_id, "Unknown")
        if txn.is_transfer:
            account_name = f"{account_name} -> {accounts.get(txn.to_account_id, 'Unknown')}"
            category_name = "Transfer"
        else:
            category_name = categories.get(txn.category_id, "") if txn.category_id else ""
        amount_str = f"${txn.amount:,.2f}"

        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {amount_str:>12}  {account_name[:20]:<20} "
            f"{category_name[:22]:<22} {(txn.payee or '')[:30]:<30}"
        )
        if verbose:
            click.echo(f"{'':<6} status: {txn.status.value}" + (f" | flag: {txn.flag.value}" if txn.flag else ""))
            if txn.memo:
                click.echo(f"{'':<6} memo: {txn.memo}")

    outflow = sum(txn.amount for txn in transactions if txn.amount < 0 and not txn.is_transfer)
    inflow = sum(txn.amount for txn in transactions if txn.amount > 0 and not txn.is_transfer)
    click.echo("-" * 110)
    click.echo(
        f"{'TOTAL':<6} {'':<12} Outflow: ${abs(outflow):,.2f} | "
        f"Inflow: ${inflow:,.2f} | Count: {len(transactions)}"
    )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction and undo its effect on balances and envelopes.

    Examples:
        budgetit transaction delete 1
    """
    plan_id = resolve_plan_or_exit(ctx)
    transaction_service = TransactionService(ctx.obj["db"])

    try:
        transaction_service.require_transaction(transaction_id, plan_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        transaction_service.delete_transaction(plan_id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
