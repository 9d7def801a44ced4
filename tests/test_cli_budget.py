"""Tests for category, transaction, budget, template and report commands."""

from datetime import date
from decimal import Decimal
from budgetit.cli.main import cli
from budgetit.domain.entities import AccountType


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_init_categories(cli_runner, temp_db, sample_plan):
    """Test seeding default categories twice."""
    result = _invoke(cli_runner, temp_db, "init-categories")
    assert result.exit_code == 0
    assert "Successfully created" in result.output

    result = _invoke(cli_runner, temp_db, "init-categories")
    assert "All default categories already exist." in result.output

    result = _invoke(cli_runner, temp_db, "category", "list")
    assert "Everyday Expenses" in result.output
    assert "  Groceries" in result.output


def test_category_commands(cli_runner, temp_db, sample_plan):
    """Test creating, renaming, hiding and moving categories."""
    assert _invoke(cli_runner, temp_db, "category", "create-group", "Bills").exit_code == 0
    assert _invoke(cli_runner, temp_db, "category", "create-group", "Fun").exit_code == 0

    result = _invoke(cli_runner, temp_db, "category", "create", "Netflix", "--group", "Bills")
    assert result.exit_code == 0
    assert "Created category 'Netflix' under 'Bills'" in result.output

    assert _invoke(cli_runner, temp_db, "category", "rename", "Netflix", "Streaming").exit_code == 0
    result = _invoke(cli_runner, temp_db, "category", "move", "Bills > Streaming", "Fun")
    assert result.exit_code == 0
    assert "Moved 'Streaming' to 'Fun'" in result.output

    assert _invoke(cli_runner, temp_db, "category", "hide", "Streaming").exit_code == 0
    assert "Streaming" not in _invoke(cli_runner, temp_db, "category", "list").output
    assert "Streaming (ID: 1) [hidden]" in _invoke(cli_runner, temp_db, "category", "list", "--all").output

    assert _invoke(cli_runner, temp_db, "category", "unhide", "1").exit_code == 0
    assert _invoke(cli_runner, temp_db, "category", "rename", "Fun", "Leisure", "--group").exit_code == 0
    assert "Leisure" in _invoke(cli_runner, temp_db, "category", "list").output


def test_category_errors(cli_runner, temp_db, sample_plan):
    """Test unknown groups and categories."""
    result = _invoke(cli_runner, temp_db, "category", "create", "Rent", "--group", "Missing")
    assert result.exit_code == 1
    assert "Category group 'Missing' not found" in result.output

    result = _invoke(cli_runner, temp_db, "category", "hide", "Missing")
    assert result.exit_code == 1
    assert "Category 'Missing' not found" in result.output


def test_add_and_budget_show(cli_runner, temp_db, sample_accounts, sample_categories):
    """Test adding an expense and seeing it in the month view."""
    result = _invoke(
        cli_runner, temp_db,
        "add", "--account", "Checking", "--date", "2024-01-15", "--amount", "-42.50",
        "--category", "Everyday Expenses > Groceries", "--payee", "Corner Market",
    )
    assert result.exit_code == 0
    assert "Created transaction 1" in result.output
    assert "Category: Groceries" in result.output

    result = _invoke(cli_runner, temp_db, "budget", "set", "Groceries", "300", "--month", "2024-01")
    assert result.exit_code == 0
    assert "available: $257.50" in result.output

    result = _invoke(cli_runner, temp_db, "budget", "show", "--month", "2024-01")
    assert result.exit_code == 0
    assert "Budget for January 2024" in result.output
    assert "$300.00" in result.output
    assert "$42.50" in result.output
    assert "$257.50" in result.output
    # 1000 - 42.50 + 500 - 200 = 1257.50 to budget, 300 budgeted
    to_be_budgeted = next(line for line in result.output.splitlines() if line.startswith("To be budgeted"))
    assert to_be_budgeted.split()[-1] == "$957.50"

    temp_db.disconnect()
    assert temp_db.get_account(sample_accounts["Checking"]).balance == Decimal("957.50")


def test_add_transfer(cli_runner, temp_db, sample_accounts):
    """Test a transfer between two accounts."""
    result = _invoke(
        cli_runner, temp_db,
        "add", "--account", "Checking", "--to-account", "Savings", "--date", "2024-01-15", "--amount", "-300",
    )
    assert result.exit_code == 0
    assert "Transfer to: Savings" in result.output

    temp_db.disconnect()
    assert temp_db.get_account(sample_accounts["Checking"]).balance == Decimal("700.00")
    assert temp_db.get_account(sample_accounts["Savings"]).balance == Decimal("800.00")


def test_add_errors(cli_runner, temp_db, sample_accounts):
    """Test invalid input to add."""
    result = _invoke(cli_runner, temp_db, "add", "--account", "Checking", "--amount", "0")
    assert result.exit_code == 1
    assert "non-zero" in result.output

    result = _invoke(cli_runner, temp_db, "add", "--account", "Checking", "--amount", "5", "--date", "xyzzy")
    assert result.exit_code == 1
    assert "Invalid date format" in result.output

    result = _invoke(
        cli_runner, temp_db, "add", "--account", "Checking", "--to-account", "Checking", "--amount", "-5"
    )
    assert result.exit_code == 1
    assert "same account" in result.output


def test_transaction_list_update_delete(
    cli_runner, temp_db, transaction_service, sample_plan, sample_accounts, sample_categories
):
    """Test listing, updating and deleting a transaction."""
    transaction_id = transaction_service.create_transaction(
        sample_plan.id, date(2024, 1, 15), Decimal("-42.50"), sample_accounts["Checking"],
        category_id=sample_categories["Groceries"], payee="Corner Market",
    )

    result = _invoke(cli_runner, temp_db, "transaction", "list", "--verbose")
    assert result.exit_code == 0
    assert "Found 1 transaction(s)" in result.output
    assert "Corner Market" in result.output
    assert "status: uncleared" in result.output
    assert "Outflow: $42.50" in result.output

    result = _invoke(
        cli_runner, temp_db,
        "transaction", "update", str(transaction_id), "--amount", "-50", "--category", "", "--flag", "red",
    )
    assert result.exit_code == 0

    temp_db.disconnect()
    txn = temp_db.get_transaction(transaction_id)
    assert txn.amount == Decimal("-50.00")
    assert txn.category_id is None
    assert temp_db.get_account(sample_accounts["Checking"]).balance == Decimal("950.00")
    assert temp_db.get_envelope(sample_plan.id, sample_categories["Groceries"], date(2024, 1, 1)).activity == Decimal("0")
    temp_db.disconnect()

    result = _invoke(cli_runner, temp_db, "transaction", "list", "--uncategorized")
    assert "Found 1 transaction(s)" in result.output

    result = _invoke(cli_runner, temp_db, "transaction", "delete", str(transaction_id), "--yes")
    assert result.exit_code == 0
    assert f"Deleted transaction {transaction_id}" in result.output

    temp_db.disconnect()
    assert temp_db.get_account(sample_accounts["Checking"]).balance == Decimal("1000.00")


def test_transaction_update_invalid_flag(cli_runner, temp_db, transaction_service, sample_plan, sample_accounts):
    """Test an unknown flag color."""
    transaction_id = transaction_service.create_transaction(
        sample_plan.id, date(2024, 1, 15), Decimal("-1"), sample_accounts["Checking"]
    )
    result = _invoke(cli_runner, temp_db, "transaction", "update", str(transaction_id), "--flag", "pink")
    assert result.exit_code == 1
    assert "Invalid flag" in result.output


def test_transaction_delete_missing(cli_runner, temp_db, sample_plan):
    """Test deleting an unknown transaction."""
    result = _invoke(cli_runner, temp_db, "transaction", "delete", "99", "--yes")
    assert result.exit_code == 1
    assert "Transaction 99 not found" in result.output


def test_transaction_commands_stay_in_active_plan(
    cli_runner, temp_db, plan_service, account_service, transaction_service, sample_plan
):
    """Test entries of another plan cannot be updated or deleted."""
    business = plan_service.create_plan("Business")
    cash = account_service.create_account(business, "Cash", AccountType.CASH, Decimal("100.00"))
    transaction_id = transaction_service.create_transaction(
        business, date(2024, 1, 15), Decimal("-30.00"), cash
    )

    result = _invoke(cli_runner, temp_db, "--plan", "Household", "transaction", "delete", str(transaction_id), "--yes")
    assert result.exit_code == 1
    assert f"Error: Transaction {transaction_id} not found" in result.output

    result = _invoke(
        cli_runner, temp_db, "--plan", "Household", "transaction", "update", str(transaction_id), "--amount", "-1"
    )
    assert result.exit_code == 1
    assert f"Transaction {transaction_id} not found" in result.output

    temp_db.disconnect()
    assert temp_db.get_transaction(transaction_id).amount == Decimal("-30.00")
    assert temp_db.get_account(cash).balance == Decimal("70.00")

    result = _invoke(cli_runner, temp_db, "--plan", "Business", "transaction", "delete", str(transaction_id), "--yes")
    assert result.exit_code == 0
    assert f"Deleted transaction {transaction_id}" in result.output


def test_template_list_and_preview(cli_runner, temp_db, sample_plan, sample_categories):
    """Test listing templates and previewing one."""
    result = _invoke(cli_runner, temp_db, "template", "list")
    assert result.exit_code == 0
    assert "50-30-20" in result.output
    assert "dave-ramsey" in result.output

    result = _invoke(cli_runner, temp_db, "template", "preview", "50-30-20", "5000", "--month", "2024-03")
    assert result.exit_code == 0
    assert "Unassigned: $501.00" in result.output
    assert "no categories for debt" in result.output

    temp_db.disconnect()
    assert temp_db.list_envelopes(sample_plan.id, date(2024, 3, 1)) == []


def test_template_preview_reports_over_allocation(
    cli_runner, temp_db, category_service, sample_plan, sample_categories
):
    """Test a template over 100% warns about the excess."""
    debt = category_service.create_group(sample_plan.id, "Debt Payments")
    category_service.create_category(debt, "Student Loan")
    category_service.create_category(debt, "Retirement")

    result = _invoke(cli_runner, temp_db, "template", "preview", "pay-yourself-first", "1000", "--month", "2024-03")
    assert result.exit_code == 0
    # needs 500 / 3 -> 167 each, wants 250, debt 100, savings 100, investments 150
    assert "Assigned:   $1,101.00" in result.output
    assert "Unassigned: $-101.00" in result.output
    assert "Warning: assigns $101.00 more than the target." in result.output


def test_template_apply(cli_runner, temp_db, budget_service, sample_plan, sample_accounts, sample_categories):
    """Test applying a template writes the budget."""
    result = _invoke(cli_runner, temp_db, "template", "apply", "50-30-20", "1300", "--month", "2024-03", "--yes")
    assert result.exit_code == 0
    assert "Applied 5 of 5 amounts." in result.output

    temp_db.disconnect()
    summary = budget_service.get_month_summary(sample_plan.id, date(2024, 3, 1))
    assert summary.total_budgeted == Decimal("1171.00")
    assert summary.to_be_budgeted == Decimal("129.00")


def test_template_unknown(cli_runner, temp_db, sample_plan):
    """Test an unknown template id."""
    result = _invoke(cli_runner, temp_db, "template", "preview", "90-10", "100")
    assert result.exit_code == 1
    assert "Template '90-10' not found" in result.output


def test_report_spending(cli_runner, temp_db, transaction_service, sample_plan, sample_accounts, sample_categories):
    """Test the spending report output."""
    transaction_service.create_transaction(
        sample_plan.id, date(2024, 1, 3), Decimal("-75"), sample_accounts["Checking"], category_id=sample_categories["Rent"]
    )
    transaction_service.create_transaction(
        sample_plan.id, date(2024, 1, 4), Decimal("-25"), sample_accounts["Visa"], category_id=sample_categories["Groceries"]
    )

    result = _invoke(cli_runner, temp_db, "report", "spending", "--month", "2024-01")
    assert result.exit_code == 0
    assert "Spending for January 2024" in result.output
    assert "Bills > Rent" in result.output
    assert " 75.0%" in result.output
    assert "$100.00" in result.output

    result = _invoke(cli_runner, temp_db, "report", "spending", "--month", "2024-01", "--by-group", "--account", "Visa")
    assert "Everyday Expenses" in result.output
    assert "Bills" not in result.output

    result = _invoke(cli_runner, temp_db, "report", "spending", "--month", "2023-12")
    assert "No spending found." in result.output
