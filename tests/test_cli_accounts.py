"""Tests for plan and account commands."""

from decimal import Decimal
from budgetit.cli.main import cli


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_plan_create_and_list(cli_runner, temp_db):
    """Test creating plans and listing them with the default marked."""
    result = _invoke(cli_runner, temp_db, "plan", "create", "Household", "--description", "Shared")
    assert result.exit_code == 0
    assert "Created plan 'Household' (ID: 1)" in result.output

    _invoke(cli_runner, temp_db, "plan", "create", "Travel", "--currency", "EUR")
    result = _invoke(cli_runner, temp_db, "plan", "list")

    assert result.exit_code == 0
    assert "* ID:   1 | Household" in result.output
    assert "Travel" in result.output
    assert "EUR" in result.output


def test_plan_create_duplicate(cli_runner, temp_db, sample_plan):
    """Test duplicate plan names are reported."""
    result = _invoke(cli_runner, temp_db, "plan", "create", "Household")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_plan_rename_and_delete(cli_runner, temp_db, sample_plan):
    """Test renaming a plan and deleting a second one."""
    result = _invoke(cli_runner, temp_db, "plan", "rename", "Household", "Home")
    assert result.exit_code == 0

    _invoke(cli_runner, temp_db, "plan", "create", "Scratch")
    result = _invoke(cli_runner, temp_db, "plan", "delete", "Scratch", "--yes")
    assert result.exit_code == 0
    assert "Deleted plan 'Scratch'" in result.output

    result = _invoke(cli_runner, temp_db, "plan", "delete", "Home", "--yes")
    assert result.exit_code == 1
    assert "only plan" in result.output


def test_plan_delete_cancelled(cli_runner, temp_db, sample_plan):
    """Test answering no to the confirmation prompt."""
    _invoke(cli_runner, temp_db, "plan", "create", "Scratch")
    result = _invoke(cli_runner, temp_db, "plan", "delete", "Scratch", input="n\n")
    assert "Deletion cancelled." in result.output


def test_commands_need_a_plan(cli_runner, temp_db):
    """Test a helpful error when no plan exists."""
    result = _invoke(cli_runner, temp_db, "account", "list")
    assert result.exit_code == 1
    assert "No plan found" in result.output


def test_unknown_plan_option(cli_runner, temp_db, sample_plan):
    """Test --plan with an unknown name."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--plan", "Nope", "account", "list"])
    assert result.exit_code == 1
    assert "Plan 'Nope' not found" in result.output


def test_account_create_and_list(cli_runner, temp_db, sample_plan):
    """Test creating asset and liability accounts."""
    result = _invoke(cli_runner, temp_db, "account", "create", "Checking", "--balance", "1,250.00")
    assert result.exit_code == 0
    assert "Created account 'Checking' (ID: 1)" in result.output
    assert "$1,250.00" in result.output

    result = _invoke(cli_runner, temp_db, "account", "create", "Visa", "--type", "credit_card", "--balance", "300")
    assert result.exit_code == 0
    assert "$-300.00" in result.output

    result = _invoke(cli_runner, temp_db, "account", "list")
    assert result.exit_code == 0
    assert "Checking" in result.output
    assert "credit_card" in result.output


def test_account_list_empty(cli_runner, temp_db, sample_plan):
    """Test listing accounts when none exist."""
    result = _invoke(cli_runner, temp_db, "account", "list")
    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_account_create_invalid_balance(cli_runner, temp_db, sample_plan):
    """Test a bad opening balance."""
    result = _invoke(cli_runner, temp_db, "account", "create", "Checking", "--balance", "lots")
    assert result.exit_code == 1
    assert "Invalid amount format" in result.output


def test_account_update_close_reopen(cli_runner, temp_db, sample_accounts):
    """Test updating and closing an account by name."""
    result = _invoke(cli_runner, temp_db, "account", "update", "savings", "--name", "Rainy Day", "--off-budget")
    assert result.exit_code == 0

    result = _invoke(cli_runner, temp_db, "account", "close", "Rainy Day")
    assert result.exit_code == 0
    assert "Warning: closing account with a balance" in result.output

    result = _invoke(cli_runner, temp_db, "account", "list")
    assert "(off-budget, closed)" in result.output

    result = _invoke(cli_runner, temp_db, "account", "reopen", str(sample_accounts["Savings"]))
    assert result.exit_code == 0
    assert "Reopened account 'Rainy Day'" in result.output


def test_account_delete(cli_runner, temp_db, transaction_service, sample_plan, sample_accounts, jan):
    """Test deletion is blocked by transactions."""
    transaction_service.create_transaction(sample_plan.id, jan, Decimal("-5"), sample_accounts["Checking"])

    result = _invoke(cli_runner, temp_db, "account", "delete", "Checking", "--yes")
    assert result.exit_code == 1
    assert "Cannot delete account" in result.output

    result = _invoke(cli_runner, temp_db, "account", "delete", "Savings", input="y\n")
    assert result.exit_code == 0
    assert "Deleted account 'Savings'" in result.output


def test_account_not_found(cli_runner, temp_db, sample_plan):
    """Test resolving an unknown account."""
    result = _invoke(cli_runner, temp_db, "account", "close", "Nope")
    assert result.exit_code == 1
    assert "Account 'Nope' not found" in result.output


def test_account_summary(cli_runner, temp_db, sample_accounts):
    """Test the net worth summary."""
    result = _invoke(cli_runner, temp_db, "account", "summary")
    assert result.exit_code == 0
    lines = {line.split("  ")[0].strip(): line for line in result.output.splitlines() if line.strip()}
    assert lines["Assets"].split()[1] == "$1,500.00"
    assert lines["Liabilities"].split()[1] == "$200.00"
    assert lines["Net worth"].split()[-1] == "$1,300.00"


def test_plan_and_log_level_from_environment(cli_runner, temp_db, plan_service, monkeypatch):
    """Test BUDGETIT_PLAN and BUDGETIT_LOG_LEVEL are honoured."""
    plan_service.create_plan("Household")
    plan_service.create_plan("Travel")
    monkeypatch.setenv("BUDGETIT_PLAN", "Travel")
    monkeypatch.setenv("BUDGETIT_LOG_LEVEL", "debug")

    result = _invoke(cli_runner, temp_db, "account", "create", "Wallet", "--type", "cash")
    assert result.exit_code == 0

    temp_db.disconnect()
    travel = plan_service.list_plans()[1]
    assert [a.name for a in temp_db.list_accounts(travel.id)] == ["Wallet"]
