"""Shared pytest fixtures for budgetit tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from budgetit.database.factories import create_sqlite_database
from budgetit.domain.account import AccountService
from budgetit.domain.allocation import AllocationService
from budgetit.domain.budget import BudgetService
from budgetit.domain.category import CategoryService
from budgetit.domain.entities import AccountType
from budgetit.domain.envelope import EnvelopeStore
from budgetit.domain.plan import PlanService
from budgetit.domain.report import ReportService
from budgetit.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def plan_service(temp_db):
    """Create a PlanService with a temporary database."""
    return PlanService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def envelope_store(temp_db):
    """Create an EnvelopeStore with a temporary database."""
    return EnvelopeStore(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def allocation_service(temp_db):
    """Create an AllocationService with a temporary database."""
    return AllocationService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def sample_plan(plan_service):
    """Create a sample plan for testing."""
    plan_id = plan_service.create_plan("Household")
    return plan_service.get_plan(plan_id)


@pytest.fixture
def sample_accounts(account_service, sample_plan):
    """Create checking, savings and credit card accounts.

    Returns a dict of account name to account ID.
    """
    return {
        "Checking": account_service.create_account(
            sample_plan.id, "Checking", AccountType.CHECKING, Decimal("1000.00")
        ),
        "Savings": account_service.create_account(
            sample_plan.id, "Savings", AccountType.SAVINGS, Decimal("500.00")
        ),
        "Visa": account_service.create_account(
            sample_plan.id, "Visa", AccountType.CREDIT_CARD, Decimal("200.00")
        ),
    }


@pytest.fixture
def sample_categories(category_service, sample_plan):
    """Create a few groups and categories.

    Returns a dict of category name to category ID.
    """
    bills = category_service.create_group(sample_plan.id, "Bills")
    everyday = category_service.create_group(sample_plan.id, "Everyday Expenses")
    goals = category_service.create_group(sample_plan.id, "Savings Goals")
    return {
        "Rent": category_service.create_category(bills, "Rent"),
        "Electric": category_service.create_category(bills, "Electric"),
        "Groceries": category_service.create_category(everyday, "Groceries"),
        "Dining Out": category_service.create_category(everyday, "Dining Out"),
        "Emergency Fund": category_service.create_category(goals, "Emergency Fund"),
    }


@pytest.fixture
def jan():
    """A date in January 2024."""
    return date(2024, 1, 15)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
