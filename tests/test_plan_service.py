"""Tests for plan management."""

import pytest
from datetime import date
from decimal import Decimal
from budgetit.domain.entities import AccountType
from budgetit.domain.errors import ConflictError, DependencyError, NotFoundError, ValidationError


def test_create_and_list(plan_service):
    """Test creating plans and the default plan."""
    assert plan_service.default_plan() is None

    first = plan_service.create_plan("Household", description="Shared budget")
    second = plan_service.create_plan("Travel", currency="EUR")

    plans = plan_service.list_plans()
    assert [p.id for p in plans] == [first, second]
    assert plans[0].description == "Shared budget"
    assert plans[1].currency == "EUR"
    assert plan_service.default_plan().id == first


def test_create_validation(plan_service):
    """Test blank and duplicate names."""
    plan_service.create_plan("Household")
    with pytest.raises(ConflictError):
        plan_service.create_plan("Household")
    with pytest.raises(ValidationError):
        plan_service.create_plan("")


def test_update_plan(plan_service, sample_plan):
    """Test renaming a plan."""
    plan_service.update_plan(sample_plan.id, name="Home", description="Our money")

    plan = plan_service.get_plan(sample_plan.id)
    assert (plan.name, plan.description) == ("Home", "Our money")

    other = plan_service.create_plan("Other")
    with pytest.raises(ConflictError):
        plan_service.update_plan(other, name="Home")
    with pytest.raises(NotFoundError):
        plan_service.update_plan(9999, name="X")


def test_delete_only_plan_blocked(plan_service, sample_plan):
    """Test the last plan cannot be deleted."""
    with pytest.raises(DependencyError):
        plan_service.delete_plan(sample_plan.id)


def test_delete_plan_cascades(
    temp_db, plan_service, account_service, category_service, transaction_service, envelope_store, sample_plan
):
    """Test deleting a plan removes everything it owns."""
    keep = plan_service.create_plan("Keep")
    account_id = account_service.create_account(sample_plan.id, "Cash", AccountType.CASH, Decimal("10"))
    category_id = category_service.create_category(category_service.create_group(sample_plan.id, "G"), "C")
    transaction_service.create_transaction(sample_plan.id, date(2024, 1, 1), Decimal("-1"), account_id, category_id=category_id)

    plan_service.delete_plan(sample_plan.id)

    assert plan_service.get_plan(sample_plan.id) is None
    assert account_service.get_account(account_id) is None
    assert category_service.get_category(category_id) is None
    assert envelope_store.get_envelope(sample_plan.id, category_id, date(2024, 1, 1)) is None
    assert [p.id for p in plan_service.list_plans()] == [keep]
