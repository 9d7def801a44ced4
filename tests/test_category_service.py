"""Tests for category groups and categories."""

import pytest
from budgetit.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_group_and_category(category_service, sample_plan):
    """Test creating a group with categories in order."""
    group_id = category_service.create_group(sample_plan.id, "Bills")
    first = category_service.create_category(group_id, "Rent")
    second = category_service.create_category(group_id, "Electric")

    categories = category_service.list_categories(sample_plan.id)
    assert [c.id for c in categories] == [first, second]
    assert [c.sort_order for c in categories] == [0, 1]
    assert category_service.get_group(group_id).plan_id == sample_plan.id


def test_duplicate_names(category_service, sample_plan):
    """Test names are unique per plan for groups and per group for categories."""
    group_id = category_service.create_group(sample_plan.id, "Bills")
    category_service.create_category(group_id, "Rent")

    with pytest.raises(ConflictError):
        category_service.create_group(sample_plan.id, "Bills")
    with pytest.raises(ConflictError):
        category_service.create_category(group_id, "Rent")

    other_group = category_service.create_group(sample_plan.id, "Other")
    category_service.create_category(other_group, "Rent")


def test_blank_and_missing(category_service, sample_plan):
    """Test blank names and unknown parents."""
    with pytest.raises(ValidationError):
        category_service.create_group(sample_plan.id, "   ")
    with pytest.raises(NotFoundError):
        category_service.create_group(9999, "Bills")
    with pytest.raises(NotFoundError):
        category_service.create_category(9999, "Rent")


def test_get_category_by_path(category_service, sample_plan, sample_categories):
    """Test lookup by path and by unique name."""
    assert category_service.get_category_by_path(sample_plan.id, "Bills > Rent").id == sample_categories["Rent"]
    assert category_service.get_category_by_path(sample_plan.id, "groceries").id == sample_categories["Groceries"]
    assert category_service.get_category_by_path(sample_plan.id, "Bills > Groceries") is None
    assert category_service.get_category_by_path(sample_plan.id, "Nope") is None


def test_get_category_by_path_ambiguous(category_service, sample_plan, sample_categories):
    """Test a bare name shared by two groups does not resolve."""
    group_id = category_service.create_group(sample_plan.id, "Vacation")
    category_service.create_category(group_id, "Groceries")

    assert category_service.get_category_by_path(sample_plan.id, "Groceries") is None
    assert category_service.get_category_by_path(sample_plan.id, "Vacation > Groceries") is not None


def test_rename(category_service, sample_plan, sample_categories):
    """Test renaming groups and categories."""
    rent = sample_categories["Rent"]
    category_service.rename_category(rent, "Housing")
    assert category_service.get_category(rent).name == "Housing"

    with pytest.raises(ConflictError):
        category_service.rename_category(rent, "Electric")

    group_id = category_service.get_category(rent).group_id
    category_service.rename_group(group_id, "Fixed Costs")
    assert category_service.get_group(group_id).name == "Fixed Costs"
    with pytest.raises(ConflictError):
        category_service.rename_group(group_id, "Everyday Expenses")


def test_hide_and_tree(category_service, sample_plan, sample_categories):
    """Test hidden items are left out of filtered listings."""
    category_service.set_category_hidden(sample_categories["Dining Out"], True)
    goals = category_service.get_category(sample_categories["Emergency Fund"]).group_id
    category_service.set_group_hidden(goals, True)

    visible = {c.name for c in category_service.list_categories(sample_plan.id, include_hidden=False)}
    assert visible == {"Rent", "Electric", "Groceries"}
    assert len(category_service.list_categories(sample_plan.id)) == 5

    tree = category_service.get_category_tree(sample_plan.id, include_hidden=False)
    assert [node["group"].name for node in tree] == ["Bills", "Everyday Expenses"]
    assert [c.name for c in tree[1]["categories"]] == ["Groceries"]

    category_service.set_category_hidden(sample_categories["Dining Out"], False)
    assert not category_service.get_category(sample_categories["Dining Out"]).hidden


def test_move_category(category_service, sample_plan, sample_categories):
    """Test moving appends the category to the target group."""
    electric = sample_categories["Electric"]
    target = category_service.get_category(sample_categories["Groceries"]).group_id

    category_service.move_category(electric, target)

    moved = category_service.get_category(electric)
    assert moved.group_id == target
    assert moved.sort_order == 2


def test_move_category_other_plan(category_service, plan_service, sample_plan, sample_categories):
    """Test categories cannot move between plans."""
    other = plan_service.create_plan("Other")
    foreign_group = category_service.create_group(other, "Misc")

    with pytest.raises(ValidationError):
        category_service.move_category(sample_categories["Rent"], foreign_group)


def test_require_category_checks_plan(category_service, plan_service, sample_plan, sample_categories):
    """Test plan scoping of require_category."""
    other = plan_service.create_plan("Other")
    assert category_service.require_category(sample_categories["Rent"], sample_plan.id).name == "Rent"
    with pytest.raises(NotFoundError):
        category_service.require_category(sample_categories["Rent"], other)


def test_seed_categories_is_idempotent(category_service, sample_plan):
    """Test seeding only creates missing entries."""
    groups = [("Bills", ["Rent", "Water"]), ("Fun", ["Games"])]

    assert category_service.seed_categories(sample_plan.id, groups) == 3
    assert category_service.seed_categories(sample_plan.id, groups) == 0
    assert category_service.seed_categories(sample_plan.id, [("Bills", ["Rent", "Phone"])]) == 1
    assert len(category_service.list_groups(sample_plan.id)) == 2
