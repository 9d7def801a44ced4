"""Tests for the spending report."""

from datetime import date
from decimal import Decimal


def _spend(transaction_service, plan_id, when, amount, account_id, category_id=None, **kwargs):
    return transaction_service.create_transaction(
        plan_id, when, Decimal(amount), account_id, category_id=category_id, **kwargs
    )


def test_spending_report_groups(report_service, transaction_service, sample_plan, sample_accounts, sample_categories, jan):
    """Test totals by category and by group, largest first."""
    checking, visa = sample_accounts["Checking"], sample_accounts["Visa"]
    _spend(transaction_service, sample_plan.id, jan, "-1200", checking, sample_categories["Rent"])
    _spend(transaction_service, sample_plan.id, jan, "-75", checking, sample_categories["Electric"])
    _spend(transaction_service, sample_plan.id, jan, "-42.50", visa, sample_categories["Groceries"])
    _spend(transaction_service, sample_plan.id, jan, "-17.50", checking, sample_categories["Groceries"])
    _spend(transaction_service, sample_plan.id, jan, "-9.99", checking)

    report = report_service.spending_report(sample_plan.id, jan)

    assert report.month == date(2024, 1, 1)
    assert report.total == Decimal("1344.99")
    assert [(line.name, line.amount, line.count) for line in report.by_category] == [
        ("Rent", Decimal("1200.00"), 1),
        ("Electric", Decimal("75.00"), 1),
        ("Groceries", Decimal("60.00"), 2),
        ("Uncategorized", Decimal("9.99"), 1),
    ]
    groups = {line.name: line.amount for line in report.by_group}
    assert groups == {
        "Bills": Decimal("1275.00"),
        "Everyday Expenses": Decimal("60.00"),
        "Uncategorized": Decimal("9.99"),
    }
    assert report.by_group[0].name == "Bills"


def test_spending_report_excludes_inflows_transfers_and_other_months(
    report_service, transaction_service, sample_plan, sample_accounts, sample_categories, jan
):
    """Test only negative, non-transfer entries of the month count."""
    checking, savings = sample_accounts["Checking"], sample_accounts["Savings"]
    _spend(transaction_service, sample_plan.id, jan, "2500", checking)
    _spend(transaction_service, sample_plan.id, jan, "-300", checking, to_account_id=savings)
    _spend(transaction_service, sample_plan.id, date(2024, 2, 1), "-80", checking, sample_categories["Dining Out"])
    _spend(transaction_service, sample_plan.id, date(2024, 1, 31), "-20", checking, sample_categories["Dining Out"])

    report = report_service.spending_report(sample_plan.id, jan)

    assert report.total == Decimal("20.00")
    assert [line.name for line in report.by_category] == ["Dining Out"]
    assert report.by_category[0].group_name == "Everyday Expenses"


def test_spending_report_account_filter(report_service, transaction_service, sample_plan, sample_accounts, sample_categories, jan):
    """Test the optional source account filter."""
    _spend(transaction_service, sample_plan.id, jan, "-10", sample_accounts["Checking"], sample_categories["Groceries"])
    _spend(transaction_service, sample_plan.id, jan, "-25", sample_accounts["Visa"], sample_categories["Groceries"])

    report = report_service.spending_report(sample_plan.id, jan, account_id=sample_accounts["Visa"])

    assert report.total == Decimal("25.00")
    assert report.by_category[0].count == 1


def test_spending_report_empty(report_service, sample_plan, jan):
    """Test a month without spending."""
    report = report_service.spending_report(sample_plan.id, jan)
    assert report.total == Decimal("0")
    assert report.by_category == ()
    assert report.by_group == ()
