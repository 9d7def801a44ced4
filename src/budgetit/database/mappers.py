"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so string-typed columns become
enums and numeric columns become Decimals in exactly one place.
"""

from decimal import Decimal

from budgetit.domain import entities as domain
from budgetit.database.models import (
    Plan as ORMPlan,
    Account as ORMAccount,
    CategoryGroup as ORMCategoryGroup,
    Category as ORMCategory,
    Transaction as ORMTransaction,
    Envelope as ORMEnvelope,
)


def _money(value) -> Decimal:
    return Decimal(value if value is not None else 0).quantize(Decimal("0.01"))


def plan_to_domain(orm_plan: ORMPlan) -> domain.Plan:
    """Convert SQLAlchemy Plan model to domain Plan entity."""
    return domain.Plan(
        id=orm_plan.id,
        name=orm_plan.name,
        description=orm_plan.description,
        currency=orm_plan.currency,
        created_at=orm_plan.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        plan_id=orm_account.plan_id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        balance=_money(orm_account.balance),
        on_budget=orm_account.on_budget,
        closed=orm_account.closed,
        created_at=orm_account.created_at,
    )


def category_group_to_domain(orm_group: ORMCategoryGroup) -> domain.CategoryGroup:
    """Convert SQLAlchemy CategoryGroup model to domain CategoryGroup entity."""
    return domain.CategoryGroup(
        id=orm_group.id,
        plan_id=orm_group.plan_id,
        name=orm_group.name,
        sort_order=orm_group.sort_order,
        hidden=orm_group.hidden,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        group_id=orm_category.group_id,
        name=orm_category.name,
        sort_order=orm_category.sort_order,
        hidden=orm_category.hidden,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        plan_id=orm_transaction.plan_id,
        date=orm_transaction.date,
        amount=_money(orm_transaction.amount),
        payee=orm_transaction.payee,
        memo=orm_transaction.memo,
        from_account_id=orm_transaction.from_account_id,
        to_account_id=orm_transaction.to_account_id,
        category_id=orm_transaction.category_id,
        status=domain.ClearingStatus(orm_transaction.status),
        flag=domain.FlagColor(orm_transaction.flag) if orm_transaction.flag else None,
        created_at=orm_transaction.created_at,
    )


def envelope_to_domain(orm_envelope: ORMEnvelope) -> domain.Envelope:
    """Convert SQLAlchemy Envelope model to domain Envelope entity."""
    return domain.Envelope(
        plan_id=orm_envelope.plan_id,
        category_id=orm_envelope.category_id,
        month=orm_envelope.month,
        budgeted=_money(orm_envelope.budgeted),
        activity=_money(orm_envelope.activity),
        available=_money(orm_envelope.available),
    )
