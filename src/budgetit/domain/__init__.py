"""Domain layer for budgetit application."""

from budgetit.domain.plan import PlanService
from budgetit.domain.account import AccountService
from budgetit.domain.account_ledger import AccountLedger
from budgetit.domain.category import CategoryService
from budgetit.domain.envelope import EnvelopeStore
from budgetit.domain.effects import EntryEffectApplier, ReversalCoordinator
from budgetit.domain.transaction import TransactionService
from budgetit.domain.budget import BudgetService, calculate_plan_summary
from budgetit.domain.allocation import AllocationService, classify_category
from budgetit.domain.report import ReportService

__all__ = [
    "PlanService",
    "AccountService",
    "AccountLedger",
    "CategoryService",
    "EnvelopeStore",
    "EntryEffectApplier",
    "ReversalCoordinator",
    "TransactionService",
    "BudgetService",
    "calculate_plan_summary",
    "AllocationService",
    "classify_category",
    "ReportService",
]
