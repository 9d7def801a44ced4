"""Quick-budget templates: classify categories and distribute a target amount."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, TYPE_CHECKING

from budgetit.domain.budget import BudgetService
from budgetit.domain.entities import (
    AllocationLine,
    AllocationPreview,
    AllocationResult,
    AllocationTemplate,
    Bucket,
)
from budgetit.domain.envelope import EnvelopeStore
from budgetit.domain.errors import (
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
    category_not_found,
    plan_not_found,
    template_not_found,
)
from budgetit.utils.date_parser import month_start

if TYPE_CHECKING:
    from budgetit.database.base import Database

logger = logging.getLogger(__name__)

# Evaluated in order; the first bucket with a matching keyword wins.
CLASSIFICATION_RULES: tuple[tuple[Bucket, tuple[str, ...]], ...] = (
    (
        Bucket.INCOME,
        ("salary", "income", "paycheck", "wages", "bonus", "freelance", "side hustle", "business income"),
    ),
    (
        Bucket.DEBT,
        (
            "debt", "loan", "payment", "credit card", "mortgage", "student loan",
            "car payment", "interest", "minimum payment",
        ),
    ),
    (
        Bucket.SAVINGS,
        ("emergency", "saving", "fund", "rainy day", "reserve", "buffer"),
    ),
    (
        Bucket.INVESTMENTS,
        (
            "investment", "retirement", "401k", "ira", "roth", "stock",
            "portfolio", "pension", "long-term",
        ),
    ),
    (
        Bucket.NEEDS,
        (
            "rent", "mortgage", "utilities", "groceries", "food", "gas", "insurance",
            "medical", "health", "transportation", "phone", "internet", "childcare",
            "medication", "housing", "electric", "water", "heating", "car maintenance",
            "commute",
        ),
    ),
)

DEFAULT_BUCKET = Bucket.WANTS

BUCKET_ORDER = (
    Bucket.NEEDS,
    Bucket.WANTS,
    Bucket.DEBT,
    Bucket.SAVINGS,
    Bucket.INVESTMENTS,
    Bucket.INCOME,
)


def _template(template_id: str, name: str, description: str, **percentages: int) -> AllocationTemplate:
    breakdown = {bucket: percentages.get(bucket.value, 0) for bucket in BUCKET_ORDER}
    return AllocationTemplate(id=template_id, name=name, description=description, breakdown=breakdown)


TEMPLATES: dict[str, AllocationTemplate] = {
    t.id: t
    for t in (
        _template(
            "50-30-20", "50/30/20 Rule", "Most popular budgeting method",
            needs=50, wants=30, debt=10, savings=10,
        ),
        _template(
            "60-20-20", "60/20/20 Rule", "Conservative approach with higher needs allocation",
            needs=60, wants=20, debt=10, savings=10,
        ),
        _template(
            "pay-yourself-first", "Pay Yourself First", "Prioritize savings and investments",
            needs=50, wants=25, debt=10, savings=10, investments=15,
        ),
        _template(
            "dave-ramsey", "Dave Ramsey's Method", "Focus on debt elimination",
            needs=50, wants=20, debt=20, savings=10,
        ),
        _template(
            "balanced", "Balanced Approach", "Even distribution across all areas",
            needs=45, wants=25, debt=15, savings=10, investments=15,
        ),
    )
}


def classify_category(name: str) -> Bucket:
    """Map a category name to its bucket by keyword."""
    lowered = name.lower()
    for bucket, keywords in CLASSIFICATION_RULES:
        if any(keyword in lowered for keyword in keywords):
            return bucket
    return DEFAULT_BUCKET


def distribute(
    template: AllocationTemplate,
    income: Decimal,
    categories: Iterable[tuple[int, str, Decimal]],
    month: date,
) -> AllocationPreview:
    """Spread ``income`` across categories according to ``template``.

    Each bucket with a positive percentage gets ``income * pct / 100``,
    split evenly over its categories and rounded to whole units (half up).
    Buckets with a percentage but no categories are reported in
    ``empty_buckets`` and their share stays unassigned. Templates whose
    percentages add up to more than 100 over-assign, which shows up as a
    negative ``unassigned``.

    Args:
        template: Allocation template
        income: Target amount to distribute
        categories: (category_id, name, current_budgeted) in display order
        month: Budget month the preview is for
    """
    by_bucket: dict[Bucket, list[tuple[int, str, Decimal]]] = {bucket: [] for bucket in BUCKET_ORDER}
    for category_id, name, current in categories:
        by_bucket[classify_category(name)].append((category_id, name, current))

    lines = []
    empty = []
    for bucket in BUCKET_ORDER:
        percentage = template.breakdown.get(bucket, 0)
        if percentage <= 0:
            continue
        members = by_bucket[bucket]
        if not members:
            empty.append(bucket)
            continue

        bucket_total = income * Decimal(percentage) / Decimal(100)
        per_category = (bucket_total / len(members)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        for category_id, name, current in members:
            lines.append(
                AllocationLine(
                    category_id=category_id,
                    category_name=name,
                    bucket=bucket,
                    current_budgeted=current,
                    new_budgeted=per_category,
                )
            )

    return AllocationPreview(
        template_id=template.id,
        month=month_start(month),
        target=income,
        lines=tuple(lines),
        empty_buckets=tuple(empty),
    )


class AllocationService:
    """Builds and applies template allocations for a plan's month."""

    def __init__(self, db: Database):
        """Initialize allocation service.

        Args:
            db: Database instance
        """
        self.db = db
        self.envelopes = EnvelopeStore(db)
        self.budget = BudgetService(db)

    def list_templates(self) -> list[AllocationTemplate]:
        """List the available templates."""
        return list(TEMPLATES.values())

    def get_template(self, template_id: str) -> AllocationTemplate:
        """Get a template by ID.

        Raises:
            NotFoundError: If no template has this ID
        """
        template = TEMPLATES.get(template_id)
        if template is None:
            raise NotFoundError(template_not_found(template_id))
        return template

    def preview(self, plan_id: int, template_id: str, income: Decimal, month: date) -> AllocationPreview:
        """Compute the budgeted amounts a template would assign.

        Only visible categories take part. Nothing is written.

        Raises:
            NotFoundError: If the template or plan doesn't exist
            ValidationError: If income is negative
        """
        template = self.get_template(template_id)
        if self.db.get_plan(plan_id) is None:
            raise NotFoundError(plan_not_found(plan_id))
        income = Decimal(income)
        if income < 0:
            raise ValidationError("Income must not be negative")

        rows = self.budget.get_envelope_rows(plan_id, month)
        categories = [(row.category_id, row.category_name, row.budgeted) for row in rows if not row.hidden]
        return distribute(template, income, categories, month)

    def apply(self, plan_id: int, template_id: str, income: Decimal, month: date) -> AllocationResult:
        """Preview a template and write its amounts.

        Returns:
            AllocationResult listing written and failed pairs and the
            recomputed plan summary
        """
        preview = self.preview(plan_id, template_id, income, month)
        if preview.empty_buckets:
            logger.info(
                "Template %s left %s unassigned (no categories for %s)",
                template_id,
                preview.unassigned,
                ", ".join(b.value for b in preview.empty_buckets),
            )
        assignments = [(line.category_id, line.new_budgeted) for line in preview.lines]
        return self.apply_assignments(plan_id, month, assignments)

    def apply_assignments(
        self, plan_id: int, month: date, assignments: Iterable[tuple[int, Decimal]]
    ) -> AllocationResult:
        """Write budgeted amounts one category at a time.

        Each write stands alone: a failed pair is logged and reported, and
        pairs already written are kept.
        """
        month = month_start(month)
        plan_categories = {c.id for c in self.db.list_categories(plan_id)}

        succeeded = []
        failed = []
        for category_id, amount in assignments:
            try:
                if category_id not in plan_categories:
                    raise NotFoundError(category_not_found(category_id))
                self.envelopes.set_budgeted(plan_id, category_id, month, Decimal(amount))
            except (StorageError, DomainError):
                logger.warning(
                    "Failed to budget %s for category %s in %s", amount, category_id, month, exc_info=True
                )
                failed.append((category_id, Decimal(amount)))
            else:
                succeeded.append((category_id, Decimal(amount)))

        logger.info(
            "Applied %d budget assignments for plan %s in %s (%d failed)",
            len(succeeded),
            plan_id,
            month.strftime("%Y-%m"),
            len(failed),
        )
        return AllocationResult(
            month=month,
            succeeded=tuple(succeeded),
            failed=tuple(failed),
            summary=self.budget.get_month_summary(plan_id, month),
        )
