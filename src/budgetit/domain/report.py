"""Spending report domain service."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Any, Optional, TYPE_CHECKING

from budgetit.domain.entities import SpendingLine, SpendingReport
from budgetit.utils.date_parser import month_end, month_start

if TYPE_CHECKING:
    from budgetit.database.base import Database

UNCATEGORIZED = "Uncategorized"


class ReportService:
    """Builds spending reports from a plan's transactions."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def spending_report(
        self,
        plan_id: int,
        month: date,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> SpendingReport:
        """Summarize a month's spending by category and by category group.

        Spending is every negative, non-transfer transaction in the month,
        counted as a positive amount. Lines are sorted largest first.

        Args:
            plan_id: Plan ID
            month: Any date in the month to report
            account_id: Optional source account filter
            category_id: Optional category filter

        Returns:
            SpendingReport for the month
        """
        start = month_start(month)
        transactions = self.db.list_transactions(
            plan_id=plan_id,
            start_date=start,
            end_date=month_end(start),
            category_id=category_id,
        )
        spending = [
            txn for txn in transactions
            if txn.amount < 0
            and not txn.is_transfer
            and (account_id is None or txn.from_account_id == account_id)
        ]

        categories = {c.id: c for c in self.db.list_categories(plan_id)}
        groups = {g.id: g for g in self.db.list_category_groups(plan_id)}

        by_category: dict[Optional[int], dict[str, Any]] = defaultdict(
            lambda: {"amount": Decimal("0"), "count": 0}
        )
        by_group: dict[Optional[int], dict[str, Any]] = defaultdict(
            lambda: {"amount": Decimal("0"), "count": 0}
        )

        total = Decimal("0")
        for txn in spending:
            amount = -txn.amount
            total += amount
            category = categories.get(txn.category_id)
            group_id = category.group_id if category is not None else None

            by_category[txn.category_id]["amount"] += amount
            by_category[txn.category_id]["count"] += 1
            by_group[group_id]["amount"] += amount
            by_group[group_id]["count"] += 1

        category_lines = []
        for cat_id, data in by_category.items():
            category = categories.get(cat_id)
            group = groups.get(category.group_id) if category is not None else None
            category_lines.append(
                SpendingLine(
                    id=cat_id,
                    name=category.name if category is not None else UNCATEGORIZED,
                    amount=data["amount"],
                    count=data["count"],
                    group_name=group.name if group is not None else UNCATEGORIZED,
                )
            )

        group_lines = [
            SpendingLine(
                id=group_id,
                name=groups[group_id].name if group_id in groups else UNCATEGORIZED,
                amount=data["amount"],
                count=data["count"],
            )
            for group_id, data in by_group.items()
        ]

        return SpendingReport(
            month=start,
            total=total,
            by_category=tuple(sorted(category_lines, key=lambda line: line.amount, reverse=True)),
            by_group=tuple(sorted(group_lines, key=lambda line: line.amount, reverse=True)),
        )
