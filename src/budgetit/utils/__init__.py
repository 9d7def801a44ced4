"""Utility functions for budgetit."""

from budgetit.utils.date_parser import parse_date, parse_month
from budgetit.utils.amount_parser import parse_amount
from budgetit.utils.account_resolver import resolve_account
from budgetit.utils.plan_resolver import resolve_plan

__all__ = ["parse_date", "parse_month", "parse_amount", "resolve_account", "resolve_plan"]
