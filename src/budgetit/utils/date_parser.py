"""Date and budget-month parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_YEAR_MONTH = re.compile(r"^(\d{4})-(\d{1,2})$")


def month_start(value: date) -> date:
    """Truncate a date to the first day of its month."""
    return value.replace(day=1)


def month_end(value: date) -> date:
    """Return the last day of the month containing ``value``."""
    return month_start(value) + relativedelta(months=1) - timedelta(days=1)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Handle "last/this/next" + time period
    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return month_start(today - relativedelta(months=1))
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return month_start(today)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return month_start(today + relativedelta(months=1))
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        elif period == "week":
            return today + timedelta(days=(7 - today.weekday()))

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str | None) -> date:
    """Parse a budget month into the first day of that month.

    Accepts "YYYY-MM", anything ``parse_date`` understands, or None for the
    current month.

    Raises:
        ValueError: If the string cannot be parsed
    """
    if month_str is None or not month_str.strip():
        return month_start(date.today())

    match = _YEAR_MONTH.match(month_str.strip())
    if match:
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month '{month_str}'")
        return date(year, month, 1)

    return month_start(parse_date(month_str))
