"""
Date Utilities
==============

Calendar arithmetic for the trailing 365-day window.

All functions take an optional ``today`` so results are reproducible in
tests; it defaults to the local current date.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Optional, Union

# Length of the trailing contribution window
WINDOW_DAYS = 365


def _resolve_today(today: Optional[date]) -> date:
    if today is None:
        return date.today()
    if isinstance(today, datetime):
        return today.date()
    return today


def one_year_ago(today: Optional[date] = None) -> date:
    """Date ``WINDOW_DAYS`` days before ``today`` (grid week 0 anchor)."""
    return _resolve_today(today) - timedelta(days=WINDOW_DAYS)


def format_date(value: date) -> str:
    """Format as ISO YYYY-MM-DD."""
    return value.isoformat()


def parse_date(date_string: Union[str, date]) -> date:
    """
    Parse an ISO calendar date.

    Accepts a full timestamp too ("2026-01-15T00:00:00Z"); only the date
    part is kept.

    Raises:
        ValueError: If the string is not an ISO date.
    """
    if isinstance(date_string, datetime):
        return date_string.date()
    if isinstance(date_string, date):
        return date_string
    return date.fromisoformat(str(date_string)[:10])


def get_date_offset(start: date, offset_days: int) -> date:
    return start + timedelta(days=offset_days)


def generate_last_365_days(today: Optional[date] = None) -> List[str]:
    """ISO dates for the trailing window in chronological order."""
    start = one_year_ago(today)
    return [format_date(get_date_offset(start, i)) for i in range(WINDOW_DAYS)]


def day_of_week(date_string: Union[str, date]) -> int:
    """Day of week with 0 = Sunday ... 6 = Saturday."""
    # date.weekday() is Monday = 0
    return (parse_date(date_string).weekday() + 1) % 7


def week_number(date_string: Union[str, date], start: date) -> int:
    """Whole weeks between ``start`` and the date (negative before start)."""
    diff_days = (parse_date(date_string) - start).days
    return diff_days // 7


def format_display_date(date_string: Union[str, date]) -> str:
    """Human-readable date, e.g. "Jan 15, 2026"."""
    value = parse_date(date_string)
    return f"{value.strftime('%b')} {value.day}, {value.year}"
