"""
Contribution Input
==================

Normalizes raw contribution records into ContributionDay values.

Records come from either the synthetic generator or an upstream
contribution calendar; both end up as a list of (date, count) pairs.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

from git_streak.streak_core.date_utils import WINDOW_DAYS, format_date, parse_date


@dataclass(frozen=True)
class ContributionDay:
    """One calendar day's contribution count."""
    date: str
    count: int


def _parse_count(count_value: Any) -> int:
    """Integral commit count; bools and fractional values are rejected."""
    if isinstance(count_value, bool):
        raise ValueError(f"Invalid contribution count: {count_value!r}")
    if isinstance(count_value, numbers.Integral):
        return int(count_value)
    if isinstance(count_value, float) and count_value.is_integer():
        return int(count_value)
    if isinstance(count_value, str) and count_value.strip().isdigit():
        return int(count_value)
    raise ValueError(f"Invalid contribution count: {count_value!r}")


def _make_day(date_value: Any, count_value: Any) -> ContributionDay:
    """Validate and build a ContributionDay."""
    try:
        date_str = format_date(parse_date(date_value))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid contribution date: {date_value!r}") from e

    count = _parse_count(count_value)
    if count < 0:
        raise ValueError(f"Contribution count must be >= 0, got {count} for {date_str}")
    return ContributionDay(date=date_str, count=count)


def contributions_from_records(records: Iterable[Any]) -> List[ContributionDay]:
    """
    Convert raw records into ContributionDay values.

    Accepts ContributionDay instances, mappings with ``date`` plus ``count``
    or ``contributionCount``, and ``(date, count)`` pairs.

    Raises:
        ValueError: If a record is malformed.
    """
    days = []
    for record in records:
        if isinstance(record, ContributionDay):
            days.append(_make_day(record.date, record.count))
        elif isinstance(record, Mapping):
            if "date" not in record:
                raise ValueError(f"Contribution record missing 'date': {record!r}")
            if "count" in record:
                count = record["count"]
            elif "contributionCount" in record:
                count = record["contributionCount"]
            else:
                raise ValueError(f"Contribution record missing 'count': {record!r}")
            days.append(_make_day(record["date"], count))
        else:
            try:
                date_value, count = record
            except (TypeError, ValueError) as e:
                raise ValueError(f"Unrecognized contribution record: {record!r}") from e
            days.append(_make_day(date_value, count))
    return days


def contributions_from_calendar(
    payload: Mapping[str, Any],
    limit: int = WINDOW_DAYS
) -> List[ContributionDay]:
    """
    Flatten a contribution calendar payload.

    ``payload`` is either the calendar itself (with ``weeks``) or a full
    GraphQL response containing
    ``data.user.contributionsCollection.contributionCalendar``.

    Args:
        payload: Calendar or response mapping.
        limit: Keep only the most recent ``limit`` days.

    Returns:
        Days sorted by date, oldest first.

    Raises:
        ValueError: If no calendar is present.
    """
    calendar = payload
    if "weeks" not in calendar:
        calendar = (
            (((payload.get("data") or {}).get("user") or {})
             .get("contributionsCollection") or {})
            .get("contributionCalendar")
        )
        if not calendar:
            raise ValueError("No contribution calendar found in payload")

    records: List[Dict[str, Any]] = []
    for week in calendar.get("weeks", []):
        records.extend(week.get("contributionDays", []))

    days = contributions_from_records(records)
    days.sort(key=lambda d: d.date)

    if limit is not None and limit >= 0:
        days = days[-limit:] if limit else []
    return days


def get_total_commits(contributions: Iterable[ContributionDay]) -> int:
    return sum(day.count for day in contributions)


def get_active_days_count(contributions: Iterable[ContributionDay]) -> int:
    return sum(1 for day in contributions if day.count > 0)
