"""
Inclusive date-range filtering of submissions.
"""
from datetime import date, datetime, time
from typing import Iterable, Optional, Tuple, Union

from ..models.core import Submission


DateInput = Union[date, str, None]


def parse_filter_date(value: DateInput) -> Optional[date]:
    """
    Normalize a filter bound to a calendar date.

    Args:
        value: A date, datetime, 'YYYY-MM-DD' string, or None/empty

    Returns:
        The calendar date, or None for an absent bound

    Raises:
        ValueError: If a string bound is not a valid ISO date
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    # Millisecond resolution: 23:59:59.999
    return datetime.combine(day, time(23, 59, 59, 999000))


def filter_by_date_range(
    submissions: Iterable[Submission],
    start_date: DateInput = None,
    end_date: DateInput = None
) -> Tuple[Submission, ...]:
    """
    Select submissions whose timestamp falls within an inclusive date window.

    Absent bounds are unbounded. The end bound covers the whole end day, so
    ``start_date == end_date`` keeps every submission from that day.

    Args:
        submissions: Submissions to filter
        start_date: First day to include, or None
        end_date: Last day to include, or None

    Returns:
        Matching submissions in their original order
    """
    start = parse_filter_date(start_date)
    end = parse_filter_date(end_date)

    lower = start_of_day(start or date.min)
    upper = end_of_day(end or date.max)

    return tuple(sub for sub in submissions if lower <= sub.submitted_at <= upper)
