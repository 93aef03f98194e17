"""Date manipulation utilities"""

from datetime import date, datetime, timedelta
from recovery_gateway.domain.exceptions import InvalidInputError


def add_days(from_date: date, days: int) -> date:
    return from_date + timedelta(days=days)


def require_date(value, name: str) -> None:
    """Fail fast on a missing or non-date argument"""
    if not isinstance(value, date):
        raise InvalidInputError(f"{name} must be a date, got {type(value).__name__}")


def require_same_kind(first: date, second: date) -> None:
    """Dates and datetimes, or naive and aware datetimes, do not compare"""
    if isinstance(first, datetime) != isinstance(second, datetime):
        raise InvalidInputError("Cannot compare a date with a datetime")
    if isinstance(first, datetime) and (first.tzinfo is None) != (second.tzinfo is None):
        raise InvalidInputError("Cannot compare naive and timezone-aware datetimes")


def days_between(start: date, end: date) -> int:
    """
    Whole days elapsed from start to end.

    Works on two dates or two datetimes; elapsed time is floored to whole days,
    so 47 hours is 1 day. Both values must share one reference timezone.
    """
    require_date(start, "start")
    require_date(end, "end")
    require_same_kind(start, end)

    return (end - start).days


def days_overdue(due_date: date, today: date) -> int:
    """Days past due, zero when not yet due"""
    return max(0, days_between(due_date, today))
