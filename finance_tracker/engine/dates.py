"""
Calendar-month arithmetic.

Everything here works on date-only values. Times and timezones never
enter period or overdue logic, so a transaction dated 2024-03-01 is
always in March regardless of where the code runs.

Month rollover policy: clamp to the last valid day of the target month.
Jan 31 + 1 month is Feb 29 in a leap year and Feb 28 otherwise; it never
spills into March. The recurrence expander, the loan schedule generator
and the card metrics calculator all go through add_months, so they agree.
"""

from datetime import date, datetime
from typing import Optional, Union


DateLike = Union[date, datetime, str]


def days_in_month(year: int, month: int) -> int:
    if month == 12:
        next_month = date(year + 1, 1, 1)
    else:
        next_month = date(year, month + 1, 1)
    return (next_month - date(year, month, 1)).days


def project_day(year: int, month: int, day: int) -> date:
    """Date with the given day-of-month, clamped to the month's length."""
    return date(year, month, min(day, days_in_month(year, month)))


def add_months(value: date, months: int, *, day: Optional[int] = None) -> date:
    """
    Move a date by whole calendar months.

    Args:
        value: Starting date
        months: Months to add; negative moves backwards
        day: Desired day-of-month in the target month. Defaults to
             value.day. Clamped when the target month is shorter.
    """
    total_months = value.month - 1 + months
    year = value.year + total_months // 12
    month = total_months % 12 + 1
    return project_day(year, month, day if day is not None else value.day)


def month_start(value: date) -> date:
    return value.replace(day=1)


def month_end(value: date) -> date:
    return value.replace(day=days_in_month(value.year, value.month))


def is_same_month(value: date, reference: date) -> bool:
    return value.year == reference.year and value.month == reference.month


def parse_date_only(value: DateLike) -> date:
    """
    Coerce to a date-only value.

    Strings may carry a time part ("2024-03-01T23:00:00"); it is dropped
    rather than converted, so no timezone shift can move the day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def to_date_only_key(value: DateLike) -> str:
    """Canonical YYYY-MM-DD form used for storage and comparisons."""
    return parse_date_only(value).isoformat()
