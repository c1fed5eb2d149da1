"""
Calendar-day and working-day counting.

Working days are Monday through Friday; no holiday calendar is modeled.
"""

from datetime import date, timedelta

_ONE_DAY = timedelta(days=1)
_SATURDAY = 5


def total_days(start: date, end: date) -> int:
    """Inclusive calendar-day span between two dates, in either order."""
    return abs((end - start).days) + 1


def days_between(start: date, end: date) -> int:
    """Signed calendar-day difference ``end - start`` (negative when end is earlier)."""
    return (end - start).days


def is_working_day(day: date) -> bool:
    return day.weekday() < _SATURDAY


def working_days(start: date, end: date) -> int:
    """Count Monday-Friday days in ``[start, end]``; 0 when ``start > end``."""
    count = 0
    current = start
    while current <= end:
        if is_working_day(current):
            count += 1
        current += _ONE_DAY
    return count
