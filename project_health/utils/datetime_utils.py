"""
Date utilities.

This module provides the helpers used to turn loosely typed milestone and
project dates into ``datetime.date`` values, and to decide what "today" is
for a given timezone. The calculation engine never reads the clock; callers
use get_today() and pass the result in.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def get_today(tz_name: str = "UTC") -> date:
    """
    Get today's date in the given timezone.

    Args:
        tz_name: IANA timezone name (e.g., "Europe/Berlin", "America/New_York")

    Returns:
        date: Today's date in that timezone

    Example:
        >>> get_today("Asia/Tokyo")  # When UTC is 2024-01-19 23:00
        date(2024, 1, 20)  # JST is 2024-01-20 08:00
    """
    return datetime.now(UTC).astimezone(ZoneInfo(tz_name)).date()


def parse_date(value: Any) -> Optional[date]:
    """
    Coerce a loosely typed value to a date.

    Handles:
    - date and datetime objects (datetimes are truncated to their date)
    - ISO strings: "2024-01-20", "2024-01-20T09:00:00Z", "2024-01-20T09:00:00+09:00"

    Args:
        value: Candidate date value

    Returns:
        Optional[date]: Parsed date, or None when missing or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10]) if len(text) == 10 else (
            datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        )
    except ValueError:
        return None
