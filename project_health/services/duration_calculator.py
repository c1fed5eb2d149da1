"""
Project duration derived from milestone dates.

Total and working-day durations are inclusive spans. Remaining counts are
signed relative to the injected ``today``: negative once the end date has
passed, so overdue projects stay distinguishable.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from project_health.core.logger import setup_logger
from project_health.models.health import DurationResult
from project_health.models.milestone import Milestone
from project_health.services import calendar_math

logger = setup_logger(__name__)

EMPTY_DURATION = DurationResult()


def milestone_date_range(milestones: Sequence[Milestone]) -> tuple[Optional[date], Optional[date]]:
    """
    Effective (start, end) for a milestone set.

    Start is the earliest milestone date; end is the latest end date (falling
    back to the milestone date). Milestones without a usable date are ignored.
    """
    dated = [m for m in milestones if m.date is not None]
    if not dated:
        return None, None

    start = min(m.date for m in dated)
    end = max(m.effective_end for m in dated)
    return start, end


def working_days_remaining(today: date, end: date) -> int:
    """Weekdays between today and end (inclusive), negated when end has passed."""
    lower, upper = min(today, end), max(today, end)
    count = calendar_math.working_days(lower, upper)
    return -count if end < today else count


def compute_duration_from_dates(
    start: Optional[date],
    end: Optional[date],
    today: date,
) -> DurationResult:
    """Duration for an explicit date pair; all fields None if either is missing."""
    if start is None or end is None:
        return EMPTY_DURATION

    return DurationResult(
        start_date=start,
        end_date=end,
        total_days=calendar_math.total_days(start, end),
        working_days=calendar_math.working_days(min(start, end), max(start, end)),
        total_days_remaining=calendar_math.days_between(today, end),
        working_days_remaining=working_days_remaining(today, end),
    )


def compute_duration(milestones: Sequence[Milestone], today: date) -> DurationResult:
    """
    Derive the project's timeline from its milestones.

    Args:
        milestones: Project milestones
        today: Reference date for the remaining counts

    Returns:
        DurationResult: All fields None when no milestone has a parseable date
    """
    start, end = milestone_date_range(milestones)
    if start is None:
        logger.debug(f"No dated milestones among {len(milestones)}; duration unavailable")
        return EMPTY_DURATION
    return compute_duration_from_dates(start, end, today)
