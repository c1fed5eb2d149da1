"""
Time-remaining classification.

Turns a DurationResult into the share of the project duration still ahead
and an urgency bucket. The percentage is not clamped: a value
above 100 means more time is left than the planned duration (the project has
not started yet, or its milestones were pulled in after the fact).
"""

from __future__ import annotations

from project_health.models.enums import TimeRemainingBucket
from project_health.models.health import DurationResult, TimeRemaining
from project_health.services.completion_calculator import round_half_up

SUBSTANTIAL_ABOVE = 60
PLENTY_FROM = 30
MODERATE_FROM = 15

UNKNOWN_TIME = TimeRemaining(percentage=None, bucket=TimeRemainingBucket.UNKNOWN)
OVERDUE_TIME = TimeRemaining(percentage=0, bucket=TimeRemainingBucket.OVERDUE)


def bucket_for(percentage: int) -> TimeRemainingBucket:
    """Bucket for a non-negative time-remaining percentage."""
    if percentage > SUBSTANTIAL_ABOVE:
        return TimeRemainingBucket.SUBSTANTIAL
    if percentage >= PLENTY_FROM:
        return TimeRemainingBucket.PLENTY
    if percentage >= MODERATE_FROM:
        return TimeRemainingBucket.MODERATE
    return TimeRemainingBucket.LITTLE


def classify(duration: DurationResult) -> TimeRemaining:
    """
    Classify how much of the project's time is left.

    Args:
        duration: Project duration

    Returns:
        TimeRemaining: (None, UNKNOWN) without timeline data, (0, OVERDUE)
        once the end date has passed, otherwise the rounded percentage and
        its bucket

    Milestone-derived durations always span at least one day, so a zero
    total_days only arrives through a DurationResult built by the caller.
    """
    if not duration.total_days or duration.total_days_remaining is None:
        return UNKNOWN_TIME

    if duration.total_days_remaining < 0:
        return OVERDUE_TIME

    percentage = round_half_up(duration.total_days_remaining / duration.total_days * 100)
    return TimeRemaining(percentage=percentage, bucket=bucket_for(percentage))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def describe(duration: DurationResult) -> str:
    """Short human-readable summary of the remaining time."""
    time_left = classify(duration)
    remaining = duration.total_days_remaining

    if time_left.bucket == TimeRemainingBucket.UNKNOWN:
        return "No timeline data"
    if time_left.bucket == TimeRemainingBucket.OVERDUE:
        return f"Overdue by {_plural(-remaining, 'day')}"
    if remaining == 0:
        return "Ends today"

    text = f"{_plural(remaining, 'day')} remaining ({time_left.percentage}% of project duration)"
    if time_left.exceeds_total:
        text += "; more time remains than the planned duration"
    return text
