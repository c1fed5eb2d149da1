"""
Project health status engine.

Combines lifecycle status, weighted milestone completion and time remaining
(or a manual override) into a traffic-light color, a percentage and a
reasoning string. Decision order, first match wins:

1. manual health calculation  -> manual color / percentage
2. completed                  -> green, 100
3. cancelled                  -> red, 0
4. draft / on hold            -> yellow, weighted completion
5. active with milestones     -> weighted completion vs. time-remaining thresholds
6. active, no milestones      -> green, 0

Thresholds loosen as more time remains and tighten as the deadline nears.
``HEALTH_THRESHOLDS`` is the only copy of the table.
"""

from __future__ import annotations

from datetime import date
from typing import NamedTuple, Optional, Sequence

from project_health.core.logger import setup_logger
from project_health.models.enums import (
    HealthCalculationType,
    HealthRule,
    ProjectStatus,
    StatusColor,
    TimeRemainingBucket,
)
from project_health.models.health import DurationResult, HealthResult, TimeRemaining
from project_health.models.milestone import Milestone
from project_health.models.project import ProjectBase
from project_health.services import time_remaining
from project_health.services.completion_calculator import weighted_completion
from project_health.services.date_override import effective_duration

logger = setup_logger(__name__)


class Thresholds(NamedTuple):
    """Minimum completion for green / yellow; below yellow is red."""

    label: str
    green_min: Optional[int]  # None = green unreachable
    yellow_min: int


HEALTH_THRESHOLDS: dict[TimeRemainingBucket, Thresholds] = {
    TimeRemainingBucket.UNKNOWN: Thresholds("Milestone-only calculation", 70, 40),
    TimeRemainingBucket.OVERDUE: Thresholds("Overdue project", None, 90),
    TimeRemainingBucket.SUBSTANTIAL: Thresholds("Substantial time remaining", 10, 5),
    TimeRemainingBucket.PLENTY: Thresholds("Plenty of time remaining", 20, 10),
    TimeRemainingBucket.MODERATE: Thresholds("Moderate time remaining", 40, 25),
    TimeRemainingBucket.LITTLE: Thresholds("Little time remaining", 80, 60),
}

EXCEEDS_TOTAL_NOTE = (
    " Note: time remaining exceeds the planned duration "
    "(the project has not started yet or its milestones were rescheduled)."
)


def color_for(completion: int, bucket: TimeRemainingBucket) -> StatusColor:
    """Apply the threshold row for ``bucket`` to a completion percentage."""
    row = HEALTH_THRESHOLDS[bucket]
    if row.green_min is not None and completion >= row.green_min:
        return StatusColor.GREEN
    if completion >= row.yellow_min:
        return StatusColor.YELLOW
    return StatusColor.RED


def _threshold_text(row: Thresholds) -> str:
    if row.green_min is None:
        return f"yellow at >= {row.yellow_min}%, green unreachable"
    return f"green at >= {row.green_min}%, yellow at >= {row.yellow_min}%"


def _manual_health(project: ProjectBase) -> HealthResult:
    color = project.manual_status_color
    percentage = project.manual_health_percentage
    fallbacks = []
    if color is None:
        color = StatusColor.GREEN
        fallbacks.append("no status color set, using green")
    if percentage is None:
        percentage = 0
        fallbacks.append("no health percentage set, using 0%")

    reasoning = f"Manual override: status set to {color.value} at {percentage}% by user"
    if fallbacks:
        reasoning += f" ({'; '.join(fallbacks)})"
        logger.warning(f"Manual health fields missing: {', '.join(fallbacks)}")
    return HealthResult(color=color, percentage=percentage, reasoning=reasoning, rule=HealthRule.MANUAL)


def _time_aware_health(
    completion: int,
    time_left: TimeRemaining,
    duration: DurationResult,
) -> HealthResult:
    row = HEALTH_THRESHOLDS[time_left.bucket]
    color = color_for(completion, time_left.bucket)

    if time_left.bucket == TimeRemainingBucket.UNKNOWN:
        detail = f"{completion}% weighted completion, no timeline data"
    elif time_left.bucket == TimeRemainingBucket.OVERDUE:
        overdue_days = -duration.total_days_remaining
        unit = "day" if overdue_days == 1 else "days"
        detail = f"{completion}% weighted completion, {overdue_days} {unit} past the end date"
    else:
        detail = f"{completion}% weighted completion with {time_left.percentage}% time remaining"

    reasoning = f"{row.label}: {detail} = {color.value} ({_threshold_text(row)})"
    if time_left.exceeds_total:
        reasoning += EXCEEDS_TOTAL_NOTE
    return HealthResult(color=color, percentage=completion, reasoning=reasoning, rule=HealthRule.TIME_AWARE)


def compute_health(
    project: ProjectBase,
    milestones: Sequence[Milestone],
    today: date,
) -> HealthResult:
    """
    Classify a project's overall health.

    Args:
        project: Project state (status, calculation type, manual fields, dates)
        milestones: The project's milestones
        today: Reference date for time-remaining calculations

    Returns:
        HealthResult: Color, percentage and the reasoning that produced them
    """
    if project.health_calculation_type == HealthCalculationType.MANUAL:
        return _manual_health(project)

    if project.status == ProjectStatus.COMPLETED:
        return HealthResult(
            color=StatusColor.GREEN,
            percentage=100,
            reasoning="Status-based: project is completed",
            rule=HealthRule.COMPLETED,
        )

    if project.status == ProjectStatus.CANCELLED:
        return HealthResult(
            color=StatusColor.RED,
            percentage=0,
            reasoning="Status-based: project is cancelled",
            rule=HealthRule.CANCELLED,
        )

    if project.status in (ProjectStatus.DRAFT, ProjectStatus.ON_HOLD):
        completion = weighted_completion(milestones)
        return HealthResult(
            color=StatusColor.YELLOW,
            percentage=completion,
            reasoning=f"Status-based: project is {project.status.value} ({completion}% weighted completion)",
            rule=HealthRule.INACTIVE,
        )

    if milestones:
        completion = weighted_completion(milestones)
        duration = effective_duration(project, milestones, today)
        time_left = time_remaining.classify(duration)
        logger.debug(
            f"Time-aware health: completion={completion} time_remaining={time_left.percentage} "
            f"bucket={time_left.bucket.value}"
        )
        return _time_aware_health(completion, time_left, duration)

    return HealthResult(
        color=StatusColor.GREEN,
        percentage=0,
        reasoning="No milestones: active project without milestones defaults to green",
        rule=HealthRule.NO_MILESTONES,
    )
