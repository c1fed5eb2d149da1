"""
Enum definitions for the application.

These enums are used across models and provide type-safe status values.
"""

from enum import Enum


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    DRAFT = "draft"
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MilestoneStatus(str, Enum):
    """Milestone status."""

    ON_TRACK = "on-track"
    AT_RISK = "at-risk"
    HIGH_RISK = "high-risk"
    COMPLETED = "completed"


class HealthCalculationType(str, Enum):
    """How a project's health is determined."""

    AUTOMATIC = "automatic"
    MANUAL = "manual"


class StatusColor(str, Enum):
    """Health traffic-light color."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class TimeRemainingBucket(str, Enum):
    """
    Urgency category derived from remaining vs. total duration.

    SUBSTANTIAL = more than 60% of the duration left
    PLENTY = 30-60% left
    MODERATE = 15-29% left
    LITTLE = 0-14% left, not yet past the end date
    OVERDUE = end date has passed
    UNKNOWN = no usable timeline
    """

    OVERDUE = "overdue"
    SUBSTANTIAL = "substantial"
    PLENTY = "plenty"
    MODERATE = "moderate"
    LITTLE = "little"
    UNKNOWN = "unknown"


class HealthRule(str, Enum):
    """Which decision rule produced a health result."""

    MANUAL = "manual"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    INACTIVE = "inactive"  # draft / on hold
    TIME_AWARE = "time_aware"
    NO_MILESTONES = "no_milestones"


class DateMode(str, Enum):
    """Whether project dates follow milestones or were edited by hand."""

    AUTO = "auto"
    MANUAL = "manual"


class CalculationType(str, Enum):
    """Analysis category shown in health diagnostics."""

    MANUAL = "manual"
    STATUS_BASED = "status-based"
    MILESTONE_BASED = "milestone-based"
    FUTURE_PROJECT = "future-project"


class IssueSeverity(str, Enum):
    """Severity of a health calculation issue."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
