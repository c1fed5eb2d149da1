"""Pydantic models (schemas) for the application."""

from project_health.models.enums import (
    CalculationType,
    DateMode,
    HealthCalculationType,
    HealthRule,
    IssueSeverity,
    MilestoneStatus,
    ProjectStatus,
    StatusColor,
    TimeRemainingBucket,
)
from project_health.models.health import (
    DurationResult,
    DurationStats,
    DurationValidationReport,
    HealthAnalysis,
    HealthIssue,
    HealthResult,
    RecalculationRequest,
    RecalculationResult,
    TimeRemaining,
)
from project_health.models.milestone import Milestone, MilestoneCreate, MilestoneUpdate, StoredMilestone
from project_health.models.project import Project, ProjectCreate, ProjectUpdate

__all__ = [
    # Enums
    "CalculationType",
    "DateMode",
    "HealthCalculationType",
    "HealthRule",
    "IssueSeverity",
    "MilestoneStatus",
    "ProjectStatus",
    "StatusColor",
    "TimeRemainingBucket",
    # Results
    "DurationResult",
    "DurationStats",
    "DurationValidationReport",
    "HealthAnalysis",
    "HealthIssue",
    "HealthResult",
    "RecalculationRequest",
    "RecalculationResult",
    "TimeRemaining",
    # Entities
    "Milestone",
    "MilestoneCreate",
    "MilestoneUpdate",
    "StoredMilestone",
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
]
