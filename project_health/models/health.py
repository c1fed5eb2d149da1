"""
Health and duration result models.

Engine results are frozen: they are recomputed on every call and never
mutated afterwards.
"""

import datetime as dt
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from project_health.models.enums import (
    CalculationType,
    HealthRule,
    IssueSeverity,
    MilestoneStatus,
    StatusColor,
    TimeRemainingBucket,
)


class DurationResult(BaseModel):
    """Project timeline derived from milestone (or overridden) dates."""

    model_config = ConfigDict(frozen=True)

    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    total_days: Optional[int] = None
    working_days: Optional[int] = None
    total_days_remaining: Optional[int] = None
    working_days_remaining: Optional[int] = None

    @property
    def has_dates(self) -> bool:
        return self.start_date is not None and self.end_date is not None


class TimeRemaining(BaseModel):
    """Share of the project duration still ahead, and its urgency bucket."""

    model_config = ConfigDict(frozen=True)

    percentage: Optional[int] = None
    bucket: TimeRemainingBucket = TimeRemainingBucket.UNKNOWN

    @property
    def exceeds_total(self) -> bool:
        """More time left than the whole planned duration (e.g. not started yet)."""
        return self.percentage is not None and self.percentage > 100


class HealthResult(BaseModel):
    """Final health color, percentage and the explanation shown to users."""

    model_config = ConfigDict(frozen=True)

    color: StatusColor
    percentage: int = Field(..., ge=0, le=100)
    reasoning: str
    rule: HealthRule


# ===========================================
# Diagnostics
# ===========================================


class MilestoneDetail(BaseModel):
    """Per-milestone view used in health analysis."""

    model_config = ConfigDict(frozen=True)

    date: Optional[dt.date] = None
    title: str = ""
    completion: float = 0.0
    weight: int = 3
    days_from_today: Optional[int] = None
    status: MilestoneStatus = MilestoneStatus.ON_TRACK


class HealthMetrics(BaseModel):
    """Numbers behind a health result."""

    model_config = ConfigDict(frozen=True)

    weighted_completion: int = 0
    time_remaining_percentage: Optional[int] = None
    total_days: Optional[int] = None
    total_days_remaining: Optional[int] = None
    working_days_remaining: Optional[int] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    starts_in_future: bool = False
    is_overdue: bool = False


class HealthAnalysis(BaseModel):
    """Detailed explanation of a project's health calculation."""

    model_config = ConfigDict(frozen=True)

    health: HealthResult
    calculation_type: CalculationType
    metrics: HealthMetrics
    recommendations: list[str] = Field(default_factory=list)
    milestone_details: list[MilestoneDetail] = Field(default_factory=list)


class HealthIssue(BaseModel):
    """A suspicious pattern found while scanning projects."""

    model_config = ConfigDict(frozen=True)

    project_id: Optional[UUID] = None
    project_title: str = ""
    issue: str
    severity: IssueSeverity
    recommendation: str


# ===========================================
# Batch maintenance
# ===========================================


class RecalculationResult(BaseModel):
    """Outcome of recalculating many projects."""

    success: bool = True
    updated_count: int = 0
    total_count: int = 0
    errors: list[str] = Field(default_factory=list)


class DurationStats(BaseModel):
    """Aggregate duration figures over non-cancelled projects."""

    total_projects: int = 0
    projects_with_duration: int = 0
    projects_without_duration: int = 0
    average_total_days: int = 0
    average_working_days: int = 0


class DurationInconsistency(BaseModel):
    """A stored duration that does not agree with itself."""

    project_id: UUID
    issue: str


class DurationValidationReport(BaseModel):
    """Result of checking cached duration fields for consistency."""

    valid_projects: int = 0
    invalid_projects: int = 0
    inconsistencies: list[DurationInconsistency] = Field(default_factory=list)


# ===========================================
# Requests
# ===========================================


class DateOverrideRequest(BaseModel):
    """Toggle manual project dates on or off."""

    enabled: bool


class ManualDatesRequest(BaseModel):
    """Manually edited project dates (both are always set together)."""

    start_date: dt.date
    end_date: dt.date


class RecalculationRequest(BaseModel):
    """Projects to recalculate; all projects when omitted."""

    project_ids: Optional[list[UUID]] = Field(None, description="Project IDs to refresh")
