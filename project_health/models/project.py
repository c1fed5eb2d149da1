"""
Project model definitions.

A project's lifecycle status, health calculation mode and (possibly
overridden) dates feed the health engine. Persisted projects also cache the
engine's most recent outputs for dashboards and status sheets.
"""

import datetime as dt
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from project_health.models.enums import HealthCalculationType, ProjectStatus, StatusColor
from project_health.utils.datetime_utils import parse_date


class ProjectBase(BaseModel):
    """Project fields read by the health engine."""

    status: ProjectStatus = Field(ProjectStatus.ACTIVE, description="Lifecycle status")
    health_calculation_type: HealthCalculationType = Field(
        HealthCalculationType.AUTOMATIC,
        description="automatic = derived from milestones, manual = set by a person",
    )
    manual_status_color: Optional[StatusColor] = Field(
        None,
        description="Color used when health_calculation_type is manual",
    )
    manual_health_percentage: Optional[int] = Field(
        None,
        description="Percentage (0-100) used when health_calculation_type is manual",
    )
    start_date: Optional[dt.date] = Field(None, description="Project start date")
    end_date: Optional[dt.date] = Field(None, description="Project end date")
    dates_overridden: bool = Field(
        False,
        description="True while start/end dates are edited by hand instead of following milestones",
    )

    @field_validator("manual_status_color", mode="before")
    @classmethod
    def _known_color(cls, value: Any) -> Optional[StatusColor]:
        if value is None or isinstance(value, StatusColor):
            return value
        try:
            return StatusColor(str(value).strip().lower())
        except ValueError:
            return None

    @field_validator("manual_health_percentage", mode="before")
    @classmethod
    def _clamp_percentage(cls, value: Any) -> Optional[int]:
        if value is None or isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if number != number:  # NaN
            return None
        return int(round(max(0.0, min(number, 100.0))))

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Optional[dt.date]:
        return parse_date(value)


class ProjectCreate(ProjectBase):
    """Schema for creating a new project."""

    title: str = Field(..., min_length=1, max_length=200, description="Project title")
    description: Optional[str] = Field(None, max_length=5000, description="Project description")


class ProjectUpdate(BaseModel):
    """Schema for updating an existing project."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    status: Optional[ProjectStatus] = None
    health_calculation_type: Optional[HealthCalculationType] = None
    manual_status_color: Optional[StatusColor] = None
    manual_health_percentage: Optional[int] = Field(None, ge=0, le=100)


class ComputedProjectFields(BaseModel):
    """Engine outputs cached on the project by the recompute trigger."""

    computed_status_color: Optional[StatusColor] = None
    computed_health_percentage: Optional[int] = None
    health_reasoning: Optional[str] = None
    calculated_start_date: Optional[dt.date] = None
    calculated_end_date: Optional[dt.date] = None
    total_days: Optional[int] = None
    working_days: Optional[int] = None
    total_days_remaining: Optional[int] = None
    working_days_remaining: Optional[int] = None
    health_calculated_at: Optional[dt.datetime] = None


class Project(ProjectBase, ComputedProjectFields):
    """
    Complete project model.

    Only ``ProjectBase`` fields are engine inputs; identifiers and cached
    values are optional so the engine can also be fed ad-hoc projects.
    """

    id: Optional[UUID] = None
    title: str = ""
    description: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True
