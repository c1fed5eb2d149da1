"""
Milestone model definitions.

Milestones carry the dates, completion and weight the health engine
aggregates. Incoming values are normalized rather than rejected so a single
bad record never blocks a project's calculation.
"""

import datetime as dt
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from project_health.models.enums import MilestoneStatus
from project_health.utils.datetime_utils import parse_date

DEFAULT_WEIGHT = 3
MIN_WEIGHT = 1
MAX_WEIGHT = 5
MAX_TITLE_LENGTH = 500


def normalize_completion(value: Any) -> float:
    """Clamp completion into [0, 100]; missing or non-numeric becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number:  # NaN
        return 0.0
    return max(0.0, min(number, 100.0))


def normalize_weight(value: Any) -> int:
    """Whole weights in [1, 5] are kept; anything else becomes the default 3."""
    if value is None or isinstance(value, bool):
        return DEFAULT_WEIGHT
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_WEIGHT
    if not number.is_integer() or not MIN_WEIGHT <= number <= MAX_WEIGHT:
        return DEFAULT_WEIGHT
    return int(number)


class Milestone(BaseModel):
    """Milestone fields consumed by the health and duration engine."""

    title: str = Field(default="", description="Milestone text")
    date: Optional[dt.date] = Field(None, description="Milestone (start) date")
    end_date: Optional[dt.date] = Field(None, description="Optional end date")
    completion: float = Field(default=0.0, description="Completion percentage (0-100)")
    weight: int = Field(default=DEFAULT_WEIGHT, description="Importance weight (1-5)")
    status: MilestoneStatus = Field(MilestoneStatus.ON_TRACK)

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)[:MAX_TITLE_LENGTH]

    @field_validator("date", "end_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Optional[dt.date]:
        return parse_date(value)

    @field_validator("completion", mode="before")
    @classmethod
    def _clamp_completion(cls, value: Any) -> float:
        return normalize_completion(value)

    @field_validator("weight", mode="before")
    @classmethod
    def _default_weight(cls, value: Any) -> int:
        return normalize_weight(value)

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, value: Any) -> MilestoneStatus:
        if isinstance(value, MilestoneStatus):
            return value
        try:
            return MilestoneStatus(str(value).strip().lower())
        except ValueError:
            return MilestoneStatus.ON_TRACK

    @property
    def effective_end(self) -> Optional[dt.date]:
        """End date when set, otherwise the milestone date."""
        return self.end_date or self.date


class MilestoneCreate(Milestone):
    """Schema for creating a milestone."""

    project_id: UUID = Field(..., description="Project ID")
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH, description="Milestone text")

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, value: Any) -> Any:
        # User input is validated strictly
        return value


class MilestoneUpdate(BaseModel):
    """Schema for updating a milestone."""

    title: Optional[str] = Field(None, min_length=1, max_length=MAX_TITLE_LENGTH)
    date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    completion: Optional[float] = Field(None, ge=0, le=100)
    weight: Optional[int] = Field(None, ge=MIN_WEIGHT, le=MAX_WEIGHT)
    status: Optional[MilestoneStatus] = None


class StoredMilestone(MilestoneCreate):
    """Complete milestone model as persisted."""

    id: UUID
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True
