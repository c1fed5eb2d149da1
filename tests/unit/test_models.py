"""
Unit tests for milestone and project input normalization.
"""

from datetime import date
from uuid import uuid4

import pytest
from pydantic import ValidationError

from project_health.models.enums import MilestoneStatus, StatusColor
from project_health.models.milestone import (
    Milestone,
    MilestoneCreate,
    normalize_completion,
    normalize_weight,
)
from project_health.models.project import ProjectBase


class TestMilestoneNormalization:
    """Malformed milestone values are normalized, never rejected."""

    def test_completion(self):
        assert normalize_completion(None) == 0
        assert normalize_completion("abc") == 0
        assert normalize_completion(float("nan")) == 0
        assert normalize_completion(-5) == 0
        assert normalize_completion(250) == 100
        assert normalize_completion("42.5") == 42.5

    def test_weight(self):
        assert normalize_weight(None) == 3
        assert normalize_weight(True) == 3
        assert normalize_weight(2.5) == 3
        assert normalize_weight(0) == 3
        assert normalize_weight(6) == 3
        assert normalize_weight("4") == 4
        assert normalize_weight(5.0) == 5

    def test_dates(self):
        milestone = Milestone(date="2024-01-05T10:00:00Z", end_date="garbage")
        assert milestone.date == date(2024, 1, 5)
        assert milestone.end_date is None
        assert milestone.effective_end == date(2024, 1, 5)

    def test_title(self):
        assert Milestone.model_validate({"title": None, "completion": 50}).title == ""
        assert Milestone.model_validate({"title": 7}).title == "7"

        milestone = Milestone(title="x" * 600, completion=50)
        assert milestone.title == "x" * 500
        assert milestone.completion == 50

    def test_create_title_is_strict(self):
        with pytest.raises(ValidationError):
            MilestoneCreate(project_id=uuid4(), title="x" * 600)
        with pytest.raises(ValidationError):
            MilestoneCreate(project_id=uuid4(), title="")

    def test_unknown_status(self):
        assert Milestone(status="bogus").status == MilestoneStatus.ON_TRACK
        assert Milestone(status="At-Risk").status == MilestoneStatus.AT_RISK


class TestProjectNormalization:
    """Manual health fields are cleaned up on input."""

    def test_manual_percentage_is_clamped(self):
        assert ProjectBase(manual_health_percentage=150).manual_health_percentage == 100
        assert ProjectBase(manual_health_percentage=-3).manual_health_percentage == 0
        assert ProjectBase(manual_health_percentage="x").manual_health_percentage is None

    def test_manual_color(self):
        assert ProjectBase(manual_status_color="RED").manual_status_color == StatusColor.RED
        assert ProjectBase(manual_status_color="purple").manual_status_color is None

    def test_dates_are_parsed(self):
        project = ProjectBase(start_date="2024-01-01", end_date="nope")
        assert project.start_date == date(2024, 1, 1)
        assert project.end_date is None
