"""
Unit tests for DateOverrideController.
"""

from datetime import date

import pytest

from project_health.core.exceptions import BusinessLogicError, ValidationError
from project_health.models.enums import DateMode
from project_health.models.health import DurationResult
from project_health.models.milestone import Milestone
from project_health.models.project import Project
from project_health.services.date_override import DateOverrideController, effective_duration

COMPUTED = DurationResult(start_date=date(2024, 1, 1), end_date=date(2024, 1, 5), total_days=5)


class TestAutoMode:
    """Dates follow the computed duration."""

    def test_sync_adopts_computed_dates(self):
        controller = DateOverrideController()

        assert controller.sync(COMPUTED) is True
        assert controller.dates == (date(2024, 1, 1), date(2024, 1, 5))

    def test_sync_reports_no_change(self):
        controller = DateOverrideController(start_date=date(2024, 1, 1), end_date=date(2024, 1, 5))
        assert controller.sync(COMPUTED) is False

    def test_edit_requires_override(self):
        controller = DateOverrideController()
        with pytest.raises(BusinessLogicError):
            controller.edit_dates(date(2024, 1, 1), date(2024, 1, 2))


class TestManualMode:
    """Dates edited by hand."""

    def test_enable_freezes_current_dates(self):
        controller = DateOverrideController(start_date=date(2024, 1, 1), end_date=date(2024, 1, 5))
        controller.enable_override()

        assert controller.mode == DateMode.MANUAL
        assert controller.is_overridden is True
        assert controller.dates == (date(2024, 1, 1), date(2024, 1, 5))

    def test_enable_twice_is_harmless(self):
        controller = DateOverrideController()
        controller.enable_override()
        controller.edit_dates(date(2024, 2, 1), date(2024, 2, 10))
        controller.enable_override()
        assert controller.dates == (date(2024, 2, 1), date(2024, 2, 10))

    def test_sync_is_ignored(self):
        controller = DateOverrideController(mode=DateMode.MANUAL, start_date=date(2024, 3, 1), end_date=None)

        assert controller.sync(COMPUTED) is False
        assert controller.dates == (date(2024, 3, 1), None)

    def test_end_before_start_is_rejected(self):
        controller = DateOverrideController(mode=DateMode.MANUAL)
        with pytest.raises(ValidationError):
            controller.edit_dates(date(2024, 1, 10), date(2024, 1, 1))

    def test_round_trip_restores_computed_dates(self):
        controller = DateOverrideController()
        controller.sync(COMPUTED)

        controller.enable_override()
        controller.edit_dates(date(2024, 6, 1), date(2024, 6, 30))
        controller.disable_override(COMPUTED)

        assert controller.mode == DateMode.AUTO
        assert controller.dates == (COMPUTED.start_date, COMPUTED.end_date)


class TestProjectIntegration:
    """Reading from and writing back to projects."""

    def test_from_project_and_apply_to(self):
        project = Project(title="Launch", dates_overridden=False)
        controller = DateOverrideController.from_project(project)
        controller.sync(COMPUTED)
        controller.enable_override()

        updated = controller.apply_to(project)

        assert updated.dates_overridden is True
        assert updated.start_date == date(2024, 1, 1)
        assert updated.end_date == date(2024, 1, 5)
        assert project.dates_overridden is False

    def test_effective_duration_uses_manual_pair(self):
        project = Project(dates_overridden=True, start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))
        milestones = [Milestone(date=date(2024, 1, 1)), Milestone(date=date(2024, 1, 5))]

        result = effective_duration(project, milestones, date(2024, 1, 1))
        assert result.total_days == 31

    def test_effective_duration_needs_both_manual_dates(self):
        project = Project(dates_overridden=True, start_date=date(2024, 1, 1))
        milestones = [Milestone(date=date(2024, 1, 1)), Milestone(date=date(2024, 1, 5))]

        result = effective_duration(project, milestones, date(2024, 1, 1))
        assert result.total_days == 5
