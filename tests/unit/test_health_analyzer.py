"""
Unit tests for health diagnostics.
"""

from datetime import date
from uuid import uuid4

from project_health.models.enums import (
    CalculationType,
    HealthCalculationType,
    IssueSeverity,
    ProjectStatus,
    StatusColor,
)
from project_health.models.milestone import Milestone
from project_health.models.project import Project
from project_health.services.health_analyzer import analyze, find_issues, quick_summary


def _project(**kwargs) -> Project:
    return Project(id=uuid4(), title="Website relaunch", **kwargs)


class TestAnalyze:
    """Tests for analyze."""

    def test_future_project(self):
        milestones = [Milestone(date=date(2024, 1, 10), end_date=date(2024, 1, 19), completion=0)]
        analysis = analyze(_project(), milestones, date(2024, 1, 1))

        assert analysis.health.color == StatusColor.RED
        assert analysis.calculation_type == CalculationType.FUTURE_PROJECT
        assert analysis.metrics.starts_in_future is True
        assert analysis.metrics.time_remaining_percentage == 180
        assert any("starts in the future" in r for r in analysis.recommendations)
        assert "Consider adding more milestones for better project tracking" in analysis.recommendations

    def test_manual_project(self):
        project = _project(
            health_calculation_type=HealthCalculationType.MANUAL,
            manual_status_color="yellow",
            manual_health_percentage=40,
        )
        analysis = analyze(project, [], date(2024, 1, 1))

        assert analysis.calculation_type == CalculationType.MANUAL
        assert analysis.health.color == StatusColor.YELLOW

    def test_draft_project_is_status_based(self):
        analysis = analyze(_project(status=ProjectStatus.DRAFT), [], date(2024, 1, 1))
        assert analysis.calculation_type == CalculationType.STATUS_BASED

    def test_milestone_details(self):
        milestones = [Milestone(title="Kickoff", date=date(2024, 1, 1), completion=100, weight=5)]
        analysis = analyze(_project(), milestones, date(2024, 1, 4))

        detail = analysis.milestone_details[0]
        assert detail.title == "Kickoff"
        assert detail.days_from_today == -3
        assert detail.weight == 5

    def test_metrics_match_health(self):
        milestones = [Milestone(date=date(2024, 1, 1), end_date=date(2024, 1, 10), completion=20)]
        analysis = analyze(_project(), milestones, date(2024, 1, 5))

        assert analysis.metrics.weighted_completion == analysis.health.percentage == 20
        assert analysis.metrics.time_remaining_percentage == 50
        assert analysis.metrics.total_days == 10
        assert analysis.metrics.is_overdue is False


class TestFindIssues:
    """Tests for find_issues."""

    def test_project_without_milestones(self):
        project = _project()
        issues = find_issues([(project, [])], date(2024, 1, 1))

        assert len(issues) == 1
        assert issues[0].issue == "No milestones defined"
        assert issues[0].severity == IssueSeverity.LOW
        assert issues[0].project_id == project.id

    def test_overdue_incomplete_milestone(self):
        milestones = [Milestone(date=date(2024, 1, 1), completion=50)]
        issues = find_issues([(_project(), milestones)], date(2024, 1, 5))

        assert [i.severity for i in issues] == [IssueSeverity.HIGH]
        assert issues[0].issue == "1 overdue milestone(s) not marked complete"

    def test_healthy_project_has_no_issues(self):
        milestones = [
            Milestone(date=date(2024, 1, 10), completion=100),
            Milestone(date=date(2024, 1, 20), completion=10),
            Milestone(date=date(2024, 1, 30), completion=0),
        ]
        assert find_issues([(_project(), milestones)], date(2024, 1, 12)) == []


class TestQuickSummary:
    """Tests for quick_summary."""

    def test_without_timeline(self):
        analysis = analyze(_project(), [Milestone(completion=75)], date(2024, 1, 1))
        summary = quick_summary(analysis)

        assert summary.startswith("GREEN: Milestone-only calculation")
        assert summary.endswith("(75% complete, N/A time remaining)")

    def test_with_timeline(self):
        milestones = [Milestone(date=date(2024, 1, 1), end_date=date(2024, 1, 10), completion=20)]
        summary = quick_summary(analyze(_project(), milestones, date(2024, 1, 5)))
        assert summary.endswith("(20% complete, 50% time remaining)")
