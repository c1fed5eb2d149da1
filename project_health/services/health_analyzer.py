"""
Health diagnostics.

Explains why a project received its health color and flags patterns that
usually indicate stale or unrealistic milestone data.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from project_health.models.enums import (
    CalculationType,
    HealthCalculationType,
    IssueSeverity,
    ProjectStatus,
    StatusColor,
    TimeRemainingBucket,
)
from project_health.models.health import (
    HealthAnalysis,
    HealthIssue,
    HealthMetrics,
    MilestoneDetail,
)
from project_health.models.milestone import Milestone
from project_health.models.project import Project
from project_health.services import calendar_math, time_remaining
from project_health.services.completion_calculator import weighted_completion
from project_health.services.date_override import effective_duration
from project_health.services.health_engine import compute_health

FEW_MILESTONES = 3
FAR_FUTURE_DAYS = 30
HIGH_COMPLETION = 80


def _milestone_details(milestones: Sequence[Milestone], today: date) -> list[MilestoneDetail]:
    return [
        MilestoneDetail(
            date=m.date,
            title=m.title,
            completion=m.completion,
            weight=m.weight,
            days_from_today=calendar_math.days_between(today, m.date) if m.date else None,
            status=m.status,
        )
        for m in milestones
    ]


def _overdue_incomplete(details: Iterable[MilestoneDetail]) -> list[MilestoneDetail]:
    return [
        d for d in details
        if d.days_from_today is not None and d.days_from_today < 0 and d.completion < 100
    ]


def _future_but_complete(details: Iterable[MilestoneDetail]) -> list[MilestoneDetail]:
    return [
        d for d in details
        if d.days_from_today is not None
        and d.days_from_today > FAR_FUTURE_DAYS
        and d.completion > HIGH_COMPLETION
    ]


def _calculation_type(project: Project, starts_in_future: bool) -> CalculationType:
    if project.health_calculation_type == HealthCalculationType.MANUAL:
        return CalculationType.MANUAL
    if project.status != ProjectStatus.ACTIVE:
        return CalculationType.STATUS_BASED
    if starts_in_future:
        return CalculationType.FUTURE_PROJECT
    return CalculationType.MILESTONE_BASED


def _recommendations(
    color: StatusColor,
    metrics: HealthMetrics,
    milestone_count: int,
    details: list[MilestoneDetail],
) -> list[str]:
    recommendations: list[str] = []
    time_pct = metrics.time_remaining_percentage
    completion = metrics.weighted_completion

    if color in (StatusColor.YELLOW, StatusColor.RED):
        if metrics.starts_in_future:
            recommendations.append(
                "Project starts in the future - consider if milestone dates and completion percentages are realistic"
            )
        elif metrics.is_overdue:
            recommendations.append("Project is overdue - update milestone dates or mark completed milestones")
        elif time_pct is not None and time_pct > 50 and completion < 20:
            recommendations.append(
                "Low completion with substantial time remaining - consider breaking down milestones into smaller tasks"
            )
        elif time_pct is not None and time_pct < 30 and completion < 60:
            recommendations.append(
                "Limited time remaining with low completion - "
                "project may need additional resources or scope adjustment"
            )

    if milestone_count == 0:
        recommendations.append("No milestones defined - add milestones to get more accurate health calculations")
    elif milestone_count < FEW_MILESTONES:
        recommendations.append("Consider adding more milestones for better project tracking")

    overdue = _overdue_incomplete(details)
    if overdue:
        recommendations.append(f"{len(overdue)} milestone(s) are overdue but not marked as complete")

    far_future = _future_but_complete(details)
    if far_future:
        recommendations.append(
            f"{len(far_future)} milestone(s) are far in the future but marked as highly complete"
        )

    return recommendations


def analyze(project: Project, milestones: Sequence[Milestone], today: date) -> HealthAnalysis:
    """
    Run the health engine and explain its result.

    Args:
        project: Project to analyze
        milestones: The project's milestones
        today: Reference date

    Returns:
        HealthAnalysis: Health result with metrics, recommendations and milestone details
    """
    health = compute_health(project, milestones, today)
    duration = effective_duration(project, milestones, today)
    time_left = time_remaining.classify(duration)

    starts_in_future = duration.start_date is not None and duration.start_date > today
    metrics = HealthMetrics(
        weighted_completion=weighted_completion(milestones),
        time_remaining_percentage=time_left.percentage,
        total_days=duration.total_days,
        total_days_remaining=duration.total_days_remaining,
        working_days_remaining=duration.working_days_remaining,
        start_date=duration.start_date,
        end_date=duration.end_date,
        starts_in_future=starts_in_future,
        is_overdue=time_left.bucket == TimeRemainingBucket.OVERDUE,
    )
    details = _milestone_details(milestones, today)

    return HealthAnalysis(
        health=health,
        calculation_type=_calculation_type(project, starts_in_future),
        metrics=metrics,
        recommendations=_recommendations(health.color, metrics, len(milestones), details),
        milestone_details=details,
    )


def find_issues(
    entries: Iterable[tuple[Project, Sequence[Milestone]]],
    today: date,
) -> list[HealthIssue]:
    """Scan projects for health calculation issues."""
    issues: list[HealthIssue] = []

    for project, milestones in entries:
        analysis = analyze(project, milestones, today)
        metrics = analysis.metrics

        def add(issue: str, severity: IssueSeverity, recommendation: str) -> None:
            issues.append(
                HealthIssue(
                    project_id=project.id,
                    project_title=project.title,
                    issue=issue,
                    severity=severity,
                    recommendation=recommendation,
                )
            )

        if metrics.starts_in_future and analysis.health.color in (StatusColor.YELLOW, StatusColor.RED):
            add(
                "Future project with poor health status",
                IssueSeverity.MEDIUM,
                "Review milestone completion percentages for future projects",
            )

        if not milestones:
            add("No milestones defined", IssueSeverity.LOW, "Add milestones to enable proper health tracking")

        overdue = _overdue_incomplete(analysis.milestone_details)
        if overdue:
            add(
                f"{len(overdue)} overdue milestone(s) not marked complete",
                IssueSeverity.HIGH,
                "Update completion status for overdue milestones",
            )

        if (
            metrics.time_remaining_percentage is not None
            and metrics.time_remaining_percentage > 70
            and metrics.weighted_completion < 5
        ):
            add(
                "Very low completion with substantial time remaining",
                IssueSeverity.LOW,
                "Consider if project timeline or milestone breakdown is realistic",
            )

    return issues


def quick_summary(analysis: HealthAnalysis) -> str:
    """One-line health summary, e.g. for logs and chat replies."""
    health = analysis.health
    time_pct = analysis.metrics.time_remaining_percentage
    time_text = f"{time_pct}%" if time_pct is not None else "N/A"
    return (
        f"{health.color.value.upper()}: {health.reasoning} "
        f"({analysis.metrics.weighted_completion}% complete, {time_text} time remaining)"
    )
