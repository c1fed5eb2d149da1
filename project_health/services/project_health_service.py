"""
Project health service.

Loads projects and milestones from the repositories, runs the health and
duration engine, and writes the cached results back. Every milestone or
date-override change goes through refresh_project().
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional
from uuid import UUID

from project_health.core.exceptions import NotFoundError
from project_health.core.logger import setup_logger
from project_health.interfaces.milestone_repository import IMilestoneRepository
from project_health.interfaces.project_repository import IProjectRepository
from project_health.models.enums import ProjectStatus
from project_health.models.health import (
    DurationInconsistency,
    DurationResult,
    DurationStats,
    DurationValidationReport,
    HealthAnalysis,
    HealthIssue,
    HealthResult,
    RecalculationResult,
)
from project_health.models.milestone import StoredMilestone
from project_health.models.project import ComputedProjectFields, Project
from project_health.services import health_analyzer, time_remaining
from project_health.services.calendar_math import total_days
from project_health.services.completion_calculator import round_half_up
from project_health.services.date_override import DateOverrideController, effective_duration
from project_health.services.duration_calculator import compute_duration
from project_health.services.health_engine import compute_health
from project_health.utils.datetime_utils import now_utc

logger = setup_logger(__name__)

_DURATION_FIELDS = (
    "calculated_start_date",
    "calculated_end_date",
    "total_days",
    "working_days",
    "total_days_remaining",
    "working_days_remaining",
)


def build_computed_fields(health: HealthResult, duration: DurationResult) -> ComputedProjectFields:
    """Cached project values for one engine run."""
    return ComputedProjectFields(
        computed_status_color=health.color,
        computed_health_percentage=health.percentage,
        health_reasoning=health.reasoning,
        calculated_start_date=duration.start_date,
        calculated_end_date=duration.end_date,
        total_days=duration.total_days,
        working_days=duration.working_days,
        total_days_remaining=duration.total_days_remaining,
        working_days_remaining=duration.working_days_remaining,
        health_calculated_at=now_utc().replace(tzinfo=None),
    )


class ProjectHealthService:
    """Recompute trigger and batch maintenance for cached project health."""

    def __init__(self, project_repo: IProjectRepository, milestone_repo: IMilestoneRepository):
        self._project_repo = project_repo
        self._milestone_repo = milestone_repo

    async def _load(self, project_id: UUID) -> tuple[Project, list[StoredMilestone]]:
        project = await self._project_repo.get(project_id)
        if not project:
            raise NotFoundError(f"Project {project_id} not found")
        milestones = await self._milestone_repo.list_by_project(project_id)
        return project, milestones

    async def _refresh_loaded(
        self,
        project: Project,
        milestones: list[StoredMilestone],
        today: date,
    ) -> Project:
        controller = DateOverrideController.from_project(project)
        if controller.sync(compute_duration(milestones, today)):
            project = await self._project_repo.save_dates(
                project.id, controller.is_overridden, controller.start_date, controller.end_date
            )

        duration = effective_duration(project, milestones, today)
        health = compute_health(project, milestones, today)
        logger.debug(f"Project {project.id}: {time_remaining.describe(duration)}")
        return await self._project_repo.save_computed(project.id, build_computed_fields(health, duration))

    async def refresh_project(self, project_id: UUID, today: date) -> Project:
        """
        Recompute and store a project's health and duration.

        Args:
            project_id: Project ID
            today: Reference date

        Returns:
            Project: The project with refreshed cached fields

        Raises:
            NotFoundError: If the project does not exist
        """
        project, milestones = await self._load(project_id)
        refreshed = await self._refresh_loaded(project, milestones, today)
        logger.info(
            f"Refreshed project {project_id}: {refreshed.computed_status_color.value} "
            f"{refreshed.computed_health_percentage}%"
        )
        return refreshed

    async def evaluate(self, project_id: UUID, today: date) -> tuple[HealthResult, DurationResult]:
        """Compute health and effective duration live, without storing them."""
        project, milestones = await self._load(project_id)
        return compute_health(project, milestones, today), effective_duration(project, milestones, today)

    async def analyze(self, project_id: UUID, today: date) -> HealthAnalysis:
        """Detailed health analysis for one project."""
        project, milestones = await self._load(project_id)
        analysis = health_analyzer.analyze(project, milestones, today)
        logger.debug(f"Project {project_id}: {health_analyzer.quick_summary(analysis)}")
        return analysis

    async def find_issues(self, today: date) -> list[HealthIssue]:
        """Scan every project for health calculation issues."""
        projects = await self._project_repo.list_all()
        milestones = await self._milestone_repo.list_by_projects(p.id for p in projects)
        return health_analyzer.find_issues(((p, milestones.get(p.id, [])) for p in projects), today)

    async def recalculate_all(self, today: date) -> RecalculationResult:
        """Refresh every project."""
        projects = await self._project_repo.list_all()
        return await self._recalculate(projects, today)

    async def recalculate_many(self, project_ids: Iterable[UUID], today: date) -> RecalculationResult:
        """Refresh the given projects; unknown IDs are reported as errors."""
        projects: list[Project] = []
        errors: list[str] = []
        for project_id in project_ids:
            project = await self._project_repo.get(project_id)
            if project:
                projects.append(project)
            else:
                errors.append(f"Project {project_id} not found")

        result = await self._recalculate(projects, today)
        result.errors = errors + result.errors
        result.total_count += len(errors)
        result.success = not result.errors
        return result

    async def _recalculate(self, projects: list[Project], today: date) -> RecalculationResult:
        result = RecalculationResult(total_count=len(projects))
        if not projects:
            return result

        milestones = await self._milestone_repo.list_by_projects(p.id for p in projects)
        for project in projects:
            try:
                await self._refresh_loaded(project, milestones.get(project.id, []), today)
                result.updated_count += 1
            except Exception as e:
                logger.error(f"Failed to recalculate project {project.id}: {e}")
                result.errors.append(f"Project {project.id}: {e}")

        result.success = not result.errors
        logger.info(f"Recalculated {result.updated_count}/{result.total_count} projects")
        return result

    async def recalculate_status_colors(self, today: date) -> int:
        """
        Recompute health for every project and store only changed colors.

        Returns:
            int: Number of projects whose color changed
        """
        projects = await self._project_repo.list_all()
        milestones = await self._milestone_repo.list_by_projects(p.id for p in projects)

        changed = 0
        for project in projects:
            project_milestones = milestones.get(project.id, [])
            health = compute_health(project, project_milestones, today)
            if health.color == project.computed_status_color:
                continue
            duration = effective_duration(project, project_milestones, today)
            await self._project_repo.save_computed(project.id, build_computed_fields(health, duration))
            changed += 1

        logger.info(f"Status colors changed for {changed}/{len(projects)} projects")
        return changed

    async def projects_needing_duration_update(self) -> list[UUID]:
        """Projects with any cached duration field missing."""
        projects = await self._project_repo.list_all()
        return [
            project.id
            for project in projects
            if any(getattr(project, field) is None for field in _DURATION_FIELDS)
        ]

    async def duration_stats(self) -> DurationStats:
        """Aggregate cached durations over non-cancelled projects."""
        projects = [p for p in await self._project_repo.list_all() if p.status != ProjectStatus.CANCELLED]
        with_duration = [p for p in projects if p.total_days is not None and p.working_days is not None]

        stats = DurationStats(
            total_projects=len(projects),
            projects_with_duration=len(with_duration),
            projects_without_duration=len(projects) - len(with_duration),
        )
        if with_duration:
            stats.average_total_days = round_half_up(
                sum(p.total_days for p in with_duration) / len(with_duration)
            )
            stats.average_working_days = round_half_up(
                sum(p.working_days for p in with_duration) / len(with_duration)
            )
        return stats

    async def validate_durations(self) -> DurationValidationReport:
        """Check cached duration fields of non-cancelled projects for consistency."""
        projects = [p for p in await self._project_repo.list_all() if p.status != ProjectStatus.CANCELLED]
        report = DurationValidationReport()

        for project in projects:
            issues = _duration_issues(project)
            report.inconsistencies.extend(
                DurationInconsistency(project_id=project.id, issue=issue) for issue in issues
            )
            if issues:
                report.invalid_projects += 1
            else:
                report.valid_projects += 1

        if report.invalid_projects:
            logger.warning(f"Found {report.invalid_projects} project(s) with inconsistent durations")
        return report

    async def set_date_override(self, project_id: UUID, enabled: bool, today: date) -> Project:
        """Switch a project's dates between milestone-driven and manual."""
        project, milestones = await self._load(project_id)
        controller = DateOverrideController.from_project(project)
        if enabled:
            controller.enable_override()
        else:
            controller.disable_override(compute_duration(milestones, today))

        project = await self._project_repo.save_dates(
            project_id, controller.is_overridden, controller.start_date, controller.end_date
        )
        return await self._refresh_loaded(project, milestones, today)

    async def edit_manual_dates(
        self,
        project_id: UUID,
        start_date: date,
        end_date: date,
        today: date,
    ) -> Project:
        """
        Replace a project's manually edited dates.

        Raises:
            NotFoundError: If the project does not exist
            BusinessLogicError: If the project's dates are not overridden
            ValidationError: If end_date is before start_date
        """
        project, milestones = await self._load(project_id)
        controller = DateOverrideController.from_project(project)
        controller.edit_dates(start_date, end_date)

        project = await self._project_repo.save_dates(
            project_id, controller.is_overridden, controller.start_date, controller.end_date
        )
        return await self._refresh_loaded(project, milestones, today)


def _duration_issues(project: Project) -> list[str]:
    has_start = project.calculated_start_date is not None
    has_end = project.calculated_end_date is not None
    has_total = project.total_days is not None
    has_working = project.working_days is not None

    issues: list[str] = []
    if has_start != has_end:
        issues.append("Inconsistent start/end dates")
    if has_total != has_working:
        issues.append("Inconsistent total/working days")
    if (has_start and has_end) != (has_total and has_working):
        issues.append("Inconsistent date and duration data")

    if has_start and has_end and has_total:
        actual = total_days(project.calculated_start_date, project.calculated_end_date)
        if abs(actual - project.total_days) > 1:
            issues.append(f"Total days mismatch: calculated {actual}, stored {project.total_days}")
    return issues


def describe_recalculation(result: RecalculationResult, today: Optional[date] = None) -> str:
    """Short human-readable summary of a batch run."""
    suffix = f" as of {today.isoformat()}" if today else ""
    if result.success:
        return f"Updated {result.updated_count} of {result.total_count} projects{suffix}"
    return f"Updated {result.updated_count} of {result.total_count} projects{suffix} with {len(result.errors)} error(s)"
