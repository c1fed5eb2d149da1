"""
Projects API endpoints.

CRUD operations for projects plus health, duration and date-override
endpoints. Every write refreshes the project's cached health and duration.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from project_health.api.deps import HealthService, ProjectRepo, Today
from project_health.core.exceptions import (
    BusinessLogicError,
    NotFoundError,
    ProjectHealthError,
    ValidationError,
)
from project_health.models.health import (
    DateOverrideRequest,
    DurationResult,
    DurationStats,
    DurationValidationReport,
    HealthAnalysis,
    HealthIssue,
    HealthResult,
    ManualDatesRequest,
    RecalculationRequest,
    RecalculationResult,
)
from project_health.models.project import Project, ProjectCreate, ProjectUpdate

router = APIRouter()


def _http_error(e: ProjectHealthError) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, BusinessLogicError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if isinstance(e, ValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


# ===========================================
# Batch maintenance
# ===========================================


@router.post("/recalculate", response_model=RecalculationResult)
async def recalculate_projects(
    service: HealthService,
    today: Today,
    request: Optional[RecalculationRequest] = None,
):
    """Recalculate cached health and duration for all or selected projects."""
    if request and request.project_ids:
        return await service.recalculate_many(request.project_ids, today)
    return await service.recalculate_all(today)


@router.post("/recalculate-status-colors")
async def recalculate_status_colors(service: HealthService, today: Today):
    """Recompute health everywhere and store only changed colors."""
    updated = await service.recalculate_status_colors(today)
    return {"updated_count": updated}


@router.get("/needing-duration-update", response_model=list[UUID])
async def list_projects_needing_duration_update(service: HealthService):
    """IDs of projects with missing cached duration fields."""
    return await service.projects_needing_duration_update()


@router.get("/duration-stats", response_model=DurationStats)
async def get_duration_stats(service: HealthService):
    """Aggregate duration statistics over non-cancelled projects."""
    return await service.duration_stats()


@router.get("/duration-validation", response_model=DurationValidationReport)
async def validate_durations(service: HealthService):
    """Check cached duration fields for consistency."""
    return await service.validate_durations()


@router.get("/health-issues", response_model=list[HealthIssue])
async def list_health_issues(service: HealthService, today: Today):
    """Scan every project for suspicious health calculations."""
    return await service.find_issues(today)


# ===========================================
# CRUD
# ===========================================


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: ProjectCreate,
    repo: ProjectRepo,
    service: HealthService,
    today: Today,
):
    """Create a new project."""
    created = await repo.create(project)
    return await service.refresh_project(created.id, today)


@router.get("", response_model=list[Project])
async def list_projects(
    repo: ProjectRepo,
    status: Optional[str] = Query(None, description="Filter by status"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
):
    """List projects, newest first."""
    return await repo.list(status=status, limit=limit, offset=offset)


@router.get("/{project_id}", response_model=Project)
async def get_project(project_id: UUID, repo: ProjectRepo):
    """Get a project by ID."""
    project = await repo.get(project_id)
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        )
    return project


@router.patch("/{project_id}", response_model=Project)
async def update_project(
    project_id: UUID,
    update: ProjectUpdate,
    repo: ProjectRepo,
    service: HealthService,
    today: Today,
):
    """Update a project and refresh its health."""
    try:
        await repo.update(project_id, update)
        return await service.refresh_project(project_id, today)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: UUID, repo: ProjectRepo):
    """Delete a project and its milestones."""
    deleted = await repo.delete(project_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        )


# ===========================================
# Health & duration
# ===========================================


@router.get("/{project_id}/health", response_model=HealthResult)
async def get_project_health(project_id: UUID, service: HealthService, today: Today):
    """Compute the project's health live."""
    try:
        health, _ = await service.evaluate(project_id, today)
    except ProjectHealthError as e:
        raise _http_error(e)
    return health


@router.get("/{project_id}/duration", response_model=DurationResult)
async def get_project_duration(project_id: UUID, service: HealthService, today: Today):
    """Compute the project's effective duration live."""
    try:
        _, duration = await service.evaluate(project_id, today)
    except ProjectHealthError as e:
        raise _http_error(e)
    return duration


@router.get("/{project_id}/analysis", response_model=HealthAnalysis)
async def get_project_analysis(project_id: UUID, service: HealthService, today: Today):
    """Explain the project's health with metrics and recommendations."""
    try:
        return await service.analyze(project_id, today)
    except ProjectHealthError as e:
        raise _http_error(e)


@router.post("/{project_id}/date-override", response_model=Project)
async def set_date_override(
    project_id: UUID,
    request: DateOverrideRequest,
    service: HealthService,
    today: Today,
):
    """Switch the project's dates between milestone-driven and manual."""
    try:
        return await service.set_date_override(project_id, request.enabled, today)
    except ProjectHealthError as e:
        raise _http_error(e)


@router.put("/{project_id}/dates", response_model=Project)
async def edit_project_dates(
    project_id: UUID,
    request: ManualDatesRequest,
    service: HealthService,
    today: Today,
):
    """Replace the project's manually edited dates."""
    try:
        return await service.edit_manual_dates(project_id, request.start_date, request.end_date, today)
    except ProjectHealthError as e:
        raise _http_error(e)
