"""
Milestone API endpoints.

Provides CRUD operations for milestones. Every write refreshes the owning
project's cached health and duration.
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from project_health.api.deps import HealthService, MilestoneRepo, ProjectRepo, Today
from project_health.core.exceptions import NotFoundError
from project_health.models.milestone import MilestoneCreate, MilestoneUpdate, StoredMilestone

router = APIRouter(prefix="/milestones", tags=["milestones"])


async def _require_project(project_id: UUID, project_repo: ProjectRepo) -> None:
    if not await project_repo.get(project_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        )


@router.post("", response_model=StoredMilestone, status_code=status.HTTP_201_CREATED)
async def create_milestone(
    milestone: MilestoneCreate,
    repo: MilestoneRepo,
    project_repo: ProjectRepo,
    service: HealthService,
    today: Today,
) -> StoredMilestone:
    """Create a new milestone."""
    await _require_project(milestone.project_id, project_repo)
    created = await repo.create(milestone)
    await service.refresh_project(milestone.project_id, today)
    return created


@router.get("", response_model=list[StoredMilestone])
async def list_milestones(
    repo: MilestoneRepo,
    project_repo: ProjectRepo,
    project_id: UUID = Query(..., description="Filter milestones by project ID"),
) -> list[StoredMilestone]:
    """List milestones for a project."""
    await _require_project(project_id, project_repo)
    return await repo.list_by_project(project_id)


@router.get("/{milestone_id}", response_model=StoredMilestone)
async def get_milestone(milestone_id: UUID, repo: MilestoneRepo) -> StoredMilestone:
    """Get a milestone by ID."""
    milestone = await repo.get(milestone_id)
    if not milestone:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Milestone {milestone_id} not found",
        )
    return milestone


@router.patch("/{milestone_id}", response_model=StoredMilestone)
async def update_milestone(
    milestone_id: UUID,
    update: MilestoneUpdate,
    repo: MilestoneRepo,
    service: HealthService,
    today: Today,
) -> StoredMilestone:
    """Update a milestone."""
    try:
        updated = await repo.update(milestone_id, update)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    await service.refresh_project(updated.project_id, today)
    return updated


@router.delete("/{milestone_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_milestone(
    milestone_id: UUID,
    repo: MilestoneRepo,
    service: HealthService,
    today: Today,
) -> None:
    """Delete a milestone."""
    project_id = await repo.get_project_id(milestone_id)
    if not project_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Milestone {milestone_id} not found",
        )
    await repo.delete(milestone_id)
    await service.refresh_project(project_id, today)
