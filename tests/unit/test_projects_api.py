from datetime import date, datetime
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest
from fastapi import HTTPException

from project_health.api.milestones import create_milestone, delete_milestone, update_milestone
from project_health.api.projects import (
    create_project,
    edit_project_dates,
    get_project,
    get_project_health,
    recalculate_projects,
    set_date_override,
    update_project,
)
from project_health.core.exceptions import BusinessLogicError, NotFoundError, ValidationError
from project_health.models.enums import HealthRule, StatusColor
from project_health.models.health import (
    DateOverrideRequest,
    DurationResult,
    HealthResult,
    ManualDatesRequest,
    RecalculationRequest,
    RecalculationResult,
)
from project_health.models.milestone import MilestoneCreate, MilestoneUpdate, StoredMilestone
from project_health.models.project import Project, ProjectCreate, ProjectUpdate

TODAY = date(2024, 6, 12)


def _make_milestone(project_id: UUID) -> StoredMilestone:
    timestamp = datetime(2024, 6, 1, 9, 0)
    return StoredMilestone(
        id=uuid4(),
        project_id=project_id,
        title="Design review",
        date=date(2024, 6, 20),
        completion=40,
        weight=4,
        created_at=timestamp,
        updated_at=timestamp,
    )


@pytest.mark.asyncio
async def test_create_project_refreshes_cached_health() -> None:
    project_id = uuid4()
    repo = AsyncMock()
    service = AsyncMock()
    repo.create.return_value = Project(id=project_id, title="CRM rollout")
    refreshed = Project(id=project_id, title="CRM rollout", computed_status_color=StatusColor.GREEN)
    service.refresh_project.return_value = refreshed

    result = await create_project(ProjectCreate(title="CRM rollout"), repo=repo, service=service, today=TODAY)

    assert result is refreshed
    service.refresh_project.assert_awaited_once_with(project_id, TODAY)


@pytest.mark.asyncio
async def test_get_project_missing_returns_404() -> None:
    repo = AsyncMock()
    repo.get.return_value = None

    with pytest.raises(HTTPException) as exc_info:
        await get_project(uuid4(), repo=repo)

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_update_project_missing_returns_404() -> None:
    repo = AsyncMock()
    service = AsyncMock()
    repo.update.side_effect = NotFoundError("Project not found")

    with pytest.raises(HTTPException) as exc_info:
        await update_project(uuid4(), ProjectUpdate(title="x"), repo=repo, service=service, today=TODAY)

    assert exc_info.value.status_code == 404
    service.refresh_project.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_project_health_returns_live_result() -> None:
    service = AsyncMock()
    health = HealthResult(color=StatusColor.YELLOW, percentage=30, reasoning="r", rule=HealthRule.INACTIVE)
    service.evaluate.return_value = (health, DurationResult())

    result = await get_project_health(uuid4(), service=service, today=TODAY)

    assert result == health


@pytest.mark.asyncio
async def test_edit_dates_without_override_returns_409() -> None:
    service = AsyncMock()
    service.edit_manual_dates.side_effect = BusinessLogicError("enable the date override first")
    request = ManualDatesRequest(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))

    with pytest.raises(HTTPException) as exc_info:
        await edit_project_dates(uuid4(), request, service=service, today=TODAY)

    assert exc_info.value.status_code == 409


@pytest.mark.asyncio
async def test_edit_dates_end_before_start_returns_422() -> None:
    service = AsyncMock()
    service.edit_manual_dates.side_effect = ValidationError("End date must not be before start date")
    request = ManualDatesRequest(start_date=date(2024, 1, 31), end_date=date(2024, 1, 1))

    with pytest.raises(HTTPException) as exc_info:
        await edit_project_dates(uuid4(), request, service=service, today=TODAY)

    assert exc_info.value.status_code == 422


@pytest.mark.asyncio
async def test_set_date_override_passes_flag() -> None:
    project_id = uuid4()
    service = AsyncMock()
    service.set_date_override.return_value = Project(id=project_id, dates_overridden=True)

    result = await set_date_override(project_id, DateOverrideRequest(enabled=True), service=service, today=TODAY)

    assert result.dates_overridden is True
    service.set_date_override.assert_awaited_once_with(project_id, True, TODAY)


@pytest.mark.asyncio
async def test_recalculate_all_without_ids() -> None:
    service = AsyncMock()
    service.recalculate_all.return_value = RecalculationResult(updated_count=3, total_count=3)

    result = await recalculate_projects(service=service, today=TODAY, request=None)

    assert result.updated_count == 3
    service.recalculate_many.assert_not_awaited()


@pytest.mark.asyncio
async def test_recalculate_selected_ids() -> None:
    ids = [uuid4(), uuid4()]
    service = AsyncMock()
    service.recalculate_many.return_value = RecalculationResult(updated_count=2, total_count=2)

    await recalculate_projects(service=service, today=TODAY, request=RecalculationRequest(project_ids=ids))

    service.recalculate_many.assert_awaited_once_with(ids, TODAY)
    service.recalculate_all.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_milestone_for_missing_project_returns_404() -> None:
    repo = AsyncMock()
    project_repo = AsyncMock()
    service = AsyncMock()
    project_repo.get.return_value = None

    with pytest.raises(HTTPException) as exc_info:
        await create_milestone(
            MilestoneCreate(project_id=uuid4(), title="Kickoff"),
            repo=repo,
            project_repo=project_repo,
            service=service,
            today=TODAY,
        )

    assert exc_info.value.status_code == 404
    repo.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_milestone_refreshes_project() -> None:
    project_id = uuid4()
    repo = AsyncMock()
    project_repo = AsyncMock()
    service = AsyncMock()
    project_repo.get.return_value = Project(id=project_id)
    repo.create.return_value = _make_milestone(project_id)

    result = await create_milestone(
        MilestoneCreate(project_id=project_id, title="Design review"),
        repo=repo,
        project_repo=project_repo,
        service=service,
        today=TODAY,
    )

    assert result.project_id == project_id
    service.refresh_project.assert_awaited_once_with(project_id, TODAY)


@pytest.mark.asyncio
async def test_update_missing_milestone_returns_404() -> None:
    repo = AsyncMock()
    service = AsyncMock()
    repo.update.side_effect = NotFoundError("Milestone not found")

    with pytest.raises(HTTPException) as exc_info:
        await update_milestone(uuid4(), MilestoneUpdate(completion=50), repo=repo, service=service, today=TODAY)

    assert exc_info.value.status_code == 404
    service.refresh_project.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_milestone_refreshes_owner() -> None:
    project_id = uuid4()
    milestone_id = uuid4()
    repo = AsyncMock()
    service = AsyncMock()
    repo.get_project_id.return_value = project_id

    await delete_milestone(milestone_id, repo=repo, service=service, today=TODAY)

    repo.delete.assert_awaited_once_with(milestone_id)
    service.refresh_project.assert_awaited_once_with(project_id, TODAY)
