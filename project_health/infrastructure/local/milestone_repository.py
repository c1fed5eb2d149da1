"""
SQLite implementation of Milestone repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable
from uuid import UUID, uuid4

from sqlalchemy import select

from project_health.core.exceptions import NotFoundError
from project_health.infrastructure.local.database import MilestoneORM, get_session_factory
from project_health.interfaces.milestone_repository import IMilestoneRepository
from project_health.models.milestone import MilestoneCreate, MilestoneUpdate, StoredMilestone

# Fields that may be cleared explicitly with null
_NULLABLE_FIELDS = {"date", "end_date"}


class SqliteMilestoneRepository(IMilestoneRepository):
    """SQLite implementation of milestone repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: MilestoneORM) -> StoredMilestone:
        """Convert ORM object to Pydantic model."""
        return StoredMilestone.model_validate(orm, from_attributes=True)

    async def create(self, milestone: MilestoneCreate) -> StoredMilestone:
        """Create a new milestone."""
        async with self._session_factory() as session:
            orm = MilestoneORM(
                id=str(uuid4()),
                project_id=str(milestone.project_id),
                title=milestone.title,
                date=milestone.date,
                end_date=milestone.end_date,
                completion=milestone.completion,
                weight=milestone.weight,
                status=milestone.status.value,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, milestone_id: UUID) -> StoredMilestone | None:
        """Get a milestone by ID."""
        async with self._session_factory() as session:
            result = await session.execute(select(MilestoneORM).where(MilestoneORM.id == str(milestone_id)))
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def get_project_id(self, milestone_id: UUID) -> UUID | None:
        """Get project ID for a milestone."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(MilestoneORM.project_id).where(MilestoneORM.id == str(milestone_id))
            )
            pid = result.scalar_one_or_none()
            return UUID(pid) if pid else None

    async def list_by_project(self, project_id: UUID) -> list[StoredMilestone]:
        """List milestones for a project."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(MilestoneORM)
                .where(MilestoneORM.project_id == str(project_id))
                .order_by(MilestoneORM.date, MilestoneORM.created_at)
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_by_projects(self, project_ids: Iterable[UUID]) -> dict[UUID, list[StoredMilestone]]:
        """List milestones for many projects, keyed by project ID."""
        ids = [str(pid) for pid in project_ids]
        grouped: dict[UUID, list[StoredMilestone]] = {UUID(pid): [] for pid in ids}
        if not ids:
            return grouped

        async with self._session_factory() as session:
            result = await session.execute(
                select(MilestoneORM)
                .where(MilestoneORM.project_id.in_(ids))
                .order_by(MilestoneORM.date, MilestoneORM.created_at)
            )
            for orm in result.scalars().all():
                milestone = self._orm_to_model(orm)
                grouped[milestone.project_id].append(milestone)
        return grouped

    async def update(self, milestone_id: UUID, update: MilestoneUpdate) -> StoredMilestone:
        """Update a milestone."""
        async with self._session_factory() as session:
            result = await session.execute(select(MilestoneORM).where(MilestoneORM.id == str(milestone_id)))
            orm = result.scalar_one_or_none()
            if not orm:
                raise NotFoundError(f"Milestone {milestone_id} not found")

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is None and field not in _NULLABLE_FIELDS:
                    continue
                if hasattr(value, "value"):
                    value = value.value
                setattr(orm, field, value)

            orm.updated_at = datetime.utcnow()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, milestone_id: UUID) -> bool:
        """Delete a milestone. Returns True if deleted, False if not found."""
        async with self._session_factory() as session:
            result = await session.execute(select(MilestoneORM).where(MilestoneORM.id == str(milestone_id)))
            orm = result.scalar_one_or_none()
            if not orm:
                return False

            await session.delete(orm)
            await session.commit()
            return True
