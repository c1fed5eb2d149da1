"""
SQLite implementation of Project repository.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, select

from project_health.core.exceptions import NotFoundError
from project_health.infrastructure.local.database import MilestoneORM, ProjectORM, get_session_factory
from project_health.interfaces.project_repository import IProjectRepository
from project_health.models.project import ComputedProjectFields, Project, ProjectCreate, ProjectUpdate


def _enum_value(value):
    return value.value if hasattr(value, "value") else value


class SqliteProjectRepository(IProjectRepository):
    """SQLite implementation of project repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ProjectORM) -> Project:
        """Convert ORM object to Pydantic model."""
        return Project.model_validate(orm, from_attributes=True)

    async def _get_orm(self, session, project_id: UUID) -> Optional[ProjectORM]:
        result = await session.execute(select(ProjectORM).where(ProjectORM.id == str(project_id)))
        return result.scalar_one_or_none()

    async def create(self, project: ProjectCreate) -> Project:
        """Create a new project."""
        async with self._session_factory() as session:
            orm = ProjectORM(
                id=str(uuid4()),
                title=project.title,
                description=project.description,
                status=project.status.value,
                health_calculation_type=project.health_calculation_type.value,
                manual_status_color=_enum_value(project.manual_status_color),
                manual_health_percentage=project.manual_health_percentage,
                start_date=project.start_date,
                end_date=project.end_date,
                dates_overridden=project.dates_overridden,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, project_id: UUID) -> Optional[Project]:
        """Get a project by ID."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, project_id)
            return self._orm_to_model(orm) if orm else None

    async def list(
        self,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Project]:
        """List projects with optional status filter."""
        async with self._session_factory() as session:
            query = select(ProjectORM)
            if status:
                query = query.where(ProjectORM.status == status)
            query = query.order_by(ProjectORM.created_at.desc()).limit(limit).offset(offset)

            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_all(self) -> list[Project]:
        """List every project."""
        async with self._session_factory() as session:
            result = await session.execute(select(ProjectORM).order_by(ProjectORM.created_at))
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def update(self, project_id: UUID, update: ProjectUpdate) -> Project:
        """Update a project's editable fields."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, project_id)
            if not orm:
                raise NotFoundError(f"Project {project_id} not found")

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                setattr(orm, field, _enum_value(value))

            orm.updated_at = datetime.utcnow()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def save_dates(
        self,
        project_id: UUID,
        dates_overridden: bool,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> Project:
        """Store the project's date mode and displayed dates."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, project_id)
            if not orm:
                raise NotFoundError(f"Project {project_id} not found")

            orm.dates_overridden = dates_overridden
            orm.start_date = start_date
            orm.end_date = end_date
            orm.updated_at = datetime.utcnow()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def save_computed(self, project_id: UUID, computed: ComputedProjectFields) -> Project:
        """Store the latest engine outputs on the project."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, project_id)
            if not orm:
                raise NotFoundError(f"Project {project_id} not found")

            for field, value in computed.model_dump().items():
                setattr(orm, field, _enum_value(value))

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, project_id: UUID) -> bool:
        """Delete a project and its milestones."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, project_id)
            if not orm:
                return False

            await session.execute(delete(MilestoneORM).where(MilestoneORM.project_id == str(project_id)))
            await session.delete(orm)
            await session.commit()
            return True
