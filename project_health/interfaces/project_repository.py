"""
Project repository interface.

Defines the contract for project persistence operations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from project_health.models.project import ComputedProjectFields, Project, ProjectCreate, ProjectUpdate


class IProjectRepository(ABC):
    """Abstract interface for project persistence."""

    @abstractmethod
    async def create(self, project: ProjectCreate) -> Project:
        """
        Create a new project.

        Args:
            project: Project creation data

        Returns:
            Created project
        """
        pass

    @abstractmethod
    async def get(self, project_id: UUID) -> Optional[Project]:
        """
        Get a project by ID.

        Args:
            project_id: Project ID

        Returns:
            Project if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Project]:
        """
        List projects, newest first.

        Args:
            status: Optional lifecycle status filter
            limit: Maximum number of results
            offset: Pagination offset

        Returns:
            List of projects
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[Project]:
        """
        List every project (for batch recalculation).

        Returns:
            List of all projects
        """
        pass

    @abstractmethod
    async def update(self, project_id: UUID, update: ProjectUpdate) -> Project:
        """
        Update a project's editable fields.

        Args:
            project_id: Project ID
            update: Fields to update

        Returns:
            Updated project

        Raises:
            NotFoundError: If project not found
        """
        pass

    @abstractmethod
    async def save_dates(
        self,
        project_id: UUID,
        dates_overridden: bool,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> Project:
        """
        Store the project's date mode and displayed dates.

        Raises:
            NotFoundError: If project not found
        """
        pass

    @abstractmethod
    async def save_computed(self, project_id: UUID, computed: ComputedProjectFields) -> Project:
        """
        Store the latest engine outputs on the project.

        Args:
            project_id: Project ID
            computed: Cached health and duration values

        Returns:
            Updated project

        Raises:
            NotFoundError: If project not found
        """
        pass

    @abstractmethod
    async def delete(self, project_id: UUID) -> bool:
        """
        Delete a project and its milestones.

        Returns:
            True if deleted, False if not found
        """
        pass
