"""
Milestone repository interface.

Defines the contract for milestone data operations.
"""

from abc import ABC, abstractmethod
from typing import Iterable
from uuid import UUID

from project_health.models.milestone import MilestoneCreate, MilestoneUpdate, StoredMilestone


class IMilestoneRepository(ABC):
    """Interface for milestone repository operations."""

    @abstractmethod
    async def create(self, milestone: MilestoneCreate) -> StoredMilestone:
        """Create a new milestone."""
        pass

    @abstractmethod
    async def get(self, milestone_id: UUID) -> StoredMilestone | None:
        """Get a milestone by ID."""
        pass

    @abstractmethod
    async def get_project_id(self, milestone_id: UUID) -> UUID | None:
        """Get the owning project ID for a milestone."""
        pass

    @abstractmethod
    async def list_by_project(self, project_id: UUID) -> list[StoredMilestone]:
        """List milestones for a project, ordered by date."""
        pass

    @abstractmethod
    async def list_by_projects(self, project_ids: Iterable[UUID]) -> dict[UUID, list[StoredMilestone]]:
        """List milestones for many projects at once, keyed by project ID."""
        pass

    @abstractmethod
    async def update(self, milestone_id: UUID, update: MilestoneUpdate) -> StoredMilestone:
        """Update a milestone. Raises NotFoundError if it does not exist."""
        pass

    @abstractmethod
    async def delete(self, milestone_id: UUID) -> bool:
        """Delete a milestone. Returns True if deleted, False if not found."""
        pass
