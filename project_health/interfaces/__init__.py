"""Abstract interfaces for infrastructure abstraction."""

from project_health.interfaces.milestone_repository import IMilestoneRepository
from project_health.interfaces.project_repository import IProjectRepository

__all__ = [
    "IMilestoneRepository",
    "IProjectRepository",
]
