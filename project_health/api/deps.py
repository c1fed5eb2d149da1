"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the infrastructure
implementations and services used by the routers.
"""

from datetime import date
from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Query

from project_health.core.config import get_settings
from project_health.interfaces.milestone_repository import IMilestoneRepository
from project_health.interfaces.project_repository import IProjectRepository
from project_health.services.project_health_service import ProjectHealthService
from project_health.utils.datetime_utils import get_today


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_project_repository() -> IProjectRepository:
    """Get project repository instance."""
    from project_health.infrastructure.local.project_repository import SqliteProjectRepository

    return SqliteProjectRepository()


@lru_cache()
def get_milestone_repository() -> IMilestoneRepository:
    """Get milestone repository instance."""
    from project_health.infrastructure.local.milestone_repository import SqliteMilestoneRepository

    return SqliteMilestoneRepository()


# ===========================================
# Service Dependencies
# ===========================================


@lru_cache()
def get_health_service() -> ProjectHealthService:
    """Get project health service instance."""
    return ProjectHealthService(
        project_repo=get_project_repository(),
        milestone_repo=get_milestone_repository(),
    )


def get_reference_date(
    as_of: Optional[date] = Query(None, description="Reference date (defaults to today)"),
) -> date:
    """Reference date for live calculations."""
    return as_of or get_today(get_settings().TIMEZONE)


# Type aliases for cleaner dependency injection
ProjectRepo = Annotated[IProjectRepository, Depends(get_project_repository)]
MilestoneRepo = Annotated[IMilestoneRepository, Depends(get_milestone_repository)]
HealthService = Annotated[ProjectHealthService, Depends(get_health_service)]
Today = Annotated[date, Depends(get_reference_date)]
