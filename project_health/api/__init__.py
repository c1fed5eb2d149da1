"""API routers."""

from project_health.api import milestones, projects

__all__ = [
    "projects",
    "milestones",
]
