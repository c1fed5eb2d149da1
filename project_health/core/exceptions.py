"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class ProjectHealthError(Exception):
    """Base exception for project_health."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(ProjectHealthError):
    """Resource not found."""

    pass


class ValidationError(ProjectHealthError):
    """Validation error."""

    pass


class BusinessLogicError(ProjectHealthError):
    """Business logic constraint violation."""

    pass
