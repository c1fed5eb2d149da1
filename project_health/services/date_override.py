"""
Automatic vs. manually edited project dates.

In AUTO mode a project's start/end dates follow the DurationCalculator. In
MANUAL mode they are frozen at whatever the user last entered. Both dates are
always in the same mode; there is no partial override.

    AUTO --enable_override()--> MANUAL --disable_override(duration)--> AUTO
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from project_health.core.exceptions import BusinessLogicError, ValidationError
from project_health.core.logger import setup_logger
from project_health.models.enums import DateMode
from project_health.models.health import DurationResult
from project_health.models.milestone import Milestone
from project_health.models.project import Project, ProjectBase
from project_health.services.duration_calculator import compute_duration, compute_duration_from_dates

logger = setup_logger(__name__)


class DateOverrideController:
    """
    Small state machine owning a project's displayed start/end dates.

    The controller holds caller state only; it is rebuilt from a project with
    from_project() and written back with apply_to().
    """

    def __init__(
        self,
        mode: DateMode = DateMode.AUTO,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ):
        self._mode = mode
        self._start_date = start_date
        self._end_date = end_date

    @classmethod
    def from_project(cls, project: ProjectBase) -> "DateOverrideController":
        mode = DateMode.MANUAL if project.dates_overridden else DateMode.AUTO
        return cls(mode=mode, start_date=project.start_date, end_date=project.end_date)

    @property
    def mode(self) -> DateMode:
        return self._mode

    @property
    def is_overridden(self) -> bool:
        return self._mode == DateMode.MANUAL

    @property
    def start_date(self) -> Optional[date]:
        return self._start_date

    @property
    def end_date(self) -> Optional[date]:
        return self._end_date

    @property
    def dates(self) -> tuple[Optional[date], Optional[date]]:
        return self._start_date, self._end_date

    def sync(self, duration: DurationResult) -> bool:
        """
        Adopt computed dates while in AUTO mode.

        Returns:
            bool: True if the stored dates changed; always False in MANUAL mode
        """
        if self.is_overridden:
            return False
        if self.dates == (duration.start_date, duration.end_date):
            return False
        self._start_date = duration.start_date
        self._end_date = duration.end_date
        return True

    def enable_override(self) -> None:
        """Freeze the current dates as the editable baseline."""
        if self.is_overridden:
            return
        self._mode = DateMode.MANUAL
        logger.debug(f"Date override enabled at {self._start_date} - {self._end_date}")

    def edit_dates(self, start_date: date, end_date: date) -> None:
        """
        Replace both manual dates.

        Raises:
            BusinessLogicError: If called while dates follow milestones
            ValidationError: If end_date is before start_date
        """
        if not self.is_overridden:
            raise BusinessLogicError("Project dates follow milestones; enable the date override first")
        if end_date < start_date:
            raise ValidationError(
                "End date must not be before start date",
                details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
            )
        self._start_date = start_date
        self._end_date = end_date

    def disable_override(self, duration: DurationResult) -> None:
        """Discard manual dates and follow the computed ones again."""
        self._mode = DateMode.AUTO
        self._start_date = duration.start_date
        self._end_date = duration.end_date

    def apply_to(self, project: Project) -> Project:
        """Copy of the project carrying this controller's mode and dates."""
        return project.model_copy(
            update={
                "dates_overridden": self.is_overridden,
                "start_date": self._start_date,
                "end_date": self._end_date,
            }
        )


def effective_duration(
    project: ProjectBase,
    milestones: Sequence[Milestone],
    today: date,
) -> DurationResult:
    """
    Duration that is authoritative for a project.

    Milestone-derived unless the project's dates are overridden and both
    manual dates are set, in which case the manual pair is used.
    """
    if project.dates_overridden and project.start_date and project.end_date:
        return compute_duration_from_dates(project.start_date, project.end_date, today)
    return compute_duration(milestones, today)
