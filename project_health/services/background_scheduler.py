"""
Background scheduler service for periodic jobs.

Recalculates cached project health once a day so time-aware colors keep
moving as deadlines approach, even when nobody edits a milestone.
Uses APScheduler for in-process scheduling without external dependencies.
"""

from __future__ import annotations

from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from project_health.core.config import get_settings
from project_health.core.logger import logger
from project_health.models.health import RecalculationResult
from project_health.services.project_health_service import ProjectHealthService, describe_recalculation
from project_health.utils.datetime_utils import get_today

RECALCULATION_JOB_ID = "daily_health_recalculation"


class BackgroundScheduler:
    """
    Background scheduler for periodic jobs.

    Features:
    - Daily recalculation of every project's health and duration
    """

    def __init__(self, health_service: ProjectHealthService):
        self._health_service = health_service
        self._scheduler: Optional[AsyncIOScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    async def start(self):
        """Start the scheduler."""
        settings = get_settings()

        # Only run scheduler in non-test environments
        if settings.is_test:
            logger.info("Background scheduler disabled in test environment")
            return
        if not settings.RECALCULATION_ENABLED:
            logger.info("Daily health recalculation disabled by configuration")
            return

        self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            self.run_daily_recalculation,
            CronTrigger(hour=settings.RECALCULATION_HOUR, minute=settings.RECALCULATION_MINUTE),
            id=RECALCULATION_JOB_ID,
            name="Daily Health Recalculation",
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info(
            "Background scheduler started:\n"
            f"  - Daily health recalculation: "
            f"{settings.RECALCULATION_HOUR:02d}:{settings.RECALCULATION_MINUTE:02d}"
        )

    async def stop(self):
        """Stop the scheduler."""
        if self._scheduler:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.info("Background scheduler stopped")

    async def run_daily_recalculation(self) -> Optional[RecalculationResult]:
        """Recalculate every project as of today in the configured timezone."""
        today = get_today(get_settings().TIMEZONE)
        try:
            result = await self._health_service.recalculate_all(today)
        except Exception as e:
            logger.error(f"Daily health recalculation failed: {e}")
            return None

        logger.info(describe_recalculation(result, today))
        for error in result.errors:
            logger.warning(f"Recalculation error: {error}")
        return result


# Global scheduler instance
_scheduler: Optional[BackgroundScheduler] = None


async def get_background_scheduler() -> BackgroundScheduler:
    """Get the global background scheduler instance."""
    global _scheduler
    if _scheduler is None:
        from project_health.api.deps import get_health_service

        _scheduler = BackgroundScheduler(health_service=get_health_service())
    return _scheduler


async def start_background_scheduler():
    """Start the global background scheduler."""
    scheduler = await get_background_scheduler()
    await scheduler.start()


async def stop_background_scheduler():
    """Stop the global background scheduler."""
    global _scheduler
    if _scheduler:
        await _scheduler.stop()
        _scheduler = None
