"""
APScheduler configuration for debounced one-shot jobs.

Each job id identifies one pending action; scheduling the same id again
replaces the pending job, which gives cancel-and-reschedule semantics.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Optional, Sequence

import structlog
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

logger = structlog.get_logger(__name__)


class DebounceScheduler:
    """
    Manages an AsyncIOScheduler used for delayed, replaceable jobs.

    The scheduler is created lazily and started on first use, so it
    binds to the event loop that schedules the first job.
    """

    def __init__(self, misfire_grace_time: int = 30) -> None:
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._misfire_grace_time = misfire_grace_time

    def initialize(self) -> None:
        """Create the scheduler if needed."""
        if self.scheduler is not None:
            return

        self.scheduler = AsyncIOScheduler(
            timezone="UTC",
            job_defaults={
                "coalesce": True,
                "max_instances": 1,
                "misfire_grace_time": self._misfire_grace_time,
            },
        )
        logger.info("Debounce scheduler initialized")

    def start(self) -> AsyncIOScheduler:
        """Start scheduler (must be called from a running event loop)."""
        self.initialize()
        if self.scheduler is None:
            raise RuntimeError("Scheduler not initialized")

        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Debounce scheduler started")
        return self.scheduler

    def shutdown(self) -> None:
        """Shutdown scheduler, dropping pending jobs."""
        if self.scheduler is None or not self.scheduler.running:
            return

        self.scheduler.shutdown(wait=False)
        logger.info("Debounce scheduler shutdown")

    def schedule(
        self,
        job_id: str,
        func: Callable[..., Awaitable[Any]],
        delay_seconds: float,
        args: Sequence[Any] = (),
    ) -> datetime:
        """
        Run func(*args) once after delay_seconds, replacing any pending job
        with the same id.

        Args:
            job_id: Identifier of the pending action
            func: Coroutine function to run
            delay_seconds: Delay from now
            args: Positional arguments for func

        Returns:
            datetime: Planned run time (UTC)
        """
        scheduler = self.start()

        run_date = datetime.now(timezone.utc) + timedelta(seconds=delay_seconds)
        scheduler.add_job(
            func,
            trigger=DateTrigger(run_date=run_date, timezone="UTC"),
            args=list(args),
            id=job_id,
            name=job_id,
            replace_existing=True,
        )

        logger.debug("Job scheduled", job_id=job_id, run_date=run_date.isoformat())
        return run_date

    def cancel(self, job_id: str) -> bool:
        """
        Remove a pending job.

        Returns:
            bool: True if a pending job was removed, False if none existed
        """
        if self.scheduler is None:
            return False

        try:
            self.scheduler.remove_job(job_id)
        except JobLookupError:
            return False

        logger.debug("Job cancelled", job_id=job_id)
        return True

    def has_job(self, job_id: str) -> bool:
        if self.scheduler is None:
            return False
        return self.scheduler.get_job(job_id) is not None

    def get_jobs(self) -> list[dict[str, Any]]:
        """
        Get list of pending jobs.

        Returns:
            list[dict[str, Any]]: Job id and next run time
        """
        if self.scheduler is None:
            return []

        return [
            {"id": job.id, "next_run": job.next_run_time}
            for job in self.scheduler.get_jobs()
        ]
