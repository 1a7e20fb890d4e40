"""Interval scheduling of watch-list checks."""

import asyncio
import logging
from datetime import datetime, tzinfo
from typing import Any, Awaitable, Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

JOB_ID = "check_watch_list"


class CancellationToken:
    """Cooperative stop flag shared between signal handlers and the loop."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class MonitorLoop:
    """Run a job on a fixed interval until cancelled.

    The job runs inside APScheduler's asyncio scheduler; the loop itself
    only checks the cancellation token every ``poll_interval`` seconds, so
    shutdown latency does not depend on the job interval.
    """

    def __init__(
        self,
        job: Callable[[], Awaitable[Any]],
        interval_minutes: int,
        timezone: tzinfo,
        poll_interval: float = 0.5,
        run_on_startup: bool = False,
    ) -> None:
        self.job = job
        self.interval_minutes = interval_minutes
        self.timezone = timezone
        self.poll_interval = poll_interval
        self.run_on_startup = run_on_startup
        self._job_running = False

    async def _run_job(self) -> None:
        self._job_running = True
        try:
            await self.job()
        finally:
            self._job_running = False

    def _create_scheduler(self) -> AsyncIOScheduler:
        scheduler = AsyncIOScheduler(timezone=self.timezone)

        job_options: dict[str, Any] = {}
        if self.run_on_startup:
            job_options["next_run_time"] = datetime.now(self.timezone)

        job = scheduler.add_job(
            self._run_job,
            trigger=IntervalTrigger(minutes=self.interval_minutes, timezone=self.timezone),
            id=JOB_ID,
            name="Check watch list",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
            **job_options,
        )
        logger.debug(f"initialized job: {job}")
        return scheduler

    async def run(self, token: CancellationToken) -> None:
        """Block until the token is cancelled.

        An in-flight job is allowed to finish before the scheduler stops.
        """
        scheduler = self._create_scheduler()
        scheduler.start()
        logger.info(f"Scheduler started, checking every {self.interval_minutes} minutes")

        try:
            while not token.cancelled:
                await asyncio.sleep(self.poll_interval)

            scheduler.pause()
            if self._job_running:
                logger.info("Waiting for the running check to finish")
            while self._job_running:
                await asyncio.sleep(self.poll_interval)
        finally:
            scheduler.shutdown(wait=False)
            logger.info("Scheduler shut down")
