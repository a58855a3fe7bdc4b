"""Background scheduling of the unbind finalizer."""

import asyncio

import logfire
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from dishka import AsyncContainer

from together.application.job import SweepReport, UnbindFinalizer
from together.config import UnbindSettings

FINALIZE_UNBINDS_JOB_ID = "finalize_unbinds"


class UnbindSweepJob:
    """Scheduled sweep that shutdown can wait for.

    The asyncio executor cancels coroutine jobs still running when the
    scheduler shuts down, so the sweep in flight is tracked here and awaited
    before the container it uses is closed.
    """

    def __init__(self, finalizer: UnbindFinalizer) -> None:
        self.finalizer = finalizer
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def running(self) -> bool:
        return not self._idle.is_set()

    async def run(self) -> SweepReport:
        self._idle.clear()
        try:
            return await self.finalizer.finalize_expired()
        finally:
            self._idle.set()

    async def wait_idle(self) -> None:
        await self._idle.wait()


def create_scheduler(
    container: AsyncContainer, unbind_settings: UnbindSettings
) -> tuple[AsyncIOScheduler, UnbindSweepJob]:
    """Create a scheduler that sweeps expired unbind requests.

    The scheduler is returned unstarted; it must be started from within the
    running event loop. Overlapping sweeps are never started
    (``max_instances=1``) and missed runs collapse into one.

    Args:
        container: Application-scoped DI container
        unbind_settings: Sweep interval and batch size

    Returns:
        Configured scheduler and the sweep job it runs
    """
    finalizer = UnbindFinalizer(container, batch_size=unbind_settings.sweep_batch_size)
    job = UnbindSweepJob(finalizer)

    scheduler = AsyncIOScheduler(timezone="UTC")
    scheduler.add_job(
        job.run,
        trigger="interval",
        seconds=unbind_settings.sweep_interval_seconds,
        id=FINALIZE_UNBINDS_JOB_ID,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    return scheduler, job


async def stop_scheduler(scheduler: AsyncIOScheduler, job: UnbindSweepJob) -> None:
    """Stop scheduling sweeps and let the one in flight finish."""
    scheduler.pause()
    if job.running:
        logfire.info("Waiting for unbind sweep to finish")
        await job.wait_idle()
    scheduler.shutdown(wait=True)
