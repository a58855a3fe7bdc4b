"""Unit tests for the unbind sweep scheduler."""

import asyncio

import pytest

from together.application.job import SweepReport
from together.config import UnbindSettings
from together.interface.scheduler import (
    FINALIZE_UNBINDS_JOB_ID,
    UnbindSweepJob,
    create_scheduler,
    stop_scheduler,
)


class BlockingFinalizer:
    """Sweeps until released."""

    def __init__(self):
        self.release = asyncio.Event()
        self.finished = False

    async def finalize_expired(self, now=None):
        await self.release.wait()
        self.finished = True
        return SweepReport(finalized=1)


class TestScheduler:
    def test_sweep_job_is_registered(self):
        scheduler, job = create_scheduler(
            None, UnbindSettings(sweep_interval_seconds=30, sweep_batch_size=10)
        )

        scheduled = scheduler.get_job(FINALIZE_UNBINDS_JOB_ID)
        assert scheduled.func == job.run
        assert scheduled.max_instances == 1
        assert job.finalizer.batch_size == 10

    @pytest.mark.asyncio
    async def test_shutdown_waits_for_running_sweep(self):
        finalizer = BlockingFinalizer()
        job = UnbindSweepJob(finalizer)
        scheduler, _ = create_scheduler(None, UnbindSettings())
        scheduler.start()

        sweep = asyncio.create_task(job.run())
        await asyncio.sleep(0)
        assert job.running

        stopping = asyncio.create_task(stop_scheduler(scheduler, job))
        await asyncio.sleep(0)
        assert not stopping.done()

        finalizer.release.set()
        await stopping

        assert finalizer.finished
        assert (await sweep).finalized == 1
        assert not job.running
        assert not scheduler.running
