"""Unbind finalizer job.

Completes unbind requests whose cooling-off period has elapsed. Each request
is finalized in its own DI request scope and unit of work, so it gets
its own session and transaction: one failing space never blocks or rolls
back another.
"""

from dataclasses import dataclass
from datetime import datetime

import logfire
from dishka import AsyncContainer

from together.domain.service import UnbindService
from together.domain.unit_of_work import UnitOfWork
from together.util.time import utc_now


@dataclass
class SweepReport:
    """Outcome of one finalizer sweep."""

    finalized: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.finalized + self.skipped + self.failed


class UnbindFinalizer:
    """Sweeps expired pending unbind requests.

    Safe to run concurrently with itself and with cancellation: every
    request is completed through a conditional update, so a request is
    finalized at most once and a lost race is simply skipped.
    """

    def __init__(self, container: AsyncContainer, batch_size: int = 100) -> None:
        """Initialize the finalizer.

        Args:
            container: Application-scoped DI container
            batch_size: Maximum requests handled per sweep
        """
        self.container = container
        self.batch_size = batch_size

    async def finalize_expired(self, now: datetime | None = None) -> SweepReport:
        """Run one sweep.

        Failed requests stay pending and are picked up by the next sweep.

        Args:
            now: Reference time (defaults to the current time)

        Returns:
            Counts of finalized, skipped and failed requests
        """
        now = now or utc_now()
        report = SweepReport()

        with logfire.span("unbind_finalizer.finalize_expired", now=now.isoformat()):
            async with self.container() as scope:
                unbind_service = await scope.get(UnbindService)
                expired = await unbind_service.find_expired(now, self.batch_size)

            for request in expired:
                try:
                    async with self.container() as scope:
                        unbind_service = await scope.get(UnbindService)
                        unit_of_work = await scope.get(UnitOfWork)
                        async with unit_of_work:
                            completed = await unbind_service.finalize(
                                request.id, now
                            )
                except Exception as e:
                    report.failed += 1
                    logfire.error(
                        "Unbind finalization failed",
                        request_id=str(request.id),
                        space_id=str(request.space_id),
                        error=str(e),
                    )
                    continue

                if completed:
                    report.finalized += 1
                else:
                    report.skipped += 1

            if report.total:
                logfire.info(
                    "Unbind sweep finished",
                    finalized=report.finalized,
                    skipped=report.skipped,
                    failed=report.failed,
                )
            return report
