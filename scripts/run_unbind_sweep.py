#!/usr/bin/env python3
"""Run one unbind finalizer sweep (for cron, or when the API's sweep is off)."""

import asyncio
import sys

import logfire

from together.application.job import UnbindFinalizer
from together.config import Settings
from together.util.di.container import create_job_container
from together.util.logging import setup_logging
from together.util.observability import configure_logfire


async def run(settings: Settings) -> int:
    container = create_job_container()
    try:
        finalizer = UnbindFinalizer(
            container, batch_size=settings.unbind.sweep_batch_size
        )
        report = await finalizer.finalize_expired()
    finally:
        await container.close()

    logfire.info(
        "Unbind sweep run finished",
        finalized=report.finalized,
        skipped=report.skipped,
        failed=report.failed,
    )
    # Non-zero so the scheduler running this script notices failures
    return 1 if report.failed else 0


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings, service_name="together-unbind-sweep")

    try:
        return asyncio.run(run(settings))
    except Exception as e:
        logfire.error(
            "Unbind sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
