#!/usr/bin/env python3
"""Serve the Together API with uvicorn.

Logfire is configured before the app is imported so that import-time
failures (bad settings, unreachable providers) are reported too.
"""

import sys

import logfire
import uvicorn

from together.config import Settings
from together.util.logging import setup_logging
from together.util.observability import configure_logfire

APP = "together.interface.api.app:app"


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting Together API",
            environment=settings.environment,
            port=settings.port,
            unbind_sweep=settings.unbind.sweep_enabled,
        )
        # Importing the app configures logfire again, which is a no-op
        uvicorn.run(
            APP,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0
    except Exception as e:
        logfire.error(
            "Together API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
