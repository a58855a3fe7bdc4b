"""Standard library logging for scripts and third-party libraries.

Application events go through logfire; this only decides what uvicorn,
alembic, httpx and APScheduler print through ``logging``.
"""

import logging
import sys

from together.config import Settings

QUIET_LOGGERS = ("httpx", "httpcore", "apscheduler")


def setup_logging(settings: Settings) -> None:
    """Configure root logging and silence chatty libraries.

    Args:
        settings: Application settings (``debug`` selects DEBUG over INFO)
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("together").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
