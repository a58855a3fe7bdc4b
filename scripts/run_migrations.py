#!/usr/bin/env python3
"""Upgrade the database schema to the latest revision.

Run before the API starts; a failed upgrade exits non-zero so the deploy
stops instead of serving against an outdated schema.
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from together.config import Settings
from together.util.logging import setup_logging
from together.util.observability import configure_logfire

TARGET_REVISION = "head"


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings, service_name="together-migrations")

    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)

    with logfire.span("run_migrations", target=TARGET_REVISION):
        try:
            command.upgrade(alembic_cfg, TARGET_REVISION)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    logfire.info("Database schema is up to date", target=TARGET_REVISION)
    return 0


if __name__ == "__main__":
    sys.exit(main())
