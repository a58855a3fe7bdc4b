"""Shared state of PostgreSQL repositories."""

from sqlalchemy.ext.asyncio import AsyncSession

from together.config import DatabaseSettings


class PostgresRepository:
    """Holds the request's session and the storage retry policy."""

    def __init__(self, session: AsyncSession, settings: DatabaseSettings) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            settings: Database settings (retry attempts and backoff)
        """
        self.session = session
        self.settings = settings
