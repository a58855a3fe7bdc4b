"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from together.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the engine shared by the API and the unbind sweep.

    ``pool_pre_ping`` drops connections the server closed while idle, which
    would otherwise surface as retryable errors on the first query.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions for one unit of work each.

    A unit of work is an HTTP request or a single unbind finalization; its
    transaction is committed or rolled back by the persistence provider.
    Objects stay readable after commit so events can be published from them.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
