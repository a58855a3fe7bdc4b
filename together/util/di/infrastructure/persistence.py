"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from together.config import DatabaseSettings, Settings
from together.domain.event import EventOutbox
from together.domain.repository import (
    InviteCodeRepository,
    SpaceRepository,
    UnbindRequestRepository,
    UserRepository,
)
from together.domain.service import ArchivalService, NotificationService
from together.domain.unit_of_work import UnitOfWork
from together.persistence.database import create_engine, create_session_factory
from together.persistence.repository import (
    PostgresInviteCodeRepository,
    PostgresSpaceRepository,
    PostgresUnbindRequestRepository,
    PostgresUserRepository,
)
from together.persistence.unit_of_work import SqlAlchemyUnitOfWork
from together.util.di.base import ProviderBase
from together.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base.

    The component owns the unit of work, so it also owns the event outbox:
    events are published when (and only when) the unit of work commits.
    Nothing is committed implicitly: a request that never enters its unit of
    work leaves no writes behind.
    """

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    def get_event_outbox(
        self,
        notification_service: NotificationService,
        archival_service: ArchivalService,
    ) -> EventOutbox:
        """Provide the request's event outbox."""
        return EventOutbox(
            notification_service=notification_service,
            archival_service=archival_service,
        )

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Closing the session rolls back anything the unit of work did not
        commit.
        """
        async with session_factory() as session:
            yield session

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(
        self, session: AsyncSession, outbox: EventOutbox
    ) -> UnitOfWork:
        """Provide the request's unit of work."""
        return SqlAlchemyUnitOfWork(session, outbox)

    @provide(scope=Scope.REQUEST)
    def get_space_repository(
        self, session: AsyncSession, settings: DatabaseSettings
    ) -> SpaceRepository:
        """Provide Space repository."""
        return PostgresSpaceRepository(session, settings)

    @provide(scope=Scope.REQUEST)
    def get_invite_code_repository(
        self, session: AsyncSession, settings: DatabaseSettings
    ) -> InviteCodeRepository:
        """Provide InviteCode repository."""
        return PostgresInviteCodeRepository(session, settings)

    @provide(scope=Scope.REQUEST)
    def get_unbind_request_repository(
        self, session: AsyncSession, settings: DatabaseSettings
    ) -> UnbindRequestRepository:
        """Provide UnbindRequest repository."""
        return PostgresUnbindRequestRepository(session, settings)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(
        self, session: AsyncSession, settings: DatabaseSettings
    ) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session, settings)
