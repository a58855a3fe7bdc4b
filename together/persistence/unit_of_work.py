"""PostgreSQL unit of work over the request's session."""

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from together.domain.event import EventOutbox
from together.domain.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Commits or rolls back the session shared by the request's repositories.

    The session starts its transaction on first use, so ``_begin`` has nothing
    to do; reads made before the block join the same transaction.
    """

    def __init__(self, session: AsyncSession, outbox: EventOutbox) -> None:
        super().__init__(outbox)
        self.session = session

    async def _begin(self) -> None:
        pass

    async def _commit(self) -> None:
        await self.session.commit()
        logfire.info("Session committed")

    async def _rollback(self) -> None:
        await self.session.rollback()
