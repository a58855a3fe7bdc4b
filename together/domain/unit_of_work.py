"""Unit of work: one transaction and the events recorded while it ran.

Every state-changing operation runs inside exactly one unit of work:

    async with unit_of_work:
        space = await space_service.add_partner(space_id, user_id)

Leaving the block normally commits and then publishes the outbox. Leaving it
with an exception rolls back every write made inside the block and drops the
recorded events, whatever the exception is later turned into (an HTTP error
response, a counted sweep failure).
"""

from abc import ABC, abstractmethod
from types import TracebackType

import logfire

from together.domain.event import EventOutbox


class UnitOfWork(ABC):
    """Transaction boundary owned by the persistence component."""

    def __init__(self, outbox: EventOutbox) -> None:
        self.outbox = outbox

    async def __aenter__(self) -> "UnitOfWork":
        await self._begin()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc_type is not None:
            await self.rollback(reason=str(exc))
            return False

        try:
            await self._commit()
        except Exception as e:
            await self.rollback(reason=str(e))
            raise
        await self.outbox.publish()
        return False

    async def rollback(self, reason: str = "") -> None:
        """Undo the writes of this unit of work and drop its events."""
        await self._rollback()
        dropped = self.outbox.discard()
        logfire.warn("Unit of work rolled back", reason=reason, dropped_events=dropped)

    @abstractmethod
    async def _begin(self) -> None:
        pass

    @abstractmethod
    async def _commit(self) -> None:
        pass

    @abstractmethod
    async def _rollback(self) -> None:
        pass
