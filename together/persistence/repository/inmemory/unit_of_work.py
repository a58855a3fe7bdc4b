"""Rollback support for the in-memory repositories.

The repositories are shared by every scope of a container, so a rollback
cannot simply restore a snapshot. Instead each write records how to undo
itself in an undo log bound to the running unit of work (a context variable,
so concurrent tasks keep separate logs), and a rollback replays that log
backwards.
"""

from collections.abc import Callable, MutableMapping
from contextvars import ContextVar, Token
from typing import Any, Optional

from together.domain.event import EventOutbox
from together.domain.unit_of_work import UnitOfWork

UndoLog = list[Callable[[], None]]

_MISSING = object()
_undo_log: ContextVar[Optional[UndoLog]] = ContextVar("inmemory_undo_log", default=None)


def remember(mapping: MutableMapping[Any, Any], key: Any) -> None:
    """Record the current value of ``mapping[key]`` before it is changed.

    Outside a unit of work (services exercised directly in tests) writes are
    final and nothing is recorded.
    """
    log = _undo_log.get()
    if log is None:
        return
    previous = mapping.get(key, _MISSING)

    def undo() -> None:
        if previous is _MISSING:
            mapping.pop(key, None)
        else:
            mapping[key] = previous

    log.append(undo)


class InMemoryUnitOfWork(UnitOfWork):
    def __init__(self, outbox: EventOutbox) -> None:
        super().__init__(outbox)
        self._token: Optional[Token[Optional[UndoLog]]] = None

    async def _begin(self) -> None:
        self._token = _undo_log.set([])

    async def _commit(self) -> None:
        self._close()

    async def _rollback(self) -> None:
        for undo in reversed(_undo_log.get() or []):
            undo()
        self._close()

    def _close(self) -> None:
        if self._token is not None:
            _undo_log.reset(self._token)
            self._token = None
