"""Bounded retry and error translation at the repository boundary.

Each decorated repository call runs in its own SAVEPOINT, so a failed
statement can be rolled back without aborting the request's transaction:

- IntegrityError (unique/check violation) -> ConflictError, never retried
- other driver errors -> retried with linear backoff, then
  ServiceUnavailableError
"""

import asyncio
import functools
from typing import Any, Awaitable, Callable, TypeVar

import logfire
from sqlalchemy.exc import DBAPIError, IntegrityError

from together.domain.error import ConflictError, ServiceUnavailableError

T = TypeVar("T")


def storage_retry(
    method: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """Decorate an async repository method.

    The repository must expose ``session`` (AsyncSession) and ``settings``
    (DatabaseSettings).
    """

    @functools.wraps(method)
    async def wrapper(self, *args: Any, **kwargs: Any) -> T:
        attempts = max(1, self.settings.retry_attempts)
        backoff = self.settings.retry_backoff_seconds
        operation = f"{type(self).__name__}.{method.__name__}"

        for attempt in range(1, attempts + 1):
            try:
                async with self.session.begin_nested():
                    return await method(self, *args, **kwargs)
            except IntegrityError as e:
                logfire.info(
                    "Storage constraint violated",
                    operation=operation,
                    error=str(e.orig),
                )
                raise ConflictError(str(e.orig)) from e
            except DBAPIError as e:
                if e.connection_invalidated or attempt == attempts:
                    logfire.error(
                        "Storage operation failed",
                        operation=operation,
                        attempts=attempt,
                        error=str(e),
                    )
                    raise ServiceUnavailableError() from e
                logfire.warn(
                    "Transient storage error, retrying",
                    operation=operation,
                    attempt=attempt,
                    error=str(e),
                )
                await asyncio.sleep(backoff * attempt)

        # Unreachable: the loop either returns or raises
        raise ServiceUnavailableError()

    return wrapper
