"""Unbind request repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from together.domain.model.unbind_request import UnbindRequest
from together.domain.value import SpaceId, UnbindRequestId, UnbindStatus, UserId


class UnbindRequestRepository(ABC):
    """Repository for UnbindRequest entity.

    Requests are kept after they resolve, so a space's history is a list of
    cancelled requests and at most one pending or completed one.
    """

    @abstractmethod
    async def find_by_id(self, request_id: UnbindRequestId) -> UnbindRequest | None:
        pass

    @abstractmethod
    async def find_pending_by_space(self, space_id: SpaceId) -> UnbindRequest | None:
        """Find the pending request of a space, if any."""
        pass

    @abstractmethod
    async def find_latest_by_space(self, space_id: SpaceId) -> UnbindRequest | None:
        """Find the most recently requested unbind of a space, any status."""
        pass

    @abstractmethod
    async def save(self, request: UnbindRequest) -> UnbindRequest:
        """Insert a new pending request.

        Raises:
            ConflictError: If the space already has a pending request
        """
        pass

    @abstractmethod
    async def transition(
        self,
        request_id: UnbindRequestId,
        expected_status: UnbindStatus,
        new_status: UnbindStatus,
        at: datetime,
        resolved_by: UserId | None,
        expected_version: int,
    ) -> UnbindRequest | None:
        """Move a request to ``new_status`` if it is still as the caller saw it.

        Cancel and finalize race on the same pending request; this is the
        compare-and-set that makes exactly one of them win.

        Args:
            request_id: The request to resolve
            expected_status: Status the caller read (always pending)
            new_status: Target status
            at: Resolution timestamp
            resolved_by: Acting user, None for the finalizer
            expected_version: Version the caller read

        Returns:
            The updated request, or None if it changed in the meantime
        """
        pass

    @abstractmethod
    async def find_expired_pending(
        self, now: datetime, limit: int
    ) -> list[UnbindRequest]:
        """Pending requests whose cooling-off period has elapsed, oldest first."""
        pass
