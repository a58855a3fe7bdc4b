"""In-memory unbind request repository for testing."""

from datetime import datetime
from typing import Optional

from together.domain.error import ConflictError
from together.domain.model import UnbindRequest
from together.domain.repository.unbind_request import UnbindRequestRepository
from together.domain.value import SpaceId, UnbindRequestId, UnbindStatus, UserId

from .unit_of_work import remember


class InMemoryUnbindRequestRepository(UnbindRequestRepository):
    """In-memory implementation of UnbindRequestRepository for testing."""

    def __init__(self) -> None:
        self._requests: dict[UnbindRequestId, UnbindRequest] = {}

    async def find_by_id(self, request_id: UnbindRequestId) -> Optional[UnbindRequest]:
        return self._requests.get(request_id)

    def _pending(self, space_id: SpaceId) -> Optional[UnbindRequest]:
        for request in self._requests.values():
            if request.space_id == space_id and request.is_pending:
                return request
        return None

    async def find_pending_by_space(self, space_id: SpaceId) -> Optional[UnbindRequest]:
        return self._pending(space_id)

    async def find_latest_by_space(self, space_id: SpaceId) -> Optional[UnbindRequest]:
        requests = [r for r in self._requests.values() if r.space_id == space_id]
        if not requests:
            return None
        return max(requests, key=lambda r: r.requested_at)

    async def save(self, request: UnbindRequest) -> UnbindRequest:
        """Insert a pending request.

        Raises:
            ConflictError: If the space already has a pending request
        """
        if request.id in self._requests:
            raise ConflictError(f"Duplicate unbind request {request.id}")
        if self._pending(request.space_id) is not None:
            raise ConflictError(
                f"Space {request.space_id} already has a pending request"
            )
        remember(self._requests, request.id)
        self._requests[request.id] = request
        return request

    async def transition(
        self,
        request_id: UnbindRequestId,
        expected_status: UnbindStatus,
        new_status: UnbindStatus,
        at: datetime,
        resolved_by: UserId | None,
        expected_version: int,
    ) -> Optional[UnbindRequest]:
        current = self._requests.get(request_id)
        if (
            current is None
            or current.status != expected_status
            or current.version != expected_version
        ):
            return None
        updated = current.model_copy(
            update={
                "status": new_status,
                "resolved_at": at,
                "resolved_by": resolved_by,
                "version": current.version + 1,
            }
        )
        remember(self._requests, request_id)
        self._requests[request_id] = updated
        return updated

    async def find_expired_pending(
        self, now: datetime, limit: int
    ) -> list[UnbindRequest]:
        expired = [
            r for r in self._requests.values() if r.is_pending and r.is_expired(now)
        ]
        expired.sort(key=lambda r: r.expires_at)
        return expired[:limit]
