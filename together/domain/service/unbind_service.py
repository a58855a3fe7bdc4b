"""Unbind lifecycle domain service."""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from together.config import UnbindSettings
from together.domain.error import (
    AlreadyPendingError,
    ConflictError,
    NoPendingRequestError,
    NotPairedError,
    SpaceNotFoundError,
)
from together.domain.event import EventOutbox
from together.domain.model import UnbindRequest
from together.domain.repository import UnbindRequestRepository
from together.domain.value import (
    NotificationEvent,
    SpaceId,
    UnbindRequestId,
    UnbindStatus,
    UserId,
)
from together.util.time import utc_now

from .base import Service
from .space_service import SpaceService


class UnbindService(Service):
    """Domain service for the reversible, delayed dissolution of a space.

    A request starts a cooling-off period. Either partner can cancel it until
    the finalizer completes it; completion deletes the space.
    """

    def __init__(
        self,
        unbind_request_repository: UnbindRequestRepository,
        space_service: SpaceService,
        outbox: EventOutbox,
        unbind_settings: UnbindSettings,
    ) -> None:
        """Initialize unbind service.

        Args:
            unbind_request_repository: Unbind request repository
            space_service: Space service (membership checks, deletion)
            outbox: Events published after the unit of work commits
            unbind_settings: Cooling-off configuration
        """
        self.unbind_request_repository = unbind_request_repository
        self.space_service = space_service
        self.outbox = outbox
        self.unbind_settings = unbind_settings

    @property
    def cooling_off(self) -> timedelta:
        return timedelta(days=self.unbind_settings.cooling_off_days)

    async def request_unbind(
        self,
        space_id: SpaceId,
        requested_by: UserId,
        now: datetime | None = None,
    ) -> UnbindRequest:
        """Start the cooling-off period for a paired space.

        Args:
            space_id: Space to dissolve
            requested_by: Partner asking for it
            now: Request time (defaults to the current time)

        Returns:
            The new pending request

        Raises:
            SpaceNotFoundError: If the space does not exist
            NotSpaceMemberError: If the user is not a partner
            NotPairedError: If the space has a single partner
            AlreadyPendingError: If a request is already pending (carries it)
        """
        now = now or utc_now()
        with logfire.span(
            "unbind_service.request_unbind",
            space_id=str(space_id),
            requested_by=str(requested_by),
        ):
            space = await self.space_service.get_member_space(space_id, requested_by)
            if not space.is_paired:
                raise NotPairedError(str(space_id))

            existing = await self.unbind_request_repository.find_pending_by_space(
                space_id
            )
            if existing is not None:
                raise AlreadyPendingError(existing)

            request = UnbindRequest(
                id=UnbindRequestId(uuid4()),
                space_id=space_id,
                requested_by=requested_by,
                requested_at=now,
                expires_at=now + self.cooling_off,
            )
            try:
                saved = await self.unbind_request_repository.save(request)
            except ConflictError:
                winner = await self.unbind_request_repository.find_pending_by_space(
                    space_id
                )
                if winner is None:
                    raise
                logfire.info("Concurrent unbind request", space_id=str(space_id))
                raise AlreadyPendingError(winner)

            self.outbox.notify(
                space.partners,
                NotificationEvent.UNBIND_REQUESTED,
                space_id=str(space_id),
                request_id=str(saved.id),
                requested_by=str(requested_by),
                expires_at=saved.expires_at.isoformat(),
            )
            logfire.info(
                "Unbind requested",
                space_id=str(space_id),
                request_id=str(saved.id),
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def cancel_unbind(
        self,
        space_id: SpaceId,
        acting_user_id: UserId,
        now: datetime | None = None,
    ) -> UnbindRequest:
        """Cancel the pending request; either partner may do so.

        A request past its expiry can still be cancelled as long as the
        finalizer has not completed it.

        Returns:
            The cancelled request

        Raises:
            NoPendingRequestError: If nothing is pending (or the finalizer won)
            NotSpaceMemberError: If the user is not a partner
        """
        now = now or utc_now()
        with logfire.span(
            "unbind_service.cancel_unbind",
            space_id=str(space_id),
            user_id=str(acting_user_id),
        ):
            try:
                space = await self.space_service.get_member_space(
                    space_id, acting_user_id
                )
            except SpaceNotFoundError:
                # Already finalized; the space is gone
                raise NoPendingRequestError(str(space_id))

            pending = await self.unbind_request_repository.find_pending_by_space(
                space_id
            )
            if pending is None:
                raise NoPendingRequestError(str(space_id))

            cancelled = await self.unbind_request_repository.transition(
                pending.id,
                expected_status=UnbindStatus.PENDING,
                new_status=UnbindStatus.CANCELLED,
                at=now,
                resolved_by=acting_user_id,
                expected_version=pending.version,
            )
            if cancelled is None:
                logfire.warn(
                    "Cancel lost to concurrent resolution",
                    request_id=str(pending.id),
                )
                raise NoPendingRequestError(str(space_id))

            self.outbox.notify(
                space.partners,
                NotificationEvent.UNBIND_CANCELLED,
                space_id=str(space_id),
                request_id=str(cancelled.id),
                cancelled_by=str(acting_user_id),
            )
            logfire.info(
                "Unbind cancelled", space_id=str(space_id), request_id=str(cancelled.id)
            )
            return cancelled

    async def get_status(self, space_id: SpaceId) -> UnbindRequest | None:
        """The pending request of a space, else its most recent one."""
        pending = await self.unbind_request_repository.find_pending_by_space(space_id)
        if pending is not None:
            return pending
        return await self.unbind_request_repository.find_latest_by_space(space_id)

    async def find_expired(self, now: datetime, limit: int) -> list[UnbindRequest]:
        with logfire.span("unbind_service.find_expired", limit=limit):
            return await self.unbind_request_repository.find_expired_pending(
                now, limit
            )

    async def finalize(
        self, request_id: UnbindRequestId, now: datetime | None = None
    ) -> bool:
        """Complete an expired request and delete its space.

        Safe to call repeatedly and concurrently with cancel: only the caller
        whose conditional update succeeds deletes the space.

        Returns:
            True if this call completed the request, False if it was skipped
        """
        now = now or utc_now()
        with logfire.span("unbind_service.finalize", request_id=str(request_id)):
            request = await self.unbind_request_repository.find_by_id(request_id)
            if request is None or not request.is_pending:
                return False
            if not request.is_expired(now):
                logfire.info(
                    "Unbind request not yet expired", request_id=str(request_id)
                )
                return False

            completed = await self.unbind_request_repository.transition(
                request.id,
                expected_status=UnbindStatus.PENDING,
                new_status=UnbindStatus.COMPLETED,
                at=now,
                resolved_by=None,
                expected_version=request.version,
            )
            if completed is None:
                logfire.info(
                    "Unbind request resolved concurrently",
                    request_id=str(request_id),
                )
                return False

            try:
                space = await self.space_service.delete_space(request.space_id)
            except SpaceNotFoundError:
                logfire.warn(
                    "Space already deleted before unbind completed",
                    space_id=str(request.space_id),
                )
                return True

            self.outbox.notify(
                space.partners,
                NotificationEvent.UNBIND_COMPLETED,
                space_id=str(space.id),
                request_id=str(request.id),
            )
            logfire.info(
                "Unbind completed", space_id=str(space.id), request_id=str(request.id)
            )
            return True
