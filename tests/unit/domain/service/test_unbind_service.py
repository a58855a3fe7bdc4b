"""Unit tests for UnbindService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from together.domain.error import (
    AlreadyPendingError,
    NoPendingRequestError,
    NotPairedError,
    NotSpaceMemberError,
    SpaceNotFoundError,
)
from together.domain.event import EventOutbox, PartnerNotification, SpaceDeleted
from together.domain.repository import UnbindRequestRepository
from together.domain.service import PairingService, SpaceService, UnbindService
from together.domain.value import NotificationEvent, SpaceId, UnbindStatus
from tests.harness import ANNIVERSARY, create_env_fixture, new_user_id

unit_env = create_env_fixture()

T0 = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
COOLING_OFF = timedelta(days=7)


async def make_paired_space(env):
    space_service = await env.get(SpaceService)
    pairing_service = await env.get(PairingService)
    owner, partner = new_user_id(), new_user_id()
    space = await space_service.create_space(owner, ANNIVERSARY)
    paired = await pairing_service.confirm(space.invite_code, partner)
    # Only unbind events matter below
    (await env.get(EventOutbox)).discard()
    return paired, owner, partner


class TestRequestUnbind:
    """Tests for request_unbind."""

    @pytest.mark.asyncio
    async def test_request_starts_cooling_off(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        outbox = await unit_env.get(EventOutbox)
        space, owner, partner = await make_paired_space(unit_env)

        request = await unbind_service.request_unbind(space.id, owner, now=T0)

        assert request.status == UnbindStatus.PENDING
        assert request.requested_by == owner
        assert request.requested_at == T0
        assert request.expires_at == T0 + COOLING_OFF
        assert request.resolved_at is None
        assert [e.event for e in outbox.pending] == [
            NotificationEvent.UNBIND_REQUESTED
        ]
        assert outbox.pending[0].user_ids == (owner, partner)

    @pytest.mark.asyncio
    async def test_second_request_returns_pending_one(self, unit_env):
        """Either partner asking again does not create a duplicate."""
        unbind_service = await unit_env.get(UnbindService)
        space, owner, partner = await make_paired_space(unit_env)
        first = await unbind_service.request_unbind(space.id, owner, now=T0)

        with pytest.raises(AlreadyPendingError) as exc_info:
            await unbind_service.request_unbind(space.id, partner, now=T0)

        assert exc_info.value.request == first

    @pytest.mark.asyncio
    async def test_unpaired_space_cannot_unbind(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        unbind_service = await unit_env.get(UnbindService)
        owner = new_user_id()
        space = await space_service.create_space(owner, ANNIVERSARY)

        with pytest.raises(NotPairedError):
            await unbind_service.request_unbind(space.id, owner)

    @pytest.mark.asyncio
    async def test_outsider_cannot_request(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        space, _, _ = await make_paired_space(unit_env)

        with pytest.raises(NotSpaceMemberError):
            await unbind_service.request_unbind(space.id, new_user_id())

    @pytest.mark.asyncio
    async def test_unknown_space(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)

        with pytest.raises(SpaceNotFoundError):
            await unbind_service.request_unbind(SpaceId(uuid4()), new_user_id())


class TestCancelUnbind:
    """Tests for cancel_unbind."""

    @pytest.mark.asyncio
    async def test_either_partner_can_cancel(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        space_service = await unit_env.get(SpaceService)
        outbox = await unit_env.get(EventOutbox)
        space, owner, partner = await make_paired_space(unit_env)
        await unbind_service.request_unbind(space.id, owner, now=T0)

        cancelled = await unbind_service.cancel_unbind(
            space.id, partner, now=T0 + timedelta(days=1)
        )

        assert cancelled.status == UnbindStatus.CANCELLED
        assert cancelled.resolved_by == partner
        assert cancelled.resolved_at == T0 + timedelta(days=1)
        assert (await space_service.get_space(space.id)).is_paired
        assert outbox.pending[-1].event == NotificationEvent.UNBIND_CANCELLED

    @pytest.mark.asyncio
    async def test_cancel_without_pending_request(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        space, owner, _ = await make_paired_space(unit_env)

        with pytest.raises(NoPendingRequestError):
            await unbind_service.cancel_unbind(space.id, owner)

    @pytest.mark.asyncio
    async def test_cancel_twice(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        space, owner, partner = await make_paired_space(unit_env)
        await unbind_service.request_unbind(space.id, owner, now=T0)
        await unbind_service.cancel_unbind(space.id, owner)

        with pytest.raises(NoPendingRequestError):
            await unbind_service.cancel_unbind(space.id, partner)

    @pytest.mark.asyncio
    async def test_outsider_cannot_cancel(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        space, owner, _ = await make_paired_space(unit_env)
        await unbind_service.request_unbind(space.id, owner, now=T0)

        with pytest.raises(NotSpaceMemberError):
            await unbind_service.cancel_unbind(space.id, new_user_id())

    @pytest.mark.asyncio
    async def test_cancel_past_expiry_before_finalize(self, unit_env):
        """Expiry alone does not complete a request; the finalizer does."""
        unbind_service = await unit_env.get(UnbindService)
        space, owner, _ = await make_paired_space(unit_env)
        request = await unbind_service.request_unbind(space.id, owner, now=T0)
        late = T0 + COOLING_OFF + timedelta(hours=1)

        await unbind_service.cancel_unbind(space.id, owner, now=late)

        assert await unbind_service.finalize(request.id, now=late) is False

    @pytest.mark.asyncio
    async def test_new_request_after_cancel_is_a_new_row(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        space, owner, partner = await make_paired_space(unit_env)
        first = await unbind_service.request_unbind(space.id, owner, now=T0)
        await unbind_service.cancel_unbind(space.id, owner, now=T0)

        later = T0 + timedelta(days=2)
        second = await unbind_service.request_unbind(space.id, partner, now=later)

        assert second.id != first.id
        assert second.expires_at == later + COOLING_OFF
        assert await unbind_service.get_status(space.id) == second


class TestFinalize:
    """Tests for finalize."""

    @pytest.mark.asyncio
    async def test_finalize_before_expiry_is_skipped(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        space_service = await unit_env.get(SpaceService)
        space, owner, _ = await make_paired_space(unit_env)
        request = await unbind_service.request_unbind(space.id, owner, now=T0)

        done = await unbind_service.finalize(
            request.id, now=T0 + COOLING_OFF - timedelta(seconds=1)
        )

        assert done is False
        assert (await space_service.get_space(space.id)).is_paired

    @pytest.mark.asyncio
    async def test_finalize_deletes_space(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        space_service = await unit_env.get(SpaceService)
        unbind_repo = await unit_env.get(UnbindRequestRepository)
        outbox = await unit_env.get(EventOutbox)
        space, owner, partner = await make_paired_space(unit_env)
        request = await unbind_service.request_unbind(space.id, owner, now=T0)
        outbox.discard()
        at = T0 + COOLING_OFF

        assert await unbind_service.finalize(request.id, now=at) is True

        completed = await unbind_repo.find_by_id(request.id)
        assert completed.status == UnbindStatus.COMPLETED
        assert completed.resolved_at == at
        assert completed.resolved_by is None
        with pytest.raises(SpaceNotFoundError):
            await space_service.get_space(space.id)
        assert outbox.pending == (
            SpaceDeleted(space.id, (owner, partner)),
            PartnerNotification(
                (owner, partner),
                NotificationEvent.UNBIND_COMPLETED,
                {"space_id": str(space.id), "request_id": str(request.id)},
            ),
        )

        # Both partners are free again
        await space_service.create_space(owner, ANNIVERSARY)
        await space_service.create_space(partner, ANNIVERSARY)

    @pytest.mark.asyncio
    async def test_finalize_is_idempotent(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        space, owner, _ = await make_paired_space(unit_env)
        request = await unbind_service.request_unbind(space.id, owner, now=T0)
        at = T0 + COOLING_OFF

        assert await unbind_service.finalize(request.id, now=at) is True
        assert await unbind_service.finalize(request.id, now=at) is False

    @pytest.mark.asyncio
    async def test_cancel_after_finalize(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        space, owner, _ = await make_paired_space(unit_env)
        request = await unbind_service.request_unbind(space.id, owner, now=T0)
        await unbind_service.finalize(request.id, now=T0 + COOLING_OFF)

        with pytest.raises(NoPendingRequestError):
            await unbind_service.cancel_unbind(space.id, owner)

    @pytest.mark.asyncio
    async def test_finalize_after_direct_delete(self, unit_env):
        """A space deleted directly while pending still completes the request."""
        unbind_service = await unit_env.get(UnbindService)
        space_service = await unit_env.get(SpaceService)
        unbind_repo = await unit_env.get(UnbindRequestRepository)
        space, owner, _ = await make_paired_space(unit_env)
        request = await unbind_service.request_unbind(space.id, owner, now=T0)
        await space_service.delete_space(space.id)

        assert await unbind_service.finalize(request.id, now=T0 + COOLING_OFF)

        completed = await unbind_repo.find_by_id(request.id)
        assert completed.status == UnbindStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_find_expired_orders_by_expiry(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        first_space, first_owner, _ = await make_paired_space(unit_env)
        second_space, second_owner, _ = await make_paired_space(unit_env)
        late = await unbind_service.request_unbind(
            second_space.id, second_owner, now=T0 + timedelta(hours=1)
        )
        early = await unbind_service.request_unbind(
            first_space.id, first_owner, now=T0
        )

        expired = await unbind_service.find_expired(T0 + COOLING_OFF, limit=10)
        assert expired == [early]

        expired = await unbind_service.find_expired(
            T0 + COOLING_OFF + timedelta(hours=1), limit=10
        )
        assert expired == [early, late]

        limited = await unbind_service.find_expired(T0 + timedelta(days=30), limit=1)
        assert limited == [early]


class TestGetStatus:
    @pytest.mark.asyncio
    async def test_status_of_space_without_requests(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        space, _, _ = await make_paired_space(unit_env)

        assert await unbind_service.get_status(space.id) is None

    @pytest.mark.asyncio
    async def test_status_prefers_pending(self, unit_env):
        unbind_service = await unit_env.get(UnbindService)
        space, owner, _ = await make_paired_space(unit_env)
        await unbind_service.request_unbind(space.id, owner, now=T0)
        await unbind_service.cancel_unbind(space.id, owner, now=T0)
        pending = await unbind_service.request_unbind(
            space.id, owner, now=T0 - timedelta(days=1)
        )

        assert await unbind_service.get_status(space.id) == pending
