"""Unit tests for PairingService."""

import asyncio

import pytest

from together.domain.error import (
    AlreadyInSpaceError,
    InvalidCodeError,
    SelfJoinError,
    SpaceFullError,
)
from together.domain.event import EventOutbox, PartnerNotification
from together.domain.model import Space
from together.domain.service import (
    InviteCodeService,
    NotificationClient,
    PairingService,
    SpaceService,
    UserService,
)
from together.domain.service.pairing_service import NO_LONGER_AVAILABLE
from together.domain.value import InviteCode, Nickname, NotificationEvent
from tests.di import build_test_container
from tests.harness import ANNIVERSARY, create_env_fixture, new_user_id

unit_env = create_env_fixture()


class TestRedeem:
    """Tests for redeem (lookup without joining)."""

    @pytest.mark.asyncio
    async def test_redeem_reveals_creator_profile(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        user_service = await unit_env.get(UserService)
        pairing_service = await unit_env.get(PairingService)
        owner, joiner = new_user_id(), new_user_id()
        await user_service.update_profile(owner, Nickname("Sam"))
        space = await space_service.create_space(owner, ANNIVERSARY)

        match = await pairing_service.redeem(space.invite_code, joiner)

        assert match.space_id == space.id
        assert match.anniversary_date == ANNIVERSARY
        assert match.partner_ids == (owner,)
        assert match.partner.user_id == owner
        assert match.partner.nickname == Nickname("Sam")
        assert match.acting_user_id == joiner

    @pytest.mark.asyncio
    async def test_redeem_changes_nothing(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        pairing_service = await unit_env.get(PairingService)
        outbox = await unit_env.get(EventOutbox)
        space = await space_service.create_space(new_user_id(), ANNIVERSARY)

        await pairing_service.redeem(space.invite_code, new_user_id())
        await pairing_service.redeem(space.invite_code, new_user_id())

        assert await space_service.get_space(space.id) == space
        assert outbox.pending == ()

    @pytest.mark.asyncio
    async def test_redeem_unknown_code(self, unit_env):
        pairing_service = await unit_env.get(PairingService)

        with pytest.raises(InvalidCodeError):
            await pairing_service.redeem(InviteCode("ZZZZ99"), new_user_id())

    @pytest.mark.asyncio
    async def test_redeem_own_code(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        pairing_service = await unit_env.get(PairingService)
        owner = new_user_id()
        space = await space_service.create_space(owner, ANNIVERSARY)

        with pytest.raises(SelfJoinError):
            await pairing_service.redeem(space.invite_code, owner)

    @pytest.mark.asyncio
    async def test_redeem_paired_space_is_invalid(self, unit_env, monkeypatch):
        """A code still on file for a full space is not offered to a third user."""

        async def keep_code(self, space_id):
            pass

        monkeypatch.setattr(InviteCodeService, "invalidate", keep_code)
        space_service = await unit_env.get(SpaceService)
        pairing_service = await unit_env.get(PairingService)
        space = await space_service.create_space(new_user_id(), ANNIVERSARY)
        await pairing_service.confirm(space.invite_code, new_user_id())

        with pytest.raises(InvalidCodeError, match=NO_LONGER_AVAILABLE):
            await pairing_service.redeem(space.invite_code, new_user_id())


class TestConfirm:
    """Tests for confirm (the actual join)."""

    @pytest.mark.asyncio
    async def test_confirm_pairs_and_notifies_both(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        pairing_service = await unit_env.get(PairingService)
        outbox = await unit_env.get(EventOutbox)
        client = await unit_env.get(NotificationClient)
        owner, joiner = new_user_id(), new_user_id()
        space = await space_service.create_space(owner, ANNIVERSARY)

        paired = await pairing_service.confirm(space.invite_code, joiner)

        assert paired.id == space.id
        assert paired.partners == (owner, joiner)
        assert outbox.pending == (
            PartnerNotification(
                (owner, joiner), NotificationEvent.PAIRED, {"space_id": str(space.id)}
            ),
        )

        # Delivered only once the unit of work publishes
        assert client.sent == []
        await outbox.publish()
        assert client.events() == [NotificationEvent.PAIRED]
        assert client.sent[0].user_ids == [owner, joiner]

    @pytest.mark.asyncio
    async def test_confirm_replay_returns_same_space(self, unit_env):
        """Retrying a successful confirm is not an error."""
        space_service = await unit_env.get(SpaceService)
        pairing_service = await unit_env.get(PairingService)
        outbox = await unit_env.get(EventOutbox)
        joiner = new_user_id()
        space = await space_service.create_space(new_user_id(), ANNIVERSARY)
        first = await pairing_service.confirm(space.invite_code, joiner)

        second = await pairing_service.confirm(space.invite_code, joiner)

        assert second == first
        assert len(outbox.pending) == 1

    @pytest.mark.asyncio
    async def test_confirm_after_someone_else_joined(self, unit_env):
        """Losing to another joiner gives the generic message."""
        space_service = await unit_env.get(SpaceService)
        pairing_service = await unit_env.get(PairingService)
        space = await space_service.create_space(new_user_id(), ANNIVERSARY)
        late = new_user_id()
        await pairing_service.redeem(space.invite_code, late)
        await pairing_service.confirm(space.invite_code, new_user_id())

        with pytest.raises(InvalidCodeError, match=NO_LONGER_AVAILABLE):
            await pairing_service.confirm(space.invite_code, late)

    @pytest.mark.asyncio
    async def test_confirm_after_space_deleted(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        pairing_service = await unit_env.get(PairingService)
        space = await space_service.create_space(new_user_id(), ANNIVERSARY)
        joiner = new_user_id()
        await pairing_service.redeem(space.invite_code, joiner)
        await space_service.delete_space(space.id)

        with pytest.raises(InvalidCodeError, match=NO_LONGER_AVAILABLE):
            await pairing_service.confirm(space.invite_code, joiner)

        assert await space_service.get_space_for_user(joiner) is None

    @pytest.mark.asyncio
    async def test_confirm_own_code(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        pairing_service = await unit_env.get(PairingService)
        owner = new_user_id()
        space = await space_service.create_space(owner, ANNIVERSARY)

        with pytest.raises(SelfJoinError):
            await pairing_service.confirm(space.invite_code, owner)

    @pytest.mark.asyncio
    async def test_confirm_while_in_another_space(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        pairing_service = await unit_env.get(PairingService)
        space = await space_service.create_space(new_user_id(), ANNIVERSARY)
        busy = new_user_id()
        await space_service.create_space(busy, ANNIVERSARY)

        with pytest.raises(AlreadyInSpaceError):
            await pairing_service.confirm(space.invite_code, busy)


class TestConcurrentConfirm:
    """Two users confirming the same code at the same time."""

    @pytest.mark.asyncio
    async def test_exactly_one_joiner_wins(self):
        container = build_test_container()
        owner = new_user_id()
        async with container() as scope:
            space_service = await scope.get(SpaceService)
            space = await space_service.create_space(owner, ANNIVERSARY)

        async def join(user_id):
            async with container() as scope:
                pairing_service = await scope.get(PairingService)
                return await pairing_service.confirm(space.invite_code, user_id)

        joiners = [new_user_id() for _ in range(5)]
        results = await asyncio.gather(
            *(join(user_id) for user_id in joiners), return_exceptions=True
        )

        winners = [r for r in results if isinstance(r, Space)]
        losers = [r for r in results if not isinstance(r, Space)]
        assert len(winners) == 1
        assert all(isinstance(e, (InvalidCodeError, SpaceFullError)) for e in losers)

        async with container() as scope:
            space_service = await scope.get(SpaceService)
            final = await space_service.get_space(space.id)
        assert final.partners == (owner, winners[0].partners[1])

        client = await container.get(NotificationClient)
        assert client.events() == [NotificationEvent.PAIRED]
        await container.close()
