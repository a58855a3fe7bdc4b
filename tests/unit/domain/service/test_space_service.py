"""Unit tests for SpaceService."""

from datetime import date
from uuid import uuid4

import pytest

from together.domain.error import (
    AlreadyInSpaceError,
    AlreadyPairedError,
    InviteCodeNotFoundError,
    NotPairedError,
    NotSpaceMemberError,
    SelfJoinError,
    SpaceFullError,
    SpaceNotFoundError,
)
from together.domain.event import EventOutbox, SpaceDeleted
from together.domain.repository import SpaceRepository
from together.domain.service import InviteCodeService, SpaceService
from together.domain.value import PetName, SpaceId
from tests.harness import ANNIVERSARY, create_env_fixture, new_user_id

unit_env = create_env_fixture()


class TestCreateSpace:
    """Tests for create_space."""

    @pytest.mark.asyncio
    async def test_create_space_success(self, unit_env):
        """The creator is the only partner and a live code is attached."""
        space_service = await unit_env.get(SpaceService)
        invite_code_service = await unit_env.get(InviteCodeService)
        owner = new_user_id()

        space = await space_service.create_space(owner, ANNIVERSARY)

        assert space.partners == (owner,)
        assert space.anniversary_date == ANNIVERSARY
        assert space.version == 1
        assert space.invite_code is not None
        assert await invite_code_service.resolve(space.invite_code) == space.id
        assert await space_service.get_space_for_user(owner) == space

    @pytest.mark.asyncio
    async def test_create_second_space_fails(self, unit_env):
        """A user belongs to at most one space."""
        space_service = await unit_env.get(SpaceService)
        owner = new_user_id()
        await space_service.create_space(owner, ANNIVERSARY)

        with pytest.raises(AlreadyInSpaceError):
            await space_service.create_space(owner, date(2024, 1, 1))

    @pytest.mark.asyncio
    async def test_codes_are_unique_across_spaces(self, unit_env):
        space_service = await unit_env.get(SpaceService)

        codes = {
            (await space_service.create_space(new_user_id(), ANNIVERSARY)).invite_code
            for _ in range(20)
        }

        assert len(codes) == 20


class TestAddPartner:
    """Tests for add_partner."""

    @pytest.mark.asyncio
    async def test_add_partner_pairs_space(self, unit_env):
        """Joining fills the space, bumps its version and retires the code."""
        space_service = await unit_env.get(SpaceService)
        invite_code_service = await unit_env.get(InviteCodeService)
        owner, partner = new_user_id(), new_user_id()
        space = await space_service.create_space(owner, ANNIVERSARY)

        paired = await space_service.add_partner(space.id, partner)

        assert paired.partners == (owner, partner)
        assert paired.is_paired
        assert paired.invite_code is None
        assert paired.version == space.version + 1
        with pytest.raises(InviteCodeNotFoundError):
            await invite_code_service.resolve(space.invite_code)

    @pytest.mark.asyncio
    async def test_add_partner_unknown_space(self, unit_env):
        space_service = await unit_env.get(SpaceService)

        with pytest.raises(SpaceNotFoundError):
            await space_service.add_partner(SpaceId(uuid4()), new_user_id())

    @pytest.mark.asyncio
    async def test_creator_cannot_join_own_space(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        owner = new_user_id()
        space = await space_service.create_space(owner, ANNIVERSARY)

        with pytest.raises(SelfJoinError):
            await space_service.add_partner(space.id, owner)

    @pytest.mark.asyncio
    async def test_rejoin_by_partner_is_benign(self, unit_env):
        """A partner joining again gets the space back instead of an error."""
        space_service = await unit_env.get(SpaceService)
        owner, partner = new_user_id(), new_user_id()
        space = await space_service.create_space(owner, ANNIVERSARY)
        paired = await space_service.add_partner(space.id, partner)

        with pytest.raises(AlreadyPairedError) as exc_info:
            await space_service.add_partner(space.id, partner)

        assert exc_info.value.space == paired

    @pytest.mark.asyncio
    async def test_third_user_cannot_join(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        space = await space_service.create_space(new_user_id(), ANNIVERSARY)
        await space_service.add_partner(space.id, new_user_id())

        with pytest.raises(SpaceFullError):
            await space_service.add_partner(space.id, new_user_id())

    @pytest.mark.asyncio
    async def test_member_of_other_space_cannot_join(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        space = await space_service.create_space(new_user_id(), ANNIVERSARY)
        other_owner = new_user_id()
        await space_service.create_space(other_owner, ANNIVERSARY)

        with pytest.raises(AlreadyInSpaceError):
            await space_service.add_partner(space.id, other_owner)

        unchanged = await space_service.get_space(space.id)
        assert not unchanged.is_paired

    @pytest.mark.asyncio
    async def test_stale_version_loses_join(self, unit_env):
        """The conditional update only succeeds against the version read."""
        space_service = await unit_env.get(SpaceService)
        space_repo = await unit_env.get(SpaceRepository)
        space = await space_service.create_space(new_user_id(), ANNIVERSARY)

        first = await space_repo.add_member(
            space.id, new_user_id(), expected_version=space.version
        )
        second = await space_repo.add_member(
            space.id, new_user_id(), expected_version=space.version
        )

        assert first is not None and first.is_paired
        assert second is None
        assert len((await space_service.get_space(space.id)).partners) == 2


class TestUpdateAndDelete:
    """Tests for anniversary updates and deletion."""

    @pytest.mark.asyncio
    async def test_either_partner_updates_anniversary(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        owner, partner = new_user_id(), new_user_id()
        space = await space_service.create_space(owner, ANNIVERSARY)
        await space_service.add_partner(space.id, partner)

        updated = await space_service.update_anniversary_date(
            space.id, partner, date(2022, 6, 1)
        )

        assert updated.anniversary_date == date(2022, 6, 1)

    @pytest.mark.asyncio
    async def test_outsider_cannot_update_anniversary(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        space = await space_service.create_space(new_user_id(), ANNIVERSARY)

        with pytest.raises(NotSpaceMemberError):
            await space_service.update_anniversary_date(
                space.id, new_user_id(), date(2022, 6, 1)
            )

    @pytest.mark.asyncio
    async def test_delete_space_frees_members_and_schedules_archival(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        outbox = await unit_env.get(EventOutbox)
        owner, partner = new_user_id(), new_user_id()
        space = await space_service.create_space(owner, ANNIVERSARY)
        await space_service.add_partner(space.id, partner)

        await space_service.delete_space(space.id)

        with pytest.raises(SpaceNotFoundError):
            await space_service.get_space(space.id)
        assert await space_service.get_space_for_user(owner) is None
        assert outbox.pending == (SpaceDeleted(space.id, (owner, partner)),)

        # Both may start over
        await space_service.create_space(owner, ANNIVERSARY)
        await space_service.create_space(partner, ANNIVERSARY)

    @pytest.mark.asyncio
    async def test_deleted_space_code_never_resolves(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        invite_code_service = await unit_env.get(InviteCodeService)
        space = await space_service.create_space(new_user_id(), ANNIVERSARY)

        await space_service.delete_space(space.id)

        with pytest.raises(InviteCodeNotFoundError):
            await invite_code_service.resolve(space.invite_code)


class TestPetNames:
    """Tests for pet names."""

    @pytest.mark.asyncio
    async def test_pet_names_are_seen_from_each_side(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        owner, partner = new_user_id(), new_user_id()
        space = await space_service.create_space(owner, ANNIVERSARY)
        await space_service.add_partner(space.id, partner)

        await space_service.update_pet_names(
            owner,
            my_pet_name=PetName("Bear"),
            partner_pet_name=PetName("Bunny"),
        )

        mine = await space_service.get_pet_names(owner)
        theirs = await space_service.get_pet_names(partner)
        assert mine.my_pet_name == PetName("Bear")
        assert mine.partner_pet_name == PetName("Bunny")
        assert theirs.my_pet_name == PetName("Bunny")
        assert theirs.partner_pet_name == PetName("Bear")

    @pytest.mark.asyncio
    async def test_omitted_pet_name_is_unchanged(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        owner, partner = new_user_id(), new_user_id()
        space = await space_service.create_space(owner, ANNIVERSARY)
        await space_service.add_partner(space.id, partner)
        await space_service.update_pet_names(owner, my_pet_name=PetName("Bear"))

        names = await space_service.update_pet_names(
            owner, partner_pet_name=PetName("Bunny")
        )

        assert names.my_pet_name == PetName("Bear")
        assert names.partner_pet_name == PetName("Bunny")

    @pytest.mark.asyncio
    async def test_partner_pet_name_needs_a_partner(self, unit_env):
        space_service = await unit_env.get(SpaceService)
        owner = new_user_id()
        await space_service.create_space(owner, ANNIVERSARY)

        with pytest.raises(NotPairedError):
            await space_service.update_pet_names(
                owner, partner_pet_name=PetName("Bunny")
            )

    @pytest.mark.asyncio
    async def test_pet_names_without_space(self, unit_env):
        space_service = await unit_env.get(SpaceService)

        with pytest.raises(SpaceNotFoundError):
            await space_service.get_pet_names(new_user_id())
