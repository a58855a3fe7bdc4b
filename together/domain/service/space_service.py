"""Space domain service."""

from datetime import date
from uuid import uuid4

import logfire

from together.domain.error import (
    AlreadyInSpaceError,
    AlreadyPairedError,
    ConflictError,
    NotPairedError,
    NotSpaceMemberError,
    SelfJoinError,
    SpaceFullError,
    SpaceNotFoundError,
)
from together.domain.event import EventOutbox
from together.domain.model import Space
from together.domain.repository import SpaceRepository
from together.domain.value import PetName, PetNames, SpaceId, UserId

from .base import Service
from .invite_code_service import InviteCodeService


class SpaceService(Service):
    """Domain service owning space membership.

    All membership writes go through here so that a space never holds more
    than two partners and a user never belongs to more than one space.
    """

    def __init__(
        self,
        space_repository: SpaceRepository,
        invite_code_service: InviteCodeService,
        outbox: EventOutbox,
    ) -> None:
        """Initialize space service.

        Args:
            space_repository: Space repository
            invite_code_service: Invite code registry
            outbox: Events published after the unit of work commits
        """
        self.space_repository = space_repository
        self.invite_code_service = invite_code_service
        self.outbox = outbox

    async def create_space(self, owner_id: UserId, anniversary_date: date) -> Space:
        """Create a space with its owner as the only partner.

        Args:
            owner_id: User creating the space
            anniversary_date: The couple's anniversary

        Returns:
            The new space, carrying a freshly minted invite code

        Raises:
            AlreadyInSpaceError: If the owner already belongs to a space
        """
        with logfire.span("space_service.create_space", owner_id=str(owner_id)):
            existing = await self.space_repository.find_by_member(owner_id)
            if existing:
                logfire.warn(
                    "User already in a space",
                    user_id=str(owner_id),
                    space_id=str(existing.id),
                )
                raise AlreadyInSpaceError(str(owner_id))

            space_id = SpaceId(uuid4())
            code = await self.invite_code_service.mint(space_id)
            space = Space(
                id=space_id,
                anniversary_date=anniversary_date,
                partners=(owner_id,),
                invite_code=code,
            )

            try:
                created = await self.space_repository.create(space)
            except ConflictError:
                # A concurrent create by the same owner won
                await self.invite_code_service.invalidate(space_id)
                logfire.warn("Concurrent space creation", user_id=str(owner_id))
                raise AlreadyInSpaceError(str(owner_id))

            logfire.info(
                "Space created", space_id=str(created.id), owner_id=str(owner_id)
            )
            return created

    async def get_space(self, space_id: SpaceId) -> Space:
        """Get a space by ID.

        Raises:
            SpaceNotFoundError: If the space does not exist
        """
        space = await self.space_repository.find_by_id(space_id)
        if space is None:
            logfire.warn("Space not found", space_id=str(space_id))
            raise SpaceNotFoundError(str(space_id))
        return space

    async def get_space_for_user(self, user_id: UserId) -> Space | None:
        with logfire.span("space_service.get_space_for_user", user_id=str(user_id)):
            return await self.space_repository.find_by_member(user_id)

    async def get_member_space(self, space_id: SpaceId, user_id: UserId) -> Space:
        """Get a space the user is a partner of.

        Raises:
            SpaceNotFoundError: If the space does not exist
            NotSpaceMemberError: If the user is not one of its partners
        """
        space = await self.get_space(space_id)
        if not space.has_partner(user_id):
            logfire.warn(
                "User is not a member of space",
                space_id=str(space_id),
                user_id=str(user_id),
            )
            raise NotSpaceMemberError(str(space_id), str(user_id))
        return space

    async def add_partner(self, space_id: SpaceId, user_id: UserId) -> Space:
        """Bind a second user into a space.

        Args:
            space_id: Space being joined
            user_id: Joining user

        Returns:
            The paired space

        Raises:
            SpaceNotFoundError: If the space does not exist
            SelfJoinError: If the user is the space's only partner
            AlreadyPairedError: If the user is already a partner of this
                paired space (carries the space)
            AlreadyInSpaceError: If the user belongs to another space
            SpaceFullError: If the space already has two partners
        """
        with logfire.span(
            "space_service.add_partner", space_id=str(space_id), user_id=str(user_id)
        ):
            space = await self.get_space(space_id)

            if space.has_partner(user_id):
                if not space.is_paired:
                    raise SelfJoinError()
                raise AlreadyPairedError(space)

            own = await self.space_repository.find_by_member(user_id)
            if own is not None:
                logfire.warn(
                    "User already in another space",
                    user_id=str(user_id),
                    space_id=str(own.id),
                )
                raise AlreadyInSpaceError(str(user_id))

            if space.is_paired:
                logfire.warn("Space is full", space_id=str(space_id))
                raise SpaceFullError(str(space_id))

            try:
                updated = await self.space_repository.add_member(
                    space_id, user_id, expected_version=space.version
                )
            except ConflictError:
                # Joined or created another space in the meantime
                raise AlreadyInSpaceError(str(user_id))

            if updated is None:
                # Lost the race: resolve against whoever won
                current = await self.get_space(space_id)
                if current.has_partner(user_id):
                    raise AlreadyPairedError(current)
                logfire.warn("Lost join race", space_id=str(space_id))
                raise SpaceFullError(str(space_id))

            await self.invite_code_service.invalidate(space_id)
            logfire.info(
                "Partner joined space", space_id=str(space_id), user_id=str(user_id)
            )
            return updated

    async def update_anniversary_date(
        self, space_id: SpaceId, acting_user_id: UserId, anniversary_date: date
    ) -> Space:
        """Change the anniversary date; either partner may do so."""
        with logfire.span(
            "space_service.update_anniversary_date", space_id=str(space_id)
        ):
            await self.get_member_space(space_id, acting_user_id)
            updated = await self.space_repository.update_anniversary_date(
                space_id, anniversary_date
            )
            if updated is None:
                raise SpaceNotFoundError(str(space_id))
            logfire.info("Anniversary date updated", space_id=str(space_id))
            return updated

    async def delete_space(self, space_id: SpaceId) -> Space:
        """Hard-delete a space.

        The invite code is retired (never reused) and content archival is
        scheduled for after commit.

        Returns:
            The space as it was before deletion

        Raises:
            SpaceNotFoundError: If the space does not exist
        """
        with logfire.span("space_service.delete_space", space_id=str(space_id)):
            space = await self.get_space(space_id)
            deleted = await self.space_repository.delete(space_id)
            if not deleted:
                raise SpaceNotFoundError(str(space_id))

            await self.invite_code_service.invalidate(space_id)
            self.outbox.space_deleted(space.id, space.partners)
            logfire.info(
                "Space deleted", space_id=str(space_id), partners=len(space.partners)
            )
            return space

    async def get_pet_names(self, user_id: UserId) -> PetNames:
        """Pet names from the point of view of ``user_id``.

        Raises:
            SpaceNotFoundError: If the user has no space
        """
        with logfire.span("space_service.get_pet_names", user_id=str(user_id)):
            space = await self._require_own_space(user_id)
            return await self._pet_names_for(space, user_id)

    async def update_pet_names(
        self,
        user_id: UserId,
        my_pet_name: PetName | None = None,
        partner_pet_name: PetName | None = None,
    ) -> PetNames:
        """Update pet names; a None argument leaves that name unchanged.

        Args:
            user_id: Acting user
            my_pet_name: What the user calls their partner
            partner_pet_name: What the partner calls the user

        Raises:
            SpaceNotFoundError: If the user has no space
            NotPairedError: If ``partner_pet_name`` is given before pairing
        """
        with logfire.span("space_service.update_pet_names", user_id=str(user_id)):
            space = await self._require_own_space(user_id)
            partner_id = space.partner_of(user_id)

            if partner_pet_name is not None and partner_id is None:
                raise NotPairedError(str(space.id))

            if my_pet_name is not None:
                await self.space_repository.set_pet_name(space.id, user_id, my_pet_name)
            if partner_pet_name is not None and partner_id is not None:
                await self.space_repository.set_pet_name(
                    space.id, partner_id, partner_pet_name
                )

            logfire.info("Pet names updated", space_id=str(space.id))
            return await self._pet_names_for(space, user_id)

    async def _require_own_space(self, user_id: UserId) -> Space:
        space = await self.space_repository.find_by_member(user_id)
        if space is None:
            raise SpaceNotFoundError(f"for user {user_id}")
        return space

    async def _pet_names_for(self, space: Space, user_id: UserId) -> PetNames:
        names = await self.space_repository.find_pet_names(space.id)
        partner_id = space.partner_of(user_id)
        return PetNames(
            my_pet_name=names.get(user_id),
            partner_pet_name=names.get(partner_id) if partner_id else None,
        )
