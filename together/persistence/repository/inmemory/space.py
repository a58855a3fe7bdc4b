"""In-memory space repository for testing."""

from datetime import date
from typing import Optional

from together.domain.error import ConflictError
from together.domain.model import Space
from together.domain.repository.space import SpaceRepository
from together.domain.value import PetName, SpaceId, UserId

from .unit_of_work import remember


class InMemorySpaceRepository(SpaceRepository):
    """In-memory implementation of SpaceRepository for testing.

    Methods never await, so each call is atomic with respect to other
    coroutines on the event loop, like a single SQL statement.
    """

    def __init__(self) -> None:
        self._spaces: dict[SpaceId, Space] = {}
        self._membership: dict[UserId, SpaceId] = {}
        self._pet_names: dict[tuple[SpaceId, UserId], PetName] = {}

    async def find_by_id(self, space_id: SpaceId) -> Optional[Space]:
        return self._spaces.get(space_id)

    async def find_by_member(self, user_id: UserId) -> Optional[Space]:
        space_id = self._membership.get(user_id)
        return self._spaces.get(space_id) if space_id else None

    async def create(self, space: Space) -> Space:
        """Create a space.

        Raises:
            ConflictError: If the space exists or the creator already has one
        """
        if space.id in self._spaces:
            raise ConflictError(f"Duplicate space {space.id}")
        for user_id in space.partners:
            if user_id in self._membership:
                raise ConflictError(f"User {user_id} already belongs to a space")

        remember(self._spaces, space.id)
        self._spaces[space.id] = space
        for user_id in space.partners:
            remember(self._membership, user_id)
            self._membership[user_id] = space.id
        return space

    async def add_member(
        self, space_id: SpaceId, user_id: UserId, expected_version: int
    ) -> Optional[Space]:
        space = self._spaces.get(space_id)
        if space is None or space.version != expected_version or space.is_paired:
            return None
        if user_id in self._membership:
            raise ConflictError(f"User {user_id} already belongs to a space")

        updated = space.model_copy(
            update={
                "partners": (*space.partners, user_id),
                "invite_code": None,
                "version": space.version + 1,
            }
        )
        remember(self._spaces, space_id)
        self._spaces[space_id] = updated
        remember(self._membership, user_id)
        self._membership[user_id] = space_id
        return updated

    async def update_anniversary_date(
        self, space_id: SpaceId, anniversary_date: date
    ) -> Optional[Space]:
        space = self._spaces.get(space_id)
        if space is None:
            return None
        updated = space.model_copy(update={"anniversary_date": anniversary_date})
        remember(self._spaces, space_id)
        self._spaces[space_id] = updated
        return updated

    async def delete(self, space_id: SpaceId) -> bool:
        space = self._spaces.get(space_id)
        if space is None:
            return False
        remember(self._spaces, space_id)
        del self._spaces[space_id]
        for user_id in space.partners:
            remember(self._membership, user_id)
            remember(self._pet_names, (space_id, user_id))
            self._membership.pop(user_id, None)
            self._pet_names.pop((space_id, user_id), None)
        return True

    async def find_pet_names(self, space_id: SpaceId) -> dict[UserId, PetName | None]:
        space = self._spaces.get(space_id)
        if space is None:
            return {}
        return {
            user_id: self._pet_names.get((space_id, user_id))
            for user_id in space.partners
        }

    async def set_pet_name(
        self, space_id: SpaceId, user_id: UserId, pet_name: PetName | None
    ) -> None:
        if pet_name is None:
            self._pet_names.pop((space_id, user_id), None)
        else:
            self._pet_names[(space_id, user_id)] = pet_name
