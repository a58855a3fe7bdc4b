"""Space repository interface."""

from abc import ABC, abstractmethod
from datetime import date

from together.domain.model.space import Space
from together.domain.value import PetName, SpaceId, UserId


class SpaceRepository(ABC):
    """Repository for the Space aggregate.

    Membership is stored so that a user can appear in at most one space; every
    write that would break that raises ConflictError.
    """

    @abstractmethod
    async def find_by_id(self, space_id: SpaceId) -> Space | None:
        """Find a space by ID.

        Args:
            space_id: The space's unique identifier

        Returns:
            The space if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_member(self, user_id: UserId) -> Space | None:
        """Find the space a user is a partner of.

        Args:
            user_id: The user's ID

        Returns:
            The user's space if they have one, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, space: Space) -> Space:
        """Insert a new space together with its creator's membership.

        Args:
            space: The space to create (one partner)

        Returns:
            The created space

        Raises:
            ConflictError: If the creator already belongs to a space
        """
        pass

    @abstractmethod
    async def add_member(
        self, space_id: SpaceId, user_id: UserId, expected_version: int
    ) -> Space | None:
        """Add the second partner if the space is still at ``expected_version``.

        This is the compare-and-set that serializes concurrent joins: the
        membership row, the cleared invite code and the version bump are
        written together or not at all.

        Args:
            space_id: The space being joined
            user_id: The joining user
            expected_version: Version the caller read before deciding to join

        Returns:
            The updated space, or None if the version no longer matches

        Raises:
            ConflictError: If the user already belongs to a space
        """
        pass

    @abstractmethod
    async def update_anniversary_date(
        self, space_id: SpaceId, anniversary_date: date
    ) -> Space | None:
        """Set the anniversary date.

        Returns:
            The updated space, or None if it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, space_id: SpaceId) -> bool:
        """Delete a space and all of its memberships.

        Returns:
            True if a space was deleted, False if it did not exist
        """
        pass

    @abstractmethod
    async def find_pet_names(self, space_id: SpaceId) -> dict[UserId, PetName | None]:
        """Pet names keyed by the partner who chose them."""
        pass

    @abstractmethod
    async def set_pet_name(
        self, space_id: SpaceId, user_id: UserId, pet_name: PetName | None
    ) -> None:
        """Store the name ``user_id`` uses for their partner."""
        pass
