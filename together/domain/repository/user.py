"""User profile repository interface."""

from abc import ABC, abstractmethod

from together.domain.model.user import User
from together.domain.value import UserId


class UserRepository(ABC):
    """Profiles users set up for their partner to see.

    Read when a partner's public profile is shown; written only by profile
    updates, never by pairing or unbinding.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> User | None:
        pass

    @abstractmethod
    async def upsert(self, user: User) -> User:
        """Insert the profile or overwrite everything except ``created_at``."""
        pass
