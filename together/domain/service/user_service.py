"""User domain service."""

import logfire

from together.domain.model import User
from together.domain.repository import UserRepository
from together.domain.value import Nickname, PartnerProfile, UserId
from together.util.time import utc_now

from .base import Service


class UserService(Service):
    """Profiles partners show each other while pairing."""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def get_profile(self, user_id: UserId) -> User | None:
        return await self.user_repository.find_by_id(user_id)

    async def get_public_profile(self, user_id: UserId) -> PartnerProfile:
        """Public profile of a user, safe to show to a prospective partner.

        Users who never set up a profile still get one carrying only their id.

        Args:
            user_id: User ID

        Returns:
            The user's public profile
        """
        with logfire.span("user_service.get_public_profile", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                logfire.info("User has no profile yet", user_id=str(user_id))
                return PartnerProfile(user_id=user_id)
            return user.to_partner_profile()

    async def update_profile(
        self,
        user_id: UserId,
        nickname: Nickname,
        avatar_url: str | None = None,
    ) -> User:
        """Set the nickname and avatar the user's partner will see.

        The first update creates the profile. An omitted avatar keeps the
        current one.

        Args:
            user_id: User editing their own profile
            nickname: New nickname
            avatar_url: New avatar, or None to keep the current one

        Returns:
            The stored profile
        """
        with logfire.span("user_service.update_profile", user_id=str(user_id)):
            now = utc_now()
            current = await self.user_repository.find_by_id(user_id)
            if current is None:
                user = User(
                    id=user_id,
                    nickname=nickname,
                    avatar_url=avatar_url,
                    created_at=now,
                    updated_at=now,
                )
            else:
                user = current.model_copy(
                    update={
                        "nickname": nickname,
                        "avatar_url": avatar_url or current.avatar_url,
                        "updated_at": now,
                    }
                )
            saved = await self.user_repository.upsert(user)
            logfire.info("User profile updated", user_id=str(user_id))
            return saved
