"""In-memory user profile repository."""

from typing import Optional

from together.domain.model import User
from together.domain.repository.user import UserRepository
from together.domain.value import UserId

from .unit_of_work import remember


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def upsert(self, user: User) -> User:
        existing = self._users.get(user.id)
        if existing is not None:
            user = user.model_copy(update={"created_at": existing.created_at})
        remember(self._users, user.id)
        self._users[user.id] = user
        return user
