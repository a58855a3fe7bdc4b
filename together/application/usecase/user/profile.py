"""Profile use cases."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from together.application.usecase.base import BaseUseCase, to_user_id
from together.domain.model import User
from together.domain.service import UserService
from together.domain.unit_of_work import UnitOfWork
from together.domain.value import Nickname


class ProfileResponse(BaseModel):
    """Profile as the user sees it."""

    user_id: str
    nickname: str | None
    avatar_url: str | None
    updated_at: datetime

    @staticmethod
    def from_domain(user: User) -> "ProfileResponse":
        return ProfileResponse(
            user_id=str(user.id),
            nickname=user.nickname.root if user.nickname else None,
            avatar_url=user.avatar_url,
            updated_at=user.updated_at,
        )


class GetProfileRequest(BaseModel):
    """Get profile request."""

    user_id: str


class GetProfileUseCase(BaseUseCase):
    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetProfileRequest) -> ProfileResponse | None:
        user = await self.user_service.get_profile(to_user_id(request.user_id))
        return ProfileResponse.from_domain(user) if user else None


class UpdateProfileRequest(BaseModel):
    """Update profile request."""

    user_id: str
    nickname: str = Field(min_length=1, max_length=50)
    avatar_url: str | None = None

    @field_validator("nickname")
    @classmethod
    def strip_nickname(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Nickname must not be blank")
        return v


class UpdateProfileUseCase(BaseUseCase):
    """Use case for setting up or editing the profile a partner sees.

    The nickname and avatar are what the other person is shown when they
    redeem this user's invite code.
    """

    def __init__(self, user_service: UserService, unit_of_work: UnitOfWork) -> None:
        self.user_service = user_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: UpdateProfileRequest) -> ProfileResponse:
        nickname = Nickname(request.nickname)
        async with self.unit_of_work:
            user = await self.user_service.update_profile(
                to_user_id(request.user_id), nickname, request.avatar_url
            )
        return ProfileResponse.from_domain(user)
