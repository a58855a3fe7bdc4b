"""User profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header
from pydantic import BaseModel, Field, field_validator

from together.application.usecase.user import (
    GetProfileRequest,
    GetProfileUseCase,
    ProfileResponse,
    UpdateProfileRequest,
    UpdateProfileUseCase,
)
from together.domain.service import JWTService
from together.interface.api.identity import authenticate

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateProfileAPIRequest(BaseModel):
    """API request for setting up the profile."""

    nickname: str = Field(min_length=1, max_length=50)
    avatar_url: str | None = Field(default=None, max_length=500)

    @field_validator("nickname")
    @classmethod
    def strip_nickname(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Nickname must not be blank")
        return v


@router.get("/me/profile", response_model=ProfileResponse | None)
async def get_my_profile(
    get_profile_use_case: FromDishka[GetProfileUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ProfileResponse | None:
    """Get the current user's profile, or null before it is set up."""
    user_id = authenticate(jwt_service, auth_token, authorization)
    return await get_profile_use_case.execute(GetProfileRequest(user_id=user_id))


@router.put("/me/profile", response_model=ProfileResponse)
async def update_my_profile(
    request: UpdateProfileAPIRequest,
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ProfileResponse:
    """Set the nickname and avatar shown to a prospective partner.

    Raises:
        UnauthenticatedError: If not authenticated
    """
    user_id = authenticate(jwt_service, auth_token, authorization)
    return await update_profile_use_case.execute(
        UpdateProfileRequest(
            user_id=user_id,
            nickname=request.nickname,
            avatar_url=request.avatar_url,
        )
    )
