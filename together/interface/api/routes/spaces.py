"""Space and pairing routes."""

from datetime import date
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Response, status
from pydantic import BaseModel, Field

from together.application.usecase.pairing import (
    ConfirmJoinRequest,
    ConfirmJoinUseCase,
    RedeemCodeRequest,
    RedeemCodeResponse,
    RedeemCodeUseCase,
)
from together.application.usecase.space import (
    CreateSpaceRequest,
    CreateSpaceUseCase,
    DeleteSpaceRequest,
    DeleteSpaceUseCase,
    GetMySpaceRequest,
    GetMySpaceUseCase,
    GetPetNamesRequest,
    GetPetNamesUseCase,
    PetNamesResponse,
    SpaceResponse,
    UpdateAnniversaryDateRequest,
    UpdateAnniversaryDateUseCase,
    UpdatePetNamesRequest,
    UpdatePetNamesUseCase,
)
from together.domain.service import JWTService
from together.interface.api.identity import authenticate

router = APIRouter(prefix="/spaces", tags=["spaces"], route_class=DishkaRoute)


class CreateSpaceAPIRequest(BaseModel):
    """API request for creating a space."""

    anniversary_date: date


class InviteCodeAPIRequest(BaseModel):
    """API request carrying an invite code typed by the user."""

    invite_code: str = Field(min_length=1, max_length=32)


class UpdateAnniversaryDateAPIRequest(BaseModel):
    """API request for changing the anniversary date."""

    anniversary_date: date


class UpdatePetNamesAPIRequest(BaseModel):
    """API request for setting pet names; omitted names are left as they are."""

    my_pet_name: str | None = Field(default=None, min_length=1, max_length=30)
    partner_pet_name: str | None = Field(default=None, min_length=1, max_length=30)


@router.post("", response_model=SpaceResponse, status_code=status.HTTP_201_CREATED)
async def create_space(
    request: CreateSpaceAPIRequest,
    create_space_use_case: FromDishka[CreateSpaceUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> SpaceResponse:
    """Create a space with the current user as its first partner.

    The response carries the invite code to share with the partner.

    Raises:
        UnauthenticatedError: If not authenticated
        AlreadyInSpaceError: If the user already has a space
    """
    user_id = authenticate(jwt_service, auth_token, authorization)
    return await create_space_use_case.execute(
        CreateSpaceRequest(user_id=user_id, anniversary_date=request.anniversary_date)
    )


@router.get("/my", response_model=SpaceResponse | None)
async def get_my_space(
    get_my_space_use_case: FromDishka[GetMySpaceUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> SpaceResponse | None:
    """Get the current user's space, or null if they have none."""
    user_id = authenticate(jwt_service, auth_token, authorization)
    return await get_my_space_use_case.execute(GetMySpaceRequest(user_id=user_id))


@router.post("/redeem", response_model=RedeemCodeResponse)
async def redeem_code(
    request: InviteCodeAPIRequest,
    redeem_code_use_case: FromDishka[RedeemCodeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RedeemCodeResponse:
    """Look up the space behind an invite code without joining it.

    Raises:
        InvalidCodeError: If the code does not resolve to a space
        SelfJoinError: If the user created the space
    """
    user_id = authenticate(jwt_service, auth_token, authorization)
    return await redeem_code_use_case.execute(
        RedeemCodeRequest(user_id=user_id, invite_code=request.invite_code)
    )


@router.post("/join", response_model=SpaceResponse)
async def confirm_join(
    request: InviteCodeAPIRequest,
    confirm_join_use_case: FromDishka[ConfirmJoinUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> SpaceResponse:
    """Join the space behind an invite code.

    Safe to retry: a repeated join by the same user returns the space.
    """
    user_id = authenticate(jwt_service, auth_token, authorization)
    return await confirm_join_use_case.execute(
        ConfirmJoinRequest(user_id=user_id, invite_code=request.invite_code)
    )


@router.get("/pet-names", response_model=PetNamesResponse)
async def get_pet_names(
    get_pet_names_use_case: FromDishka[GetPetNamesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> PetNamesResponse:
    user_id = authenticate(jwt_service, auth_token, authorization)
    return await get_pet_names_use_case.execute(GetPetNamesRequest(user_id=user_id))


@router.put("/pet-names", response_model=PetNamesResponse)
async def update_pet_names(
    request: UpdatePetNamesAPIRequest,
    update_pet_names_use_case: FromDishka[UpdatePetNamesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> PetNamesResponse:
    """Set what the user calls their partner and what the partner calls them.

    Raises:
        SpaceNotFoundError: If the user has no space
        NotPairedError: If a partner pet name is set before pairing
    """
    user_id = authenticate(jwt_service, auth_token, authorization)
    return await update_pet_names_use_case.execute(
        UpdatePetNamesRequest(
            user_id=user_id,
            my_pet_name=request.my_pet_name,
            partner_pet_name=request.partner_pet_name,
        )
    )


@router.put("/{space_id}", response_model=SpaceResponse)
async def update_anniversary_date(
    space_id: UUID,
    request: UpdateAnniversaryDateAPIRequest,
    update_use_case: FromDishka[UpdateAnniversaryDateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> SpaceResponse:
    """Change the anniversary date. Either partner may do this."""
    user_id = authenticate(jwt_service, auth_token, authorization)
    return await update_use_case.execute(
        UpdateAnniversaryDateRequest(
            user_id=user_id,
            space_id=str(space_id),
            anniversary_date=request.anniversary_date,
        )
    )


@router.delete("/{space_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_space(
    space_id: UUID,
    delete_space_use_case: FromDishka[DeleteSpaceUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> Response:
    """Delete the space immediately, skipping the cooling-off period.

    Raises:
        SpaceNotFoundError: If the space does not exist
        NotSpaceMemberError: If the user is not a partner
    """
    user_id = authenticate(jwt_service, auth_token, authorization)
    await delete_space_use_case.execute(
        DeleteSpaceRequest(user_id=user_id, space_id=str(space_id))
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
