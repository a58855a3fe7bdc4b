"""Unbind routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Response, status

from together.application.usecase.unbind import (
    CancelUnbindRequest,
    CancelUnbindUseCase,
    GetUnbindStatusRequest,
    GetUnbindStatusUseCase,
    RequestUnbindRequest,
    RequestUnbindUseCase,
    UnbindRequestResponse,
)
from together.domain.service import JWTService
from together.interface.api.identity import authenticate

router = APIRouter(
    prefix="/spaces/{space_id}/unbind", tags=["unbind"], route_class=DishkaRoute
)


@router.post("", response_model=UnbindRequestResponse)
async def request_unbind(
    space_id: UUID,
    request_unbind_use_case: FromDishka[RequestUnbindUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> UnbindRequestResponse:
    """Request to unbind; the space is deleted when the cooling-off ends.

    Returns the already pending request if there is one.

    Raises:
        UnauthenticatedError: If not authenticated
        NotSpaceMemberError: If the user is not a partner
        NotPairedError: If the space has a single partner
    """
    user_id = authenticate(jwt_service, auth_token, authorization)
    return await request_unbind_use_case.execute(
        RequestUnbindRequest(user_id=user_id, space_id=str(space_id))
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_unbind(
    space_id: UUID,
    cancel_unbind_use_case: FromDishka[CancelUnbindUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> Response:
    """Cancel the pending unbind request. Either partner may cancel."""
    user_id = authenticate(jwt_service, auth_token, authorization)
    await cancel_unbind_use_case.execute(
        CancelUnbindRequest(user_id=user_id, space_id=str(space_id))
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", response_model=UnbindRequestResponse | None)
async def get_unbind_status(
    space_id: UUID,
    get_status_use_case: FromDishka[GetUnbindStatusUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> UnbindRequestResponse | None:
    """Get the pending unbind request, else the most recent one, else null."""
    user_id = authenticate(jwt_service, auth_token, authorization)
    return await get_status_use_case.execute(
        GetUnbindStatusRequest(user_id=user_id, space_id=str(space_id))
    )
