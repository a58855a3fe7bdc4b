"""Get my space use case."""

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase, to_user_id
from together.application.usecase.space.common import SpaceResponse
from together.domain.service import SpaceService


class GetMySpaceRequest(BaseModel):
    """Get my space request."""

    user_id: str


class GetMySpaceUseCase(BaseUseCase):
    """Use case for looking up the requesting user's space, if any."""

    def __init__(self, space_service: SpaceService) -> None:
        self.space_service = space_service

    async def execute(self, request: GetMySpaceRequest) -> SpaceResponse | None:
        space = await self.space_service.get_space_for_user(
            to_user_id(request.user_id)
        )
        return SpaceResponse.from_domain(space) if space else None
