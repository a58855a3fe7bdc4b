"""Get unbind status use case."""

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase, to_space_id, to_user_id
from together.application.usecase.unbind.common import UnbindRequestResponse
from together.domain.service import SpaceService, UnbindService


class GetUnbindStatusRequest(BaseModel):
    """Get unbind status request."""

    user_id: str
    space_id: str


class GetUnbindStatusUseCase(BaseUseCase):
    """Use case for showing the unbind state of a space to a partner."""

    def __init__(
        self, unbind_service: UnbindService, space_service: SpaceService
    ) -> None:
        self.unbind_service = unbind_service
        self.space_service = space_service

    async def execute(
        self, request: GetUnbindStatusRequest
    ) -> UnbindRequestResponse | None:
        """Get the pending request, else the latest one, else None.

        Raises:
            SpaceNotFoundError: If the space does not exist
            NotSpaceMemberError: If the user is not a partner
        """
        space_id = to_space_id(request.space_id)
        await self.space_service.get_member_space(space_id, to_user_id(request.user_id))
        status = await self.unbind_service.get_status(space_id)
        return UnbindRequestResponse.from_domain(status) if status else None
