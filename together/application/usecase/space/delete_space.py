"""Delete space use case."""

import logfire
from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase, to_space_id, to_user_id
from together.domain.service import SpaceService
from together.domain.unit_of_work import UnitOfWork


class DeleteSpaceRequest(BaseModel):
    """Delete space request."""

    user_id: str
    space_id: str


class DeleteSpaceUseCase(BaseUseCase):
    """Use case for deleting a space immediately, without cooling-off.

    This is the direct path; the unbind flow is the reversible one.
    """

    def __init__(
        self, space_service: SpaceService, unit_of_work: UnitOfWork
    ) -> None:
        self.space_service = space_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: DeleteSpaceRequest) -> None:
        """Delete the space.

        Raises:
            SpaceNotFoundError: If the space does not exist
            NotSpaceMemberError: If the user is not a partner
        """
        space_id = to_space_id(request.space_id)
        with logfire.span(
            "delete_space.execute", space_id=request.space_id, user_id=request.user_id
        ):
            async with self.unit_of_work:
                await self.space_service.get_member_space(
                    space_id, to_user_id(request.user_id)
                )
                await self.space_service.delete_space(space_id)
