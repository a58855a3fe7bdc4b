"""Create space use case."""

from datetime import date

import logfire
from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase, to_user_id
from together.application.usecase.space.common import SpaceResponse
from together.domain.service import SpaceService
from together.domain.unit_of_work import UnitOfWork


class CreateSpaceRequest(BaseModel):
    """Create space request."""

    user_id: str  # From authenticated user
    anniversary_date: date


class CreateSpaceUseCase(BaseUseCase):
    """Use case for creating a space and its invite code."""

    def __init__(
        self, space_service: SpaceService, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize create space use case.

        Args:
            space_service: Space domain service
            unit_of_work: Transaction the space and its code are written in
        """
        self.space_service = space_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: CreateSpaceRequest) -> SpaceResponse:
        """Create a space owned by the requesting user.

        Raises:
            AlreadyInSpaceError: If the user already belongs to a space
        """
        with logfire.span("create_space.execute", user_id=request.user_id):
            async with self.unit_of_work:
                space = await self.space_service.create_space(
                    to_user_id(request.user_id), request.anniversary_date
                )
            return SpaceResponse.from_domain(space)
