"""Update anniversary date use case."""

from datetime import date

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase, to_space_id, to_user_id
from together.application.usecase.space.common import SpaceResponse
from together.domain.service import SpaceService
from together.domain.unit_of_work import UnitOfWork


class UpdateAnniversaryDateRequest(BaseModel):
    """Update anniversary date request."""

    user_id: str
    space_id: str
    anniversary_date: date


class UpdateAnniversaryDateUseCase(BaseUseCase):
    """Use case for changing a space's anniversary date.

    Either partner may change it; no approval from the other is needed.
    """

    def __init__(
        self, space_service: SpaceService, unit_of_work: UnitOfWork
    ) -> None:
        self.space_service = space_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: UpdateAnniversaryDateRequest) -> SpaceResponse:
        """Update the date.

        Raises:
            SpaceNotFoundError: If the space does not exist
            NotSpaceMemberError: If the user is not a partner
        """
        async with self.unit_of_work:
            space = await self.space_service.update_anniversary_date(
                to_space_id(request.space_id),
                to_user_id(request.user_id),
                request.anniversary_date,
            )
        return SpaceResponse.from_domain(space)
