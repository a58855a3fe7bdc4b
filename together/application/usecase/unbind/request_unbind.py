"""Request unbind use case."""

import logfire
from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase, to_space_id, to_user_id
from together.application.usecase.unbind.common import UnbindRequestResponse
from together.domain.error import AlreadyPendingError
from together.domain.service import UnbindService
from together.domain.unit_of_work import UnitOfWork


class RequestUnbindRequest(BaseModel):
    """Request unbind request."""

    user_id: str
    space_id: str


class RequestUnbindUseCase(BaseUseCase):
    """Use case for starting the cooling-off period.

    Asking again while a request is pending returns that request, so the
    client can retry safely.
    """

    def __init__(
        self, unbind_service: UnbindService, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize request unbind use case.

        Args:
            unbind_service: Unbind domain service
            unit_of_work: Transaction the request is written in
        """
        self.unbind_service = unbind_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: RequestUnbindRequest) -> UnbindRequestResponse:
        """Request an unbind.

        Raises:
            SpaceNotFoundError: If the space does not exist
            NotSpaceMemberError: If the user is not a partner
            NotPairedError: If the space has a single partner
        """
        async with self.unit_of_work:
            try:
                unbind_request = await self.unbind_service.request_unbind(
                    to_space_id(request.space_id), to_user_id(request.user_id)
                )
            except AlreadyPendingError as e:
                logfire.info(
                    "Unbind already pending", request_id=str(e.request.id)
                )
                unbind_request = e.request
        return UnbindRequestResponse.from_domain(unbind_request)
