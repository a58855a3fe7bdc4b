"""Cancel unbind use case."""

from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase, to_space_id, to_user_id
from together.application.usecase.unbind.common import UnbindRequestResponse
from together.domain.service import UnbindService
from together.domain.unit_of_work import UnitOfWork


class CancelUnbindRequest(BaseModel):
    """Cancel unbind request."""

    user_id: str
    space_id: str


class CancelUnbindUseCase(BaseUseCase):
    """Use case for cancelling a pending unbind; either partner may."""

    def __init__(
        self, unbind_service: UnbindService, unit_of_work: UnitOfWork
    ) -> None:
        self.unbind_service = unbind_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: CancelUnbindRequest) -> UnbindRequestResponse:
        """Cancel the pending request.

        Raises:
            NoPendingRequestError: If nothing is pending
            NotSpaceMemberError: If the user is not a partner
        """
        async with self.unit_of_work:
            cancelled = await self.unbind_service.cancel_unbind(
                to_space_id(request.space_id), to_user_id(request.user_id)
            )
        return UnbindRequestResponse.from_domain(cancelled)
