"""Confirm join use case."""

import logfire
from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase, to_user_id
from together.application.usecase.pairing.common import parse_invite_code
from together.application.usecase.space.common import SpaceResponse
from together.domain.service import PairingService
from together.domain.unit_of_work import UnitOfWork


class ConfirmJoinRequest(BaseModel):
    """Confirm join request."""

    user_id: str
    invite_code: str


class ConfirmJoinUseCase(BaseUseCase):
    """Use case for joining a space after the user confirmed the match.

    Idempotent: confirming again after a successful join returns the same
    space.
    """

    def __init__(
        self, pairing_service: PairingService, unit_of_work: UnitOfWork
    ) -> None:
        self.pairing_service = pairing_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: ConfirmJoinRequest) -> SpaceResponse:
        """Join the space.

        Raises:
            InvalidCodeError: If the code no longer resolves
            SelfJoinError: If it is the user's own code
            AlreadyInSpaceError: If the user belongs to another space
            SpaceFullError: If another user joined first
        """
        with logfire.span("confirm_join.execute", user_id=request.user_id):
            code = parse_invite_code(request.invite_code)
            async with self.unit_of_work:
                space = await self.pairing_service.confirm(
                    code, to_user_id(request.user_id)
                )
            return SpaceResponse.from_domain(space)
