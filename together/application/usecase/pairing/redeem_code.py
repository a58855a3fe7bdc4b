"""Redeem invite code use case."""

from datetime import date, datetime

import logfire
from pydantic import BaseModel

from together.application.usecase.base import BaseUseCase, to_user_id
from together.application.usecase.pairing.common import parse_invite_code
from together.domain.service import PairingService


class RedeemCodeRequest(BaseModel):
    """Redeem code request."""

    user_id: str
    invite_code: str


class PartnerProfileResponse(BaseModel):
    """Public profile of the prospective partner."""

    user_id: str
    nickname: str | None
    avatar_url: str | None


class RedeemCodeResponse(BaseModel):
    """Pending match shown on the confirmation screen.

    Holding it grants nothing: the join is re-validated on confirm.
    """

    invite_code: str
    space_id: str
    anniversary_date: date
    partner_ids: list[str]
    partner: PartnerProfileResponse
    redeemed_at: datetime


class RedeemCodeUseCase(BaseUseCase):
    """Use case for previewing the space behind an invite code."""

    def __init__(self, pairing_service: PairingService) -> None:
        """Initialize redeem code use case.

        Args:
            pairing_service: Pairing domain service
        """
        self.pairing_service = pairing_service

    async def execute(self, request: RedeemCodeRequest) -> RedeemCodeResponse:
        """Redeem a code without joining.

        Raises:
            InvalidCodeError: If the code does not resolve
            SelfJoinError: If it is the user's own code
        """
        with logfire.span("redeem_code.execute", user_id=request.user_id):
            code = parse_invite_code(request.invite_code)
            match = await self.pairing_service.redeem(
                code, to_user_id(request.user_id)
            )
            partner = match.partner
            return RedeemCodeResponse(
                invite_code=match.invite_code.root,
                space_id=str(match.space_id),
                anniversary_date=match.anniversary_date,
                partner_ids=[str(p) for p in match.partner_ids],
                partner=PartnerProfileResponse(
                    user_id=str(partner.user_id),
                    nickname=partner.nickname.root if partner.nickname else None,
                    avatar_url=partner.avatar_url,
                ),
                redeemed_at=match.redeemed_at,
            )
