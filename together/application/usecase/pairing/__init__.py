"""Pairing use cases."""

from together.application.usecase.pairing.confirm_join import (
    ConfirmJoinRequest,
    ConfirmJoinUseCase,
)
from together.application.usecase.pairing.redeem_code import (
    PartnerProfileResponse,
    RedeemCodeRequest,
    RedeemCodeResponse,
    RedeemCodeUseCase,
)

__all__ = [
    "ConfirmJoinRequest",
    "ConfirmJoinUseCase",
    "PartnerProfileResponse",
    "RedeemCodeRequest",
    "RedeemCodeResponse",
    "RedeemCodeUseCase",
]
