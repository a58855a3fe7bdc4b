"""Domain value objects."""

from together.domain.value.identifiers import SpaceId, UnbindRequestId, UserId
from together.domain.value.types import (
    InviteCode,
    InviteCodeStatus,
    Nickname,
    NotificationEvent,
    PartnerProfile,
    PetName,
    PetNames,
    UnbindStatus,
)

__all__ = [
    # Identifiers
    "UserId",
    "SpaceId",
    "UnbindRequestId",
    # Types
    "InviteCode",
    "InviteCodeStatus",
    "Nickname",
    "NotificationEvent",
    "PartnerProfile",
    "PetName",
    "PetNames",
    "UnbindStatus",
]
