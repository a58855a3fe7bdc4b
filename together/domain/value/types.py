"""Domain value objects for spaces, pairing and unbinding.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from together.domain.value.common import RootValueObject, ValueObject
from together.domain.value.identifiers import UserId


class UnbindStatus(str, Enum):
    """Status of an unbind request.

    ``completed`` is terminal; ``cancelled`` requests are kept as history and a
    later request always creates a new row.
    """

    PENDING = "pending"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class InviteCodeStatus(str, Enum):
    """Status of an invite code in the registry."""

    LIVE = "live"
    RETIRED = "retired"


class NotificationEvent(str, Enum):
    """Pairing and unbind transitions partners are told about."""

    PAIRED = "paired"
    UNBIND_REQUESTED = "unbind_requested"
    UNBIND_CANCELLED = "unbind_cancelled"
    UNBIND_COMPLETED = "unbind_completed"


class InviteCode(RootValueObject[str]):
    """Short opaque invite token, e.g. ``ABC123``.

    Input is normalized (surrounding whitespace stripped, uppercased) so codes
    typed on a phone keyboard still match.
    """

    @field_validator("root")
    @classmethod
    def validate_code_format(cls, v: str) -> str:
        """Normalize and validate the code."""
        v = v.strip().upper()
        if not re.match(r"^[A-Z0-9]{4,16}$", v):
            raise ValueError("Invite code must be 4-16 letters or digits")
        return v


class Nickname(RootValueObject[str]):
    """Display name of a user."""

    @field_validator("root")
    @classmethod
    def validate_nickname(cls, v: str) -> str:
        if len(v) < 1 or len(v) > 50:
            raise ValueError("Nickname must be 1-50 characters")
        return v


class PetName(RootValueObject[str]):
    """Affectionate name a partner uses for the other."""

    @field_validator("root")
    @classmethod
    def validate_pet_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 1 or len(v) > 30:
            raise ValueError("Pet name must be 1-30 characters")
        return v


class PartnerProfile(ValueObject):
    """Public profile of a partner, safe to show to the other person."""

    user_id: UserId
    nickname: Nickname | None = None
    avatar_url: str | None = None


class PetNames(ValueObject):
    """Pet names as seen by one member.

    my_pet_name: what I call my partner
    partner_pet_name: what my partner calls me
    """

    my_pet_name: PetName | None = None
    partner_pet_name: PetName | None = None
