"""User entity.

Accounts are managed by the identity service; this is the profile a user sets
up here so their partner recognises them when redeeming an invite code.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from together.domain.model.common import DomainModel
from together.domain.value import Nickname, PartnerProfile, UserId
from together.util.time import utc_now


class User(DomainModel):
    """User entity."""

    id: UserId
    nickname: Optional[Nickname] = None
    avatar_url: Optional[str] = None
    email: Optional[str] = None  # Never shown to the partner before pairing
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def to_partner_profile(self) -> PartnerProfile:
        return PartnerProfile(
            user_id=self.id, nickname=self.nickname, avatar_url=self.avatar_url
        )
