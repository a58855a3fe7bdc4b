"""Space aggregate root.

A space is the shared container two partners journal in. It is created by one
user and becomes paired when a second user joins through its invite code.
"""

from datetime import date, datetime

from pydantic import Field, model_validator

from together.domain.model.common import DomainModel
from together.domain.value import InviteCode, SpaceId, UserId
from together.util.time import utc_now

MAX_PARTNERS = 2


class Space(DomainModel):
    """Space aggregate root.

    Business rules:
    - A space has one or two partners, never more, never duplicated
    - A user belongs to at most one space (enforced by the repository)
    - The invite code is only set while the space is waiting for a partner
    - ``version`` increases on every membership change and guards concurrent joins
    """

    id: SpaceId
    anniversary_date: date
    partners: tuple[UserId, ...] = Field(min_length=1, max_length=MAX_PARTNERS)
    invite_code: InviteCode | None = None
    version: int = Field(default=1, ge=1)
    created_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def check_membership(self) -> "Space":
        if len(set(self.partners)) != len(self.partners):
            raise ValueError("A user cannot be a partner twice in the same space")
        if self.is_paired and self.invite_code is not None:
            raise ValueError("A paired space cannot hold a live invite code")
        return self

    @property
    def creator_id(self) -> UserId:
        return self.partners[0]

    @property
    def is_paired(self) -> bool:
        return len(self.partners) == MAX_PARTNERS

    def has_partner(self, user_id: UserId) -> bool:
        return user_id in self.partners

    def partner_of(self, user_id: UserId) -> UserId | None:
        """Return the other partner of ``user_id``, if there is one."""
        for partner in self.partners:
            if partner != user_id:
                return partner
        return None
