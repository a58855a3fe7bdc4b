"""Invite code registry entry.

Every code ever minted is recorded so that a code is never handed out twice,
even after the space it belonged to has been deleted.
"""

from datetime import datetime

from pydantic import Field

from together.domain.model.common import DomainModel
from together.domain.value import InviteCode, InviteCodeStatus, SpaceId
from together.util.time import utc_now


class InviteCodeRecord(DomainModel):
    """A minted invite code and the space it was issued for.

    At most one live code exists per space. Retired codes stay in the
    registry and no longer resolve.
    """

    code: InviteCode
    space_id: SpaceId
    status: InviteCodeStatus = InviteCodeStatus.LIVE
    created_at: datetime = Field(default_factory=utc_now)
    retired_at: datetime | None = None

    @property
    def is_live(self) -> bool:
        return self.status == InviteCodeStatus.LIVE
