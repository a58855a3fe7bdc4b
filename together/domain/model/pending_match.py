"""Pending match read model."""

from datetime import date, datetime

from together.domain.model.common import DomainModel
from together.domain.value import InviteCode, PartnerProfile, SpaceId, UserId


class PendingMatch(DomainModel):
    """What redeeming an invite code reveals before the user confirms.

    Redeeming does not change anything; the match only lives in the client
    session until the user confirms or walks away.
    """

    invite_code: InviteCode
    space_id: SpaceId
    anniversary_date: date
    partner_ids: tuple[UserId, ...]
    partner: PartnerProfile
    acting_user_id: UserId
    redeemed_at: datetime
