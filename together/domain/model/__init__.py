"""Domain model entities for Together."""

from together.domain.model.invite_code import InviteCodeRecord
from together.domain.model.pending_match import PendingMatch
from together.domain.model.space import MAX_PARTNERS, Space
from together.domain.model.unbind_request import UnbindRequest
from together.domain.model.user import User

__all__ = [
    "MAX_PARTNERS",
    "Space",
    "InviteCodeRecord",
    "UnbindRequest",
    "User",
    "PendingMatch",
]
