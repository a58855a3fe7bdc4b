"""Repository interfaces for the Together domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from together.domain.repository.invite_code import InviteCodeRepository
from together.domain.repository.space import SpaceRepository
from together.domain.repository.unbind_request import UnbindRequestRepository
from together.domain.repository.user import UserRepository

__all__ = [
    "SpaceRepository",
    "InviteCodeRepository",
    "UnbindRequestRepository",
    "UserRepository",
]
