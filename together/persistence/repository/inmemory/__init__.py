"""In-memory repository implementations for testing."""

from .invite_code import InMemoryInviteCodeRepository
from .space import InMemorySpaceRepository
from .unbind_request import InMemoryUnbindRequestRepository
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryInviteCodeRepository",
    "InMemorySpaceRepository",
    "InMemoryUnbindRequestRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
]
