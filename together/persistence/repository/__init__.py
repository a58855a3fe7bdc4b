"""PostgreSQL repository implementations."""

from together.persistence.repository.invite_code import PostgresInviteCodeRepository
from together.persistence.repository.space import PostgresSpaceRepository
from together.persistence.repository.unbind_request import (
    PostgresUnbindRequestRepository,
)
from together.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresSpaceRepository",
    "PostgresInviteCodeRepository",
    "PostgresUnbindRequestRepository",
    "PostgresUserRepository",
]
