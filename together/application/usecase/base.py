"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from together.domain.value import SpaceId, UserId


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def to_user_id(value: str) -> UserId:
    return UserId(UUID(value))


def to_space_id(value: str) -> SpaceId:
    return SpaceId(UUID(value))
