"""Invite code repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from together.domain.model.invite_code import InviteCodeRecord
from together.domain.value import InviteCode, SpaceId


class InviteCodeRepository(ABC):
    """Registry of every invite code ever minted."""

    @abstractmethod
    async def exists(self, code: InviteCode) -> bool:
        """Check whether a code was ever minted, live or retired.

        Used by minting to guarantee a code is never reused.
        """
        pass

    @abstractmethod
    async def find_by_code(self, code: InviteCode) -> InviteCodeRecord | None:
        """Find a registry entry regardless of status."""
        pass

    @abstractmethod
    async def find_live(self, code: InviteCode) -> InviteCodeRecord | None:
        """Find a code only if it is still live.

        Args:
            code: The normalized invite code

        Returns:
            The live record, None if unknown or retired
        """
        pass

    @abstractmethod
    async def save(self, record: InviteCodeRecord) -> InviteCodeRecord:
        """Register a newly minted code.

        Raises:
            ConflictError: If the code was already minted or the space already
                has a live code
        """
        pass

    @abstractmethod
    async def retire_for_space(self, space_id: SpaceId, at: datetime) -> int:
        """Retire the live code of a space.

        Returns:
            Number of codes retired (0 if the space had none)
        """
        pass
