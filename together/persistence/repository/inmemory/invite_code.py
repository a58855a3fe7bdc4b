"""In-memory invite code repository for testing."""

from datetime import datetime
from typing import Optional

from together.domain.error import ConflictError
from together.domain.model import InviteCodeRecord
from together.domain.repository.invite_code import InviteCodeRepository
from together.domain.value import InviteCode, InviteCodeStatus, SpaceId

from .unit_of_work import remember


class InMemoryInviteCodeRepository(InviteCodeRepository):
    """In-memory implementation of InviteCodeRepository for testing."""

    def __init__(self) -> None:
        self._codes: dict[str, InviteCodeRecord] = {}

    async def exists(self, code: InviteCode) -> bool:
        return code.root in self._codes

    async def find_by_code(self, code: InviteCode) -> Optional[InviteCodeRecord]:
        return self._codes.get(code.root)

    async def find_live(self, code: InviteCode) -> Optional[InviteCodeRecord]:
        record = self._codes.get(code.root)
        return record if record is not None and record.is_live else None

    async def save(self, record: InviteCodeRecord) -> InviteCodeRecord:
        """Register a code.

        Raises:
            ConflictError: Duplicate code or second live code for the space
        """
        if record.code.root in self._codes:
            raise ConflictError(f"Invite code already minted: {record.code}")
        if any(
            r.space_id == record.space_id and r.is_live for r in self._codes.values()
        ):
            raise ConflictError(f"Space {record.space_id} already has a live code")
        remember(self._codes, record.code.root)
        self._codes[record.code.root] = record
        return record

    async def retire_for_space(self, space_id: SpaceId, at: datetime) -> int:
        retired = 0
        for key, record in self._codes.items():
            if record.space_id == space_id and record.is_live:
                remember(self._codes, key)
                self._codes[key] = record.model_copy(
                    update={"status": InviteCodeStatus.RETIRED, "retired_at": at}
                )
                retired += 1
        return retired
