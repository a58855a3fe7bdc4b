"""PostgreSQL implementation of InviteCode repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import insert, select, update

from together.domain.model import InviteCodeRecord
from together.domain.repository import InviteCodeRepository
from together.domain.value import InviteCode, InviteCodeStatus, SpaceId
from together.persistence.mappers import invite_code_to_dict, row_to_invite_code
from together.persistence.repository.base import PostgresRepository
from together.persistence.retry import storage_retry
from together.persistence.tables import invite_codes_table


class PostgresInviteCodeRepository(PostgresRepository, InviteCodeRepository):
    """PostgreSQL implementation of InviteCodeRepository."""

    @storage_retry
    async def exists(self, code: InviteCode) -> bool:
        stmt = select(invite_codes_table.c.code).where(
            invite_codes_table.c.code == code.root
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    @storage_retry
    async def find_by_code(self, code: InviteCode) -> Optional[InviteCodeRecord]:
        stmt = select(invite_codes_table).where(invite_codes_table.c.code == code.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite_code(dict(row)) if row else None

    @storage_retry
    async def find_live(self, code: InviteCode) -> Optional[InviteCodeRecord]:
        stmt = select(invite_codes_table).where(
            invite_codes_table.c.code == code.root,
            invite_codes_table.c.status == InviteCodeStatus.LIVE.value,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite_code(dict(row)) if row else None

    @storage_retry
    async def save(self, record: InviteCodeRecord) -> InviteCodeRecord:
        """Insert a newly minted code.

        Raises:
            ConflictError: Duplicate code or second live code for the space
        """
        await self.session.execute(
            insert(invite_codes_table).values(**invite_code_to_dict(record))
        )
        await self.session.flush()
        return record

    @storage_retry
    async def retire_for_space(self, space_id: SpaceId, at: datetime) -> int:
        stmt = (
            update(invite_codes_table)
            .where(
                invite_codes_table.c.space_id == space_id,
                invite_codes_table.c.status == InviteCodeStatus.LIVE.value,
            )
            .values(status=InviteCodeStatus.RETIRED.value, retired_at=at)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
