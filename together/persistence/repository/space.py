"""PostgreSQL implementation of Space repository."""

from datetime import date
from typing import Any, Optional

from sqlalchemy import delete, insert, select, update

from together.domain.model import Space
from together.domain.repository import SpaceRepository
from together.domain.value import PetName, SpaceId, UserId
from together.persistence.mappers import row_to_space, space_to_dict
from together.persistence.repository.base import PostgresRepository
from together.persistence.retry import storage_retry
from together.persistence.tables import space_members_table, spaces_table
from together.util.time import utc_now


class PostgresSpaceRepository(PostgresRepository, SpaceRepository):
    """PostgreSQL implementation of SpaceRepository.

    Membership lives in ``space_members``; the unique ``user_id`` and
    ``(space_id, position)`` constraints back the one-space-per-user and
    two-partners-per-space rules.
    """

    async def _load(self, row: Any) -> Space:
        stmt = (
            select(space_members_table.c.user_id)
            .where(space_members_table.c.space_id == row["id"])
            .order_by(space_members_table.c.position)
        )
        result = await self.session.execute(stmt)
        return row_to_space(dict(row), result.scalars().all())

    async def _find(self, space_id: SpaceId) -> Optional[Space]:
        stmt = select(spaces_table).where(spaces_table.c.id == space_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return await self._load(row) if row else None

    @storage_retry
    async def find_by_id(self, space_id: SpaceId) -> Optional[Space]:
        return await self._find(space_id)

    @storage_retry
    async def find_by_member(self, user_id: UserId) -> Optional[Space]:
        stmt = select(space_members_table.c.space_id).where(
            space_members_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        space_id = result.scalar_one_or_none()
        return await self._find(space_id) if space_id else None

    @storage_retry
    async def create(self, space: Space) -> Space:
        """Insert the space and its creator's membership row.

        Raises:
            ConflictError: If the creator already belongs to a space
        """
        await self.session.execute(insert(spaces_table).values(**space_to_dict(space)))
        await self.session.execute(
            insert(space_members_table).values(
                space_id=space.id,
                user_id=space.creator_id,
                position=0,
                joined_at=space.created_at,
            )
        )
        await self.session.flush()
        return space

    @storage_retry
    async def add_member(
        self, space_id: SpaceId, user_id: UserId, expected_version: int
    ) -> Optional[Space]:
        """Compare-and-set on ``(id, version, member_count = 1)``.

        Returns None when another writer got there first.
        """
        stmt = (
            update(spaces_table)
            .where(
                spaces_table.c.id == space_id,
                spaces_table.c.version == expected_version,
                spaces_table.c.member_count == 1,
            )
            .values(
                member_count=2,
                invite_code=None,
                version=spaces_table.c.version + 1,
            )
            .returning(*spaces_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row is None:
            return None

        await self.session.execute(
            insert(space_members_table).values(
                space_id=space_id,
                user_id=user_id,
                position=1,
                joined_at=utc_now(),
            )
        )
        return await self._load(row)

    @storage_retry
    async def update_anniversary_date(
        self, space_id: SpaceId, anniversary_date: date
    ) -> Optional[Space]:
        stmt = (
            update(spaces_table)
            .where(spaces_table.c.id == space_id)
            .values(anniversary_date=anniversary_date)
            .returning(*spaces_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return await self._load(row) if row else None

    @storage_retry
    async def delete(self, space_id: SpaceId) -> bool:
        # Membership rows go with the space (ON DELETE CASCADE)
        stmt = (
            delete(spaces_table)
            .where(spaces_table.c.id == space_id)
            .returning(spaces_table.c.id)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    @storage_retry
    async def find_pet_names(self, space_id: SpaceId) -> dict[UserId, PetName | None]:
        stmt = select(
            space_members_table.c.user_id, space_members_table.c.pet_name
        ).where(space_members_table.c.space_id == space_id)
        result = await self.session.execute(stmt)
        return {
            UserId(row.user_id): PetName(row.pet_name) if row.pet_name else None
            for row in result
        }

    @storage_retry
    async def set_pet_name(
        self, space_id: SpaceId, user_id: UserId, pet_name: PetName | None
    ) -> None:
        stmt = (
            update(space_members_table)
            .where(
                space_members_table.c.space_id == space_id,
                space_members_table.c.user_id == user_id,
            )
            .values(pet_name=pet_name.root if pet_name else None)
        )
        await self.session.execute(stmt)
