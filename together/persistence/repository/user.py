"""PostgreSQL implementation of the user profile repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert

from together.domain.model import User
from together.domain.repository import UserRepository
from together.domain.value import UserId
from together.persistence.mappers import row_to_user, user_to_dict
from together.persistence.repository.base import PostgresRepository
from together.persistence.retry import storage_retry
from together.persistence.tables import users_table

IMMUTABLE_COLUMNS = ("id", "created_at")


class PostgresUserRepository(PostgresRepository, UserRepository):
    @storage_retry
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    @storage_retry
    async def upsert(self, user: User) -> User:
        values = user_to_dict(user)
        stmt = (
            insert(users_table)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[users_table.c.id],
                set_={
                    k: v for k, v in values.items() if k not in IMMUTABLE_COLUMNS
                },
            )
            .returning(*users_table.c)
        )
        result = await self.session.execute(stmt)
        return row_to_user(dict(result.mappings().one()))
