"""PostgreSQL implementation of UnbindRequest repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import insert, select, update

from together.domain.model import UnbindRequest
from together.domain.repository import UnbindRequestRepository
from together.domain.value import SpaceId, UnbindRequestId, UnbindStatus, UserId
from together.persistence.mappers import row_to_unbind_request, unbind_request_to_dict
from together.persistence.repository.base import PostgresRepository
from together.persistence.retry import storage_retry
from together.persistence.tables import unbind_requests_table

PENDING = UnbindStatus.PENDING.value


class PostgresUnbindRequestRepository(PostgresRepository, UnbindRequestRepository):
    """PostgreSQL implementation of UnbindRequestRepository.

    The partial unique index on ``space_id WHERE status = 'pending'`` is what
    makes concurrent requests for the same space collapse into one.
    """

    @storage_retry
    async def find_by_id(self, request_id: UnbindRequestId) -> Optional[UnbindRequest]:
        stmt = select(unbind_requests_table).where(
            unbind_requests_table.c.id == request_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_unbind_request(dict(row)) if row else None

    @storage_retry
    async def find_pending_by_space(self, space_id: SpaceId) -> Optional[UnbindRequest]:
        stmt = select(unbind_requests_table).where(
            unbind_requests_table.c.space_id == space_id,
            unbind_requests_table.c.status == PENDING,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_unbind_request(dict(row)) if row else None

    @storage_retry
    async def find_latest_by_space(self, space_id: SpaceId) -> Optional[UnbindRequest]:
        stmt = (
            select(unbind_requests_table)
            .where(unbind_requests_table.c.space_id == space_id)
            .order_by(unbind_requests_table.c.requested_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_unbind_request(dict(row)) if row else None

    @storage_retry
    async def save(self, request: UnbindRequest) -> UnbindRequest:
        """Insert a pending request.

        Raises:
            ConflictError: If the space already has a pending request
        """
        await self.session.execute(
            insert(unbind_requests_table).values(**unbind_request_to_dict(request))
        )
        await self.session.flush()
        return request

    @storage_retry
    async def transition(
        self,
        request_id: UnbindRequestId,
        expected_status: UnbindStatus,
        new_status: UnbindStatus,
        at: datetime,
        resolved_by: UserId | None,
        expected_version: int,
    ) -> Optional[UnbindRequest]:
        stmt = (
            update(unbind_requests_table)
            .where(
                unbind_requests_table.c.id == request_id,
                unbind_requests_table.c.status == expected_status.value,
                unbind_requests_table.c.version == expected_version,
            )
            .values(
                status=new_status.value,
                resolved_at=at,
                resolved_by=resolved_by,
                version=unbind_requests_table.c.version + 1,
            )
            .returning(*unbind_requests_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_unbind_request(dict(row)) if row else None

    @storage_retry
    async def find_expired_pending(
        self, now: datetime, limit: int
    ) -> list[UnbindRequest]:
        stmt = (
            select(unbind_requests_table)
            .where(
                unbind_requests_table.c.status == PENDING,
                unbind_requests_table.c.expires_at <= now,
            )
            .order_by(unbind_requests_table.c.expires_at)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_unbind_request(dict(row)) for row in result.mappings()]
