"""Unbind request entity.

Either partner can ask to dissolve a paired space. The request waits through
a cooling-off period during which either partner may cancel it; once it
expires it is finalized and the space is deleted.
"""

from datetime import datetime

from pydantic import Field

from together.domain.model.common import DomainModel
from together.domain.value import SpaceId, UnbindRequestId, UnbindStatus, UserId


class UnbindRequest(DomainModel):
    """Unbind request entity.

    Business rules:
    - At most one pending request per space
    - pending -> cancelled or pending -> completed, nothing else
    - ``resolved_at`` and ``resolved_by`` are set when the request leaves pending
      (``resolved_by`` stays empty when the finalizer completes it)
    """

    id: UnbindRequestId
    space_id: SpaceId
    requested_by: UserId
    requested_at: datetime
    expires_at: datetime
    status: UnbindStatus = UnbindStatus.PENDING
    resolved_at: datetime | None = None
    resolved_by: UserId | None = None
    version: int = Field(default=1, ge=1)

    @property
    def is_pending(self) -> bool:
        return self.status == UnbindStatus.PENDING

    def is_expired(self, now: datetime) -> bool:
        """Whether the cooling-off period has elapsed at ``now``."""
        return now >= self.expires_at
