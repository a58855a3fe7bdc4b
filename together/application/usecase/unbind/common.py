"""Response models shared by unbind use cases."""

from datetime import datetime

from pydantic import BaseModel

from together.domain.model import UnbindRequest
from together.domain.value import UnbindStatus


class UnbindRequestResponse(BaseModel):
    """An unbind request and where it is in its lifecycle."""

    id: str
    space_id: str
    requested_by: str
    requested_at: datetime
    expires_at: datetime
    status: UnbindStatus
    resolved_at: datetime | None
    resolved_by: str | None

    @classmethod
    def from_domain(cls, request: UnbindRequest) -> "UnbindRequestResponse":
        return cls(
            id=str(request.id),
            space_id=str(request.space_id),
            requested_by=str(request.requested_by),
            requested_at=request.requested_at,
            expires_at=request.expires_at,
            status=request.status,
            resolved_at=request.resolved_at,
            resolved_by=str(request.resolved_by) if request.resolved_by else None,
        )
