"""Content archival clients.

Memories and milestones are owned by another service; when a space is
deleted it is told so it can archive them.
"""

import httpx
import logfire

from together.adapter.error import DeliveryError
from together.domain.service.archival_service import ContentArchiver
from together.domain.value import SpaceId, UserId


class HttpContentArchiver(ContentArchiver):
    """Posts space deletions to the archival endpoint."""

    def __init__(self, endpoint_url: str, timeout_seconds: float = 10.0) -> None:
        self.endpoint_url = endpoint_url
        self.timeout_seconds = timeout_seconds

    async def on_space_deleted(
        self, space_id: SpaceId, former_partners: list[UserId]
    ) -> None:
        """Notify the archival service.

        Raises:
            DeliveryError: If the archival service is unreachable or answers non-2xx
        """
        body = {
            "space_id": str(space_id),
            "former_partners": [str(user_id) for user_id in former_partners],
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(self.endpoint_url, json=body)
        except httpx.HTTPError as e:
            raise DeliveryError(f"Archival service unreachable: {e}")

        if response.is_error:
            raise DeliveryError(f"Archival service returned {response.status_code}")


class LoggingContentArchiver(ContentArchiver):
    """Used when no archival endpoint is configured."""

    async def on_space_deleted(
        self, space_id: SpaceId, former_partners: list[UserId]
    ) -> None:
        logfire.info(
            "Space deletion (no archival configured)",
            space_id=str(space_id),
            former_partners=[str(user_id) for user_id in former_partners],
        )


class MockContentArchiver(ContentArchiver):
    """Mock archiver for testing; records archived spaces."""

    def __init__(self) -> None:
        self.archived: list[tuple[SpaceId, list[UserId]]] = []
        self.fail = False

    async def on_space_deleted(
        self, space_id: SpaceId, former_partners: list[UserId]
    ) -> None:
        if self.fail:
            raise DeliveryError("Mock archival failure")
        self.archived.append((space_id, list(former_partners)))
