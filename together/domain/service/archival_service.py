"""Content archival domain service."""

import logfire

from together.domain.value import SpaceId, UserId

from .base import Service


class ContentArchiver:
    """Interface of the service that archives a deleted space's content."""

    async def on_space_deleted(
        self, space_id: SpaceId, former_partners: list[UserId]
    ) -> None:
        """Archive memories and milestones of a space that no longer exists.

        Args:
            space_id: The deleted space
            former_partners: Users who were partners at deletion time
        """
        raise NotImplementedError


class ArchivalService(Service):
    """Hands deleted spaces over to content archival.

    Called only after the deleting transaction has committed; failures are
    logged and dropped.
    """

    def __init__(self, content_archiver: ContentArchiver) -> None:
        self.content_archiver = content_archiver

    async def archive_space(
        self, space_id: SpaceId, former_partners: list[UserId]
    ) -> bool:
        with logfire.span("archival_service.archive_space", space_id=str(space_id)):
            try:
                await self.content_archiver.on_space_deleted(space_id, former_partners)
            except Exception as e:
                logfire.error(
                    "Space archival failed", space_id=str(space_id), error=str(e)
                )
                return False
            logfire.info("Space archived", space_id=str(space_id))
            return True
