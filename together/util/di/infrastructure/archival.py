"""Content archival infrastructure providers."""

from dishka import Scope, provide

from together.adapter.archival import HttpContentArchiver, LoggingContentArchiver
from together.config import Settings
from together.domain.service import ContentArchiver
from together.util.di.base import ProviderBase


class ArchivalProvider(ProviderBase):
    """Archival component base."""

    __mock_component__ = "archival"


class ProdArchivalProvider(ArchivalProvider):
    """Production archival provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_content_archiver(self, settings: Settings) -> ContentArchiver:
        """Provide the content archiver.

        Without a configured endpoint, deletions are logged only.
        """
        if not settings.archival.endpoint_url:
            return LoggingContentArchiver()
        return HttpContentArchiver(
            endpoint_url=settings.archival.endpoint_url,
            timeout_seconds=settings.archival.timeout_seconds,
        )
