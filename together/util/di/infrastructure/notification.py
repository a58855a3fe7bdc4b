"""Notification infrastructure providers."""

from dishka import Scope, provide

from together.adapter.notification import (
    HttpNotificationClient,
    LoggingNotificationClient,
)
from together.config import Settings
from together.domain.service import NotificationClient
from together.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notification_client(self, settings: Settings) -> NotificationClient:
        """Provide the dispatcher client.

        Without a configured endpoint, notifications are logged only.
        """
        if not settings.notifications.endpoint_url:
            return LoggingNotificationClient()
        return HttpNotificationClient(
            endpoint_url=settings.notifications.endpoint_url,
            timeout_seconds=settings.notifications.timeout_seconds,
        )
