"""Mock notification providers for testing."""

from dishka import Scope, provide

from together.adapter.notification import MockNotificationClient
from together.domain.service import NotificationClient
from together.util.di.infrastructure.notification import NotificationProvider


class MockNotificationProvider(NotificationProvider):
    """Mock notification provider recording every sent event."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_notification_client(self) -> NotificationClient:
        """Provide mock dispatcher client."""
        return MockNotificationClient()
