"""Partner notification domain service."""

from typing import Any

import logfire

from together.domain.value import NotificationEvent, UserId

from .base import Service


class NotificationClient:
    """Outbound notification dispatcher interface."""

    async def send(
        self,
        user_ids: list[UserId],
        event: NotificationEvent,
        payload: dict[str, Any],
    ) -> None:
        """Deliver one event to each of ``user_ids``.

        Args:
            user_ids: Recipients
            event: What happened
            payload: JSON-serializable event details
        """
        raise NotImplementedError


class NotificationService(Service):
    """Fire-and-forget delivery of partner notifications.

    Delivery failures are logged and dropped; they never fail the operation
    that produced the event.
    """

    def __init__(self, notification_client: NotificationClient) -> None:
        self.notification_client = notification_client

    async def notify(
        self,
        user_ids: list[UserId],
        event: NotificationEvent,
        payload: dict[str, Any] | None = None,
    ) -> bool:
        """Send a notification, swallowing delivery errors.

        Returns:
            True if the dispatcher accepted the event, False otherwise
        """
        with logfire.span(
            "notification_service.notify",
            event=event.value,
            recipients=len(user_ids),
        ):
            try:
                await self.notification_client.send(user_ids, event, payload or {})
            except Exception as e:
                logfire.error(
                    "Notification delivery failed", event=event.value, error=str(e)
                )
                return False
            logfire.info("Notification sent", event=event.value)
            return True
