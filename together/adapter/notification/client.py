"""Notification dispatcher clients.

The dispatcher (push, email) is a separate service; this side only posts
events to it.
"""

from dataclasses import dataclass
from typing import Any

import httpx
import logfire

from together.adapter.error import DeliveryError
from together.domain.service.notification_service import NotificationClient
from together.domain.value import NotificationEvent, UserId


class HttpNotificationClient(NotificationClient):
    """Posts events as JSON to the dispatcher endpoint."""

    def __init__(self, endpoint_url: str, timeout_seconds: float = 5.0) -> None:
        """Initialize notification client.

        Args:
            endpoint_url: Dispatcher URL receiving ``POST`` requests
            timeout_seconds: Per-request timeout
        """
        self.endpoint_url = endpoint_url
        self.timeout_seconds = timeout_seconds

    async def send(
        self,
        user_ids: list[UserId],
        event: NotificationEvent,
        payload: dict[str, Any],
    ) -> None:
        """Post one event for all recipients.

        Raises:
            DeliveryError: If the dispatcher is unreachable or answers non-2xx
        """
        body = {
            "event": event.value,
            "user_ids": [str(user_id) for user_id in user_ids],
            "payload": payload,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(self.endpoint_url, json=body)
        except httpx.HTTPError as e:
            raise DeliveryError(f"Notification dispatcher unreachable: {e}")

        if response.is_error:
            logfire.error(
                "Notification dispatcher rejected event",
                status_code=response.status_code,
                event=event.value,
            )
            raise DeliveryError(
                f"Notification dispatcher returned {response.status_code}"
            )


class LoggingNotificationClient(NotificationClient):
    """Used when no dispatcher is configured: events are only logged."""

    async def send(
        self,
        user_ids: list[UserId],
        event: NotificationEvent,
        payload: dict[str, Any],
    ) -> None:
        logfire.info(
            "Notification (no dispatcher configured)",
            event=event.value,
            user_ids=[str(user_id) for user_id in user_ids],
            payload=payload,
        )


@dataclass
class SentNotification:
    user_ids: list[UserId]
    event: NotificationEvent
    payload: dict[str, Any]


class MockNotificationClient(NotificationClient):
    """Mock client for testing; records every event it is asked to send.

    Set ``fail`` to make every send raise DeliveryError.
    """

    def __init__(self) -> None:
        self.sent: list[SentNotification] = []
        self.fail = False

    async def send(
        self,
        user_ids: list[UserId],
        event: NotificationEvent,
        payload: dict[str, Any],
    ) -> None:
        if self.fail:
            raise DeliveryError("Mock notification failure")
        self.sent.append(SentNotification(list(user_ids), event, dict(payload)))

    def events(self) -> list[NotificationEvent]:
        return [n.event for n in self.sent]
