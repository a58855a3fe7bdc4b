"""Domain events and the per-request outbox that publishes them.

Events are recorded while a unit of work runs and published only after its
transaction commits, so partners are never told about a change that was
rolled back.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

import logfire

from together.domain.value import NotificationEvent, SpaceId, UserId

if TYPE_CHECKING:
    from together.domain.service.archival_service import ArchivalService
    from together.domain.service.notification_service import NotificationService


@dataclass(frozen=True)
class PartnerNotification:
    """Tell the given users that a pairing or unbind transition happened."""

    user_ids: tuple[UserId, ...]
    event: NotificationEvent
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SpaceDeleted:
    """A space was hard-deleted; its content should be archived."""

    space_id: SpaceId
    former_partners: tuple[UserId, ...]


DomainEvent = Union[PartnerNotification, SpaceDeleted]


class EventOutbox:
    """Collects domain events for one unit of work."""

    def __init__(
        self,
        notification_service: "NotificationService",
        archival_service: "ArchivalService",
    ) -> None:
        self.notification_service = notification_service
        self.archival_service = archival_service
        self._events: list[DomainEvent] = []

    @property
    def pending(self) -> tuple[DomainEvent, ...]:
        return tuple(self._events)

    def record(self, event: DomainEvent) -> None:
        self._events.append(event)

    def notify(
        self,
        user_ids: tuple[UserId, ...] | list[UserId],
        event: NotificationEvent,
        **payload: Any,
    ) -> None:
        self.record(PartnerNotification(tuple(user_ids), event, payload))

    def space_deleted(
        self, space_id: SpaceId, former_partners: tuple[UserId, ...]
    ) -> None:
        self.record(SpaceDeleted(space_id, tuple(former_partners)))

    def discard(self) -> int:
        """Drop recorded events (the unit of work rolled back)."""
        dropped = len(self._events)
        self._events = []
        if dropped:
            logfire.info("Outbox discarded", events=dropped)
        return dropped

    async def publish(self) -> int:
        """Dispatch every recorded event, in recording order.

        Returns:
            Number of events dispatched
        """
        events, self._events = self._events, []
        if not events:
            return 0

        with logfire.span("event_outbox.publish", events=len(events)):
            for event in events:
                if isinstance(event, SpaceDeleted):
                    await self.archival_service.archive_space(
                        event.space_id, list(event.former_partners)
                    )
                else:
                    await self.notification_service.notify(
                        list(event.user_ids), event.event, event.payload
                    )
            return len(events)
