"""Unit tests for the event outbox and the services it publishes through."""

from uuid import uuid4

import pytest

from together.adapter.archival import MockContentArchiver
from together.adapter.notification import MockNotificationClient
from together.domain.event import EventOutbox
from together.domain.service import ArchivalService, NotificationService
from together.domain.value import NotificationEvent, SpaceId
from tests.harness import new_user_id


@pytest.fixture
def notification_client():
    return MockNotificationClient()


@pytest.fixture
def content_archiver():
    return MockContentArchiver()


@pytest.fixture
def outbox(notification_client, content_archiver):
    return EventOutbox(
        notification_service=NotificationService(notification_client),
        archival_service=ArchivalService(content_archiver),
    )


class TestEventOutbox:
    """Tests for recording and publishing events."""

    @pytest.mark.asyncio
    async def test_publish_dispatches_in_order(
        self, outbox, notification_client, content_archiver
    ):
        a, b = new_user_id(), new_user_id()
        space_id = SpaceId(uuid4())
        outbox.space_deleted(space_id, (a, b))
        outbox.notify((a, b), NotificationEvent.UNBIND_COMPLETED, space_id="x")

        published = await outbox.publish()

        assert published == 2
        assert content_archiver.archived == [(space_id, [a, b])]
        assert notification_client.sent[0].user_ids == [a, b]
        assert notification_client.sent[0].payload == {"space_id": "x"}
        assert outbox.pending == ()

    @pytest.mark.asyncio
    async def test_discarded_events_are_never_sent(self, outbox, notification_client):
        outbox.notify([new_user_id()], NotificationEvent.PAIRED)

        assert outbox.discard() == 1
        assert await outbox.publish() == 0
        assert notification_client.sent == []

    @pytest.mark.asyncio
    async def test_delivery_failures_do_not_propagate(
        self, outbox, notification_client, content_archiver
    ):
        """A dead dispatcher never fails the transition that was committed."""
        notification_client.fail = True
        content_archiver.fail = True
        outbox.notify([new_user_id()], NotificationEvent.PAIRED)
        outbox.space_deleted(SpaceId(uuid4()), (new_user_id(),))

        assert await outbox.publish() == 2


class TestNotificationService:
    @pytest.mark.asyncio
    async def test_notify_reports_delivery(self, notification_client):
        service = NotificationService(notification_client)
        user_id = new_user_id()

        assert await service.notify([user_id], NotificationEvent.PAIRED) is True
        notification_client.fail = True
        assert await service.notify([user_id], NotificationEvent.PAIRED) is False
        assert notification_client.events() == [NotificationEvent.PAIRED]


class TestArchivalService:
    @pytest.mark.asyncio
    async def test_archive_reports_failure(self, content_archiver):
        service = ArchivalService(content_archiver)
        content_archiver.fail = True

        assert await service.archive_space(SpaceId(uuid4()), []) is False
