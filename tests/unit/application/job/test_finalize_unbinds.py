"""Unit tests for the unbind finalizer job."""

import asyncio
from datetime import timedelta

import pytest
import pytest_asyncio

from together.application.job import UnbindFinalizer
from together.application.usecase.unbind import (
    CancelUnbindRequest,
    CancelUnbindUseCase,
)
from together.domain.error import NoPendingRequestError
from together.domain.repository import SpaceRepository, UnbindRequestRepository
from together.domain.service import (
    ContentArchiver,
    NotificationClient,
    PairingService,
    SpaceService,
    UnbindService,
)
from together.domain.value import NotificationEvent, UnbindStatus
from together.util.time import utc_now
from tests.di import build_test_container
from tests.harness import ANNIVERSARY, new_user_id

COOLING_OFF = timedelta(days=7)


@pytest_asyncio.fixture
async def container():
    container = build_test_container()
    yield container
    await container.close()


async def request_unbind(container, requested_at):
    """Pair two new users and have one of them ask to unbind at ``requested_at``."""
    async with container() as scope:
        space_service = await scope.get(SpaceService)
        pairing_service = await scope.get(PairingService)
        unbind_service = await scope.get(UnbindService)
        owner, partner = new_user_id(), new_user_id()
        space = await space_service.create_space(owner, ANNIVERSARY)
        paired = await pairing_service.confirm(space.invite_code, partner)
        request = await unbind_service.request_unbind(
            paired.id, owner, now=requested_at
        )
    return paired, request


class TestUnbindFinalizer:
    """Tests for UnbindFinalizer.finalize_expired."""

    @pytest.mark.asyncio
    async def test_sweep_finalizes_only_expired_requests(self, container):
        now = utc_now()
        expired_space, expired = await request_unbind(container, now - COOLING_OFF)
        fresh_space, fresh = await request_unbind(container, now - timedelta(days=1))

        report = await UnbindFinalizer(container).finalize_expired(now=now)

        assert (report.finalized, report.skipped, report.failed) == (1, 0, 0)
        space_repo = await container.get(SpaceRepository)
        unbind_repo = await container.get(UnbindRequestRepository)
        assert await space_repo.find_by_id(expired_space.id) is None
        assert await space_repo.find_by_id(fresh_space.id) is not None
        assert (await unbind_repo.find_by_id(expired.id)).status == (
            UnbindStatus.COMPLETED
        )
        assert (await unbind_repo.find_by_id(fresh.id)).status == UnbindStatus.PENDING

    @pytest.mark.asyncio
    async def test_sweep_publishes_after_each_commit(self, container):
        now = utc_now()
        space, _ = await request_unbind(container, now - COOLING_OFF)

        await UnbindFinalizer(container).finalize_expired(now=now)

        archiver = await container.get(ContentArchiver)
        client = await container.get(NotificationClient)
        assert archiver.archived == [(space.id, list(space.partners))]
        assert client.events()[-1] == NotificationEvent.UNBIND_COMPLETED

    @pytest.mark.asyncio
    async def test_concurrent_sweeps_finalize_once(self, container):
        now = utc_now()
        for _ in range(3):
            await request_unbind(container, now - COOLING_OFF)

        reports = await asyncio.gather(
            UnbindFinalizer(container).finalize_expired(now=now),
            UnbindFinalizer(container).finalize_expired(now=now),
        )

        assert sum(r.finalized for r in reports) == 3
        assert sum(r.failed for r in reports) == 0
        archiver = await container.get(ContentArchiver)
        assert len(archiver.archived) == 3

    @pytest.mark.asyncio
    async def test_cancelled_request_is_not_finalized(self, container):
        now = utc_now()
        space, _ = await request_unbind(container, now - COOLING_OFF)
        async with container() as scope:
            unbind_service = await scope.get(UnbindService)
            await unbind_service.cancel_unbind(space.id, space.partners[1], now=now)

        report = await UnbindFinalizer(container).finalize_expired(now=now)

        assert report.total == 0
        space_repo = await container.get(SpaceRepository)
        assert await space_repo.find_by_id(space.id) is not None

    @pytest.mark.asyncio
    async def test_cancel_racing_sweep_has_one_winner(self, container, monkeypatch):
        """Cancel and finalize both see the request pending; exactly one wins."""
        now = utc_now()
        space, request = await request_unbind(container, now - COOLING_OFF)
        unbind_repo = await container.get(UnbindRequestRepository)
        transition = unbind_repo.transition

        async def slow_transition(*args, **kwargs):
            await asyncio.sleep(0)
            return await transition(*args, **kwargs)

        monkeypatch.setattr(unbind_repo, "transition", slow_transition)

        async def cancel():
            async with container() as scope:
                use_case = await scope.get(CancelUnbindUseCase)
                try:
                    await use_case.execute(
                        CancelUnbindRequest(
                            user_id=str(space.partners[1]), space_id=str(space.id)
                        )
                    )
                except NoPendingRequestError:
                    return False
                return True

        cancelled, report = await asyncio.gather(
            cancel(), UnbindFinalizer(container).finalize_expired(now=now)
        )

        status = (await unbind_repo.find_by_id(request.id)).status
        space_repo = await container.get(SpaceRepository)
        remaining = await space_repo.find_by_id(space.id)
        assert report.failed == 0
        if status == UnbindStatus.CANCELLED:
            assert cancelled is True
            assert (report.finalized, report.skipped) == (0, 1)
            assert remaining is not None
        else:
            assert status == UnbindStatus.COMPLETED
            assert cancelled is False
            assert (report.finalized, report.skipped) == (1, 0)
            assert remaining is None

    @pytest.mark.asyncio
    async def test_failure_is_isolated_per_request(self, container, monkeypatch):
        """One space failing to delete does not stop the others."""
        now = utc_now()
        broken_space, broken = await request_unbind(
            container, now - COOLING_OFF - timedelta(hours=1)
        )
        ok_space, _ = await request_unbind(container, now - COOLING_OFF)

        space_repo = await container.get(SpaceRepository)
        delete = space_repo.delete

        async def flaky_delete(space_id):
            if space_id == broken_space.id:
                raise RuntimeError("storage hiccup")
            return await delete(space_id)

        monkeypatch.setattr(space_repo, "delete", flaky_delete)

        report = await UnbindFinalizer(container).finalize_expired(now=now)

        assert (report.finalized, report.failed) == (1, 1)
        assert await space_repo.find_by_id(ok_space.id) is None
        # The failed request rolled back and is retried by the next sweep
        assert await space_repo.find_by_id(broken_space.id) is not None
        unbind_repo = await container.get(UnbindRequestRepository)
        assert (await unbind_repo.find_by_id(broken.id)).status == (
            UnbindStatus.PENDING
        )
        archiver = await container.get(ContentArchiver)
        assert [space_id for space_id, _ in archiver.archived] == [ok_space.id]

    @pytest.mark.asyncio
    async def test_batch_size_limits_sweep(self, container):
        now = utc_now()
        for _ in range(3):
            await request_unbind(container, now - COOLING_OFF)

        report = await UnbindFinalizer(container, batch_size=2).finalize_expired(
            now=now
        )

        assert report.finalized == 2
        rest = await UnbindFinalizer(container).finalize_expired(now=now)
        assert rest.finalized == 1
