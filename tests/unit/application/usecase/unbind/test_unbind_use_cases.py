"""Unit tests for unbind use cases."""

import pytest

from together.application.usecase.unbind import (
    CancelUnbindRequest,
    CancelUnbindUseCase,
    GetUnbindStatusRequest,
    GetUnbindStatusUseCase,
    RequestUnbindRequest,
    RequestUnbindUseCase,
)
from together.domain.error import NotSpaceMemberError
from together.domain.service import PairingService, SpaceService
from together.domain.value import UnbindStatus
from tests.harness import ANNIVERSARY, create_env_fixture, new_user_id

unit_env = create_env_fixture()


async def make_paired_space(env):
    space_service = await env.get(SpaceService)
    pairing_service = await env.get(PairingService)
    owner, partner = new_user_id(), new_user_id()
    space = await space_service.create_space(owner, ANNIVERSARY)
    await pairing_service.confirm(space.invite_code, partner)
    return space, owner, partner


class TestRequestUnbindUseCase:
    @pytest.mark.asyncio
    async def test_repeated_request_returns_the_pending_one(self, unit_env):
        use_case = await unit_env.get(RequestUnbindUseCase)
        space, owner, partner = await make_paired_space(unit_env)

        first = await use_case.execute(
            RequestUnbindRequest(user_id=str(owner), space_id=str(space.id))
        )
        second = await use_case.execute(
            RequestUnbindRequest(user_id=str(partner), space_id=str(space.id))
        )

        assert first.status == UnbindStatus.PENDING
        assert second.id == first.id
        assert second.requested_by == str(owner)


class TestCancelUnbindUseCase:
    @pytest.mark.asyncio
    async def test_cancel_returns_resolved_request(self, unit_env):
        request_use_case = await unit_env.get(RequestUnbindUseCase)
        cancel_use_case = await unit_env.get(CancelUnbindUseCase)
        space, owner, partner = await make_paired_space(unit_env)
        await request_use_case.execute(
            RequestUnbindRequest(user_id=str(owner), space_id=str(space.id))
        )

        cancelled = await cancel_use_case.execute(
            CancelUnbindRequest(user_id=str(partner), space_id=str(space.id))
        )

        assert cancelled.status == UnbindStatus.CANCELLED
        assert cancelled.resolved_by == str(partner)


class TestGetUnbindStatusUseCase:
    @pytest.mark.asyncio
    async def test_no_request_yet(self, unit_env):
        use_case = await unit_env.get(GetUnbindStatusUseCase)
        space, owner, _ = await make_paired_space(unit_env)

        status = await use_case.execute(
            GetUnbindStatusRequest(user_id=str(owner), space_id=str(space.id))
        )

        assert status is None

    @pytest.mark.asyncio
    async def test_outsider_cannot_see_status(self, unit_env):
        use_case = await unit_env.get(GetUnbindStatusUseCase)
        space, _, _ = await make_paired_space(unit_env)

        with pytest.raises(NotSpaceMemberError):
            await use_case.execute(
                GetUnbindStatusRequest(
                    user_id=str(new_user_id()), space_id=str(space.id)
                )
            )
