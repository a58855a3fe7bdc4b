"""Pairing domain service.

Pairing is two-phase: redeeming a code only reveals who is on the other side;
confirming re-validates the code and performs the join.
"""

import logfire

from together.domain.error import (
    AlreadyPairedError,
    InvalidCodeError,
    InviteCodeNotFoundError,
    SelfJoinError,
    SpaceNotFoundError,
)
from together.domain.event import EventOutbox
from together.domain.model import PendingMatch, Space
from together.domain.value import InviteCode, NotificationEvent, UserId
from together.util.time import utc_now

from .base import Service
from .invite_code_service import InviteCodeService
from .space_service import SpaceService
from .user_service import UserService

NO_LONGER_AVAILABLE = "This connection is no longer available"


class PairingService(Service):
    """Domain service for redeeming and confirming invite codes."""

    def __init__(
        self,
        invite_code_service: InviteCodeService,
        space_service: SpaceService,
        user_service: UserService,
        outbox: EventOutbox,
    ) -> None:
        self.invite_code_service = invite_code_service
        self.space_service = space_service
        self.user_service = user_service
        self.outbox = outbox

    async def redeem(self, code: InviteCode, acting_user_id: UserId) -> PendingMatch:
        """Look up the space behind a code without changing anything.

        Args:
            code: Invite code typed by the user
            acting_user_id: User redeeming it

        Returns:
            A pending match to show on the confirmation screen

        Raises:
            InvalidCodeError: If the code does not resolve, or its space is
                already paired
            SelfJoinError: If the user redeems their own space's code
        """
        with logfire.span("pairing_service.redeem", user_id=str(acting_user_id)):
            try:
                space_id = await self.invite_code_service.resolve(code)
                space = await self.space_service.get_space(space_id)
            except (InviteCodeNotFoundError, SpaceNotFoundError):
                logfire.info("Redeemed code is invalid", user_id=str(acting_user_id))
                raise InvalidCodeError()

            if space.has_partner(acting_user_id):
                raise SelfJoinError()
            if space.is_paired:
                logfire.info("Redeemed space is already paired", space_id=str(space.id))
                raise InvalidCodeError(NO_LONGER_AVAILABLE)

            partner = await self.user_service.get_public_profile(space.creator_id)
            match = PendingMatch(
                invite_code=code,
                space_id=space.id,
                anniversary_date=space.anniversary_date,
                partner_ids=space.partners,
                partner=partner,
                acting_user_id=acting_user_id,
                redeemed_at=utc_now(),
            )
            logfire.info(
                "Invite code redeemed",
                space_id=str(space.id),
                user_id=str(acting_user_id),
            )
            return match

    async def confirm(self, code: InviteCode, acting_user_id: UserId) -> Space:
        """Join the space behind a code.

        The code is resolved again here; nothing from the earlier redeem is
        trusted. Replaying a successful confirm returns the same space.

        Args:
            code: Invite code held by the client
            acting_user_id: User joining

        Returns:
            The paired space

        Raises:
            InvalidCodeError: If the code no longer resolves to a joinable space
            SelfJoinError: If the user is the space's only partner
            AlreadyInSpaceError: If the user belongs to another space
            SpaceFullError: If someone else joined first
        """
        with logfire.span("pairing_service.confirm", user_id=str(acting_user_id)):
            try:
                space_id = await self.invite_code_service.resolve(code)
            except InviteCodeNotFoundError:
                replayed = await self._replayed_join(code, acting_user_id)
                if replayed is not None:
                    return replayed
                raise InvalidCodeError(NO_LONGER_AVAILABLE)

            try:
                space = await self.space_service.add_partner(space_id, acting_user_id)
            except AlreadyPairedError as e:
                logfire.info("Confirm replayed", space_id=str(e.space.id))
                return e.space
            except SpaceNotFoundError:
                raise InvalidCodeError(NO_LONGER_AVAILABLE)

            self.outbox.notify(
                space.partners, NotificationEvent.PAIRED, space_id=str(space.id)
            )
            logfire.info(
                "Space paired", space_id=str(space.id), user_id=str(acting_user_id)
            )
            return space

    async def _replayed_join(
        self, code: InviteCode, acting_user_id: UserId
    ) -> Space | None:
        own = await self.space_service.get_space_for_user(acting_user_id)
        if own is None or not own.is_paired:
            return None
        if not await self.invite_code_service.was_issued_for(code, own.id):
            return None
        logfire.info("Confirm replayed after code retired", space_id=str(own.id))
        return own
