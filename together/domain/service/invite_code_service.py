"""Invite code registry domain service."""

import secrets

import logfire

from together.config import PairingSettings
from together.domain.error import (
    ConflictError,
    InviteCodeNotFoundError,
    ServiceUnavailableError,
)
from together.domain.model import InviteCodeRecord
from together.domain.repository import InviteCodeRepository
from together.domain.value import InviteCode, SpaceId
from together.util.time import utc_now

from .base import Service


class InviteCodeService(Service):
    """Domain service minting and resolving invite codes.

    Codes are drawn from a CSPRNG and checked against every code ever issued,
    so a code that once pointed at one space can never point at another.
    """

    def __init__(
        self,
        invite_code_repository: InviteCodeRepository,
        pairing_settings: PairingSettings,
    ) -> None:
        """Initialize invite code service.

        Args:
            invite_code_repository: Invite code registry
            pairing_settings: Code length, alphabet and mint attempts
        """
        self.invite_code_repository = invite_code_repository
        self.pairing_settings = pairing_settings

    def _generate(self) -> InviteCode:
        alphabet = self.pairing_settings.invite_code_alphabet
        length = self.pairing_settings.invite_code_length
        return InviteCode("".join(secrets.choice(alphabet) for _ in range(length)))

    async def mint(self, space_id: SpaceId) -> InviteCode:
        """Mint a fresh code for a space and register it as live.

        Args:
            space_id: Space the code will resolve to

        Returns:
            The new invite code

        Raises:
            ServiceUnavailableError: If no unused code was found within
                ``max_mint_attempts`` draws
        """
        with logfire.span("invite_code_service.mint", space_id=str(space_id)):
            for attempt in range(1, self.pairing_settings.max_mint_attempts + 1):
                code = self._generate()
                if await self.invite_code_repository.exists(code):
                    logfire.warn("Invite code collision", attempt=attempt)
                    continue
                try:
                    await self.invite_code_repository.save(
                        InviteCodeRecord(code=code, space_id=space_id)
                    )
                except ConflictError:
                    # Lost an insert race for the same code; draw again
                    logfire.warn("Invite code insert conflict", attempt=attempt)
                    continue
                logfire.info(
                    "Invite code minted", space_id=str(space_id), attempts=attempt
                )
                return code

            logfire.error(
                "Invite code space exhausted",
                space_id=str(space_id),
                attempts=self.pairing_settings.max_mint_attempts,
            )
            raise ServiceUnavailableError("Could not allocate an invite code")

    async def resolve(self, code: InviteCode) -> SpaceId:
        """Resolve a live code to its space.

        Raises:
            InviteCodeNotFoundError: If the code was never minted or is retired
        """
        with logfire.span("invite_code_service.resolve"):
            record = await self.invite_code_repository.find_live(code)
            if record is None:
                logfire.info("Invite code does not resolve")
                raise InviteCodeNotFoundError(code.root)
            return record.space_id

    async def was_issued_for(self, code: InviteCode, space_id: SpaceId) -> bool:
        """Whether ``code`` was ever issued for ``space_id``, live or retired."""
        record = await self.invite_code_repository.find_by_code(code)
        return record is not None and record.space_id == space_id

    async def invalidate(self, space_id: SpaceId) -> None:
        """Retire the live code of a space, if it has one."""
        with logfire.span("invite_code_service.invalidate", space_id=str(space_id)):
            retired = await self.invite_code_repository.retire_for_space(
                space_id, utc_now()
            )
            logfire.info(
                "Invite code invalidated", space_id=str(space_id), retired=retired
            )
