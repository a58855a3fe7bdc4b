"""Two-step pairing flow as the client walks the user through it.

code entry -> confirm partner -> celebration -> shared space

The pending match between redeem and confirm lives only in session storage.
It grants nothing: the server resolves the code again on confirm, so a stale
match can only ever produce a failed join, never a wrong one.
"""

import re
from datetime import date
from enum import Enum

import logfire
from pydantic import BaseModel, ValidationError

from .api import ApiError, JoinedSpace, PartnerInfo, SpacesApiClient
from .session import SessionStorage

PENDING_MATCH_KEY = "pending_match"

NO_LONGER_AVAILABLE = "This connection is no longer available"
ALREADY_IN_SPACE = "You are already connected with someone"
INVALID_CODE = "Invalid code or space not found"
OWN_CODE = "This is your own code. Share it with your partner instead"
TRY_AGAIN = "We couldn't connect you just now. Please try again"


class FlowStep(str, Enum):
    CODE_ENTRY = "code_entry"
    CONFIRM_PARTNER = "confirm_partner"
    CELEBRATION = "celebration"
    SHARED_SPACE = "shared_space"


class HeldMatch(BaseModel):
    """Snapshot shown on the confirmation screen.

    ``invite_code`` is what gets sent back on confirm; everything else is
    for display only.
    """

    invite_code: str
    space_id: str
    anniversary_date: date
    partner: PartnerInfo
    held_by: str


class ConfirmationFlow:
    """Drives one user through redeeming and confirming an invite code.

    Every transition returns the step the user should see next; ``error``
    holds the message to show on that step, if any.
    """

    def __init__(
        self,
        api: SpacesApiClient,
        storage: SessionStorage,
        user_id: str,
        code_length: int = 6,
    ) -> None:
        """Initialize the flow.

        Args:
            api: API client authenticated as ``user_id``
            storage: The session's ephemeral storage
            user_id: The signed-in user
            code_length: Number of characters in an invite code
        """
        self.api = api
        self.storage = storage
        self.user_id = user_id
        self.code_length = code_length
        self.step = FlowStep.CODE_ENTRY
        self.error: str | None = None
        self.space: JoinedSpace | None = None

    @property
    def held_match(self) -> HeldMatch | None:
        """The pending match held for this user, if any.

        A match that is unreadable or was held for another user is dropped.
        """
        raw = self.storage.get(PENDING_MATCH_KEY)
        if raw is None:
            return None
        try:
            match = HeldMatch.model_validate_json(raw)
        except ValidationError:
            self.storage.remove(PENDING_MATCH_KEY)
            return None
        if match.held_by != self.user_id:
            self.storage.remove(PENDING_MATCH_KEY)
            return None
        return match

    def normalize_code(self, raw: str) -> str:
        return re.sub(r"[^A-Za-z0-9]", "", raw).upper()[: self.code_length]

    def resume(self) -> FlowStep:
        """Pick up where the session left off (e.g. after a page reload)."""
        self.error = None
        self.step = (
            FlowStep.CONFIRM_PARTNER
            if self.held_match is not None
            else FlowStep.CODE_ENTRY
        )
        return self.step

    async def submit_code(self, raw: str) -> FlowStep:
        """Redeem a code and hold the match for confirmation.

        Incomplete codes are rejected without calling the API.
        """
        code = self.normalize_code(raw)
        if len(code) != self.code_length:
            return self._fail(
                FlowStep.CODE_ENTRY,
                f"Please enter the complete {self.code_length}-character code",
            )

        try:
            redeemed = await self.api.redeem_code(code)
        except ApiError as e:
            logfire.info("Redeem failed", code=e.code, status_code=e.status_code)
            if e.code == "SELF_JOIN":
                return self._fail(FlowStep.CODE_ENTRY, OWN_CODE)
            if e.code == "INVALID_CODE":
                return self._fail(FlowStep.CODE_ENTRY, INVALID_CODE)
            return self._fail(FlowStep.CODE_ENTRY, TRY_AGAIN)

        match = HeldMatch(
            invite_code=redeemed.invite_code,
            space_id=redeemed.space_id,
            anniversary_date=redeemed.anniversary_date,
            partner=redeemed.partner,
            held_by=self.user_id,
        )
        self.storage.set(PENDING_MATCH_KEY, match.model_dump_json())
        self.error = None
        self.step = FlowStep.CONFIRM_PARTNER
        return self.step

    async def confirm(self) -> FlowStep:
        """Ask the server to perform the join for the held match."""
        match = self.held_match
        if match is None:
            self.error = None
            self.step = FlowStep.CODE_ENTRY
            return self.step

        try:
            self.space = await self.api.confirm_join(match.invite_code)
        except ApiError as e:
            logfire.info("Confirm failed", code=e.code, status_code=e.status_code)
            if e.code in ("INVALID_CODE", "SPACE_FULL", "SELF_JOIN"):
                self.storage.remove(PENDING_MATCH_KEY)
                return self._fail(FlowStep.CODE_ENTRY, NO_LONGER_AVAILABLE)
            if e.code == "ALREADY_IN_SPACE":
                self.storage.remove(PENDING_MATCH_KEY)
                return self._fail(FlowStep.CODE_ENTRY, ALREADY_IN_SPACE)
            # Transient: keep the match so the user can retry
            return self._fail(FlowStep.CONFIRM_PARTNER, TRY_AGAIN)

        self.storage.remove(PENDING_MATCH_KEY)
        self.error = None
        self.step = FlowStep.CELEBRATION
        return self.step

    def finish_celebration(self) -> FlowStep:
        """Leave the one-time celebration for the shared space."""
        if self.step == FlowStep.CELEBRATION:
            self.step = FlowStep.SHARED_SPACE
        return self.step

    def abandon(self) -> FlowStep:
        """User walked away from the confirmation screen."""
        self.storage.remove(PENDING_MATCH_KEY)
        self.error = None
        self.step = FlowStep.CODE_ENTRY
        return self.step

    def end_session(self) -> None:
        """Session over (sign out, tab closed); the attempt simply lapses."""
        self.storage.remove(PENDING_MATCH_KEY)
        self.step = FlowStep.CODE_ENTRY
        self.error = None
        self.space = None

    def _fail(self, step: FlowStep, message: str) -> FlowStep:
        self.step = step
        self.error = message
        return step
