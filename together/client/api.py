"""HTTP client for the pairing endpoints."""

from datetime import date, datetime

import httpx
import logfire
from pydantic import BaseModel

NETWORK_ERROR = "NETWORK_ERROR"


class ApiError(Exception):
    """Error answered by the API (or raised when it could not be reached).

    Attributes:
        status_code: HTTP status, 0 when no response was received
        code: Stable error code from the response body
        message: Human readable detail
    """

    def __init__(self, status_code: int, code: str, message: str):
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(f"{status_code} {code}: {message}")


class PartnerInfo(BaseModel):
    user_id: str
    nickname: str | None = None
    avatar_url: str | None = None


class RedeemedMatch(BaseModel):
    """Body of a successful redeem."""

    invite_code: str
    space_id: str
    anniversary_date: date
    partner_ids: list[str]
    partner: PartnerInfo
    redeemed_at: datetime


class JoinedSpace(BaseModel):
    """Body of a successful join."""

    id: str
    anniversary_date: date
    partners: list[str]
    invite_code: str | None = None
    is_paired: bool
    created_at: datetime


class SpacesApiClient:
    """Talks to ``/spaces/redeem`` and ``/spaces/join`` as one user."""

    def __init__(
        self,
        base_url: str,
        auth_token: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: API base URL, e.g. ``https://api.together.app``
            auth_token: Identity token sent as a bearer token
            timeout_seconds: Per-request timeout
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def redeem_code(self, invite_code: str) -> RedeemedMatch:
        """Preview the space behind a code.

        Raises:
            ApiError: If the API rejects the code or cannot be reached
        """
        body = await self._post("/spaces/redeem", {"invite_code": invite_code})
        return RedeemedMatch.model_validate(body)

    async def confirm_join(self, invite_code: str) -> JoinedSpace:
        """Join the space behind a code.

        Raises:
            ApiError: If the join is rejected or the API cannot be reached
        """
        body = await self._post("/spaces/join", {"invite_code": invite_code})
        return JoinedSpace.model_validate(body)

    async def _post(self, path: str, json: dict) -> dict:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_seconds,
                transport=self.transport,
                headers={"Authorization": f"Bearer {self.auth_token}"},
            ) as client:
                response = await client.post(path, json=json)
        except httpx.HTTPError as e:
            logfire.warn("API unreachable", path=path, error=str(e))
            raise ApiError(0, NETWORK_ERROR, str(e))

        if response.is_error:
            raise _error_from_response(response)
        return response.json()


def _error_from_response(response: httpx.Response) -> ApiError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    detail = body.get("detail")
    return ApiError(
        response.status_code,
        body.get("code") or "HTTP_ERROR",
        detail if isinstance(detail, str) else response.reason_phrase,
    )
