"""Resolving the acting user from the identity token."""

from uuid import UUID

from together.domain.service import JWTService
from together.interface.error import UnauthenticatedError
from together.util.jwt import JWTError


def authenticate(
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None = None,
) -> str:
    """Return the authenticated user's id.

    The token is read from the ``auth_token`` cookie, falling back to an
    ``Authorization: Bearer`` header.

    Raises:
        UnauthenticatedError: If no token is present or it does not verify
    """
    token = auth_token
    if not token and authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            token = credentials.strip()

    if not token:
        raise UnauthenticatedError()

    try:
        payload = jwt_service.verify_token(token)
    except JWTError as e:
        raise UnauthenticatedError(str(e))

    try:
        UUID(payload.user_id)
    except ValueError:
        raise UnauthenticatedError("Invalid token subject")
    return payload.user_id
