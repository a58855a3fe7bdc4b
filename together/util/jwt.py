"""Identity token helpers.

Tokens are issued by the account service after sign-in and carry the user id
in a ``user_id`` claim. This service only verifies them; ``create_token``
exists for local development and tests.
"""

from datetime import datetime, timedelta

import jwt
from pydantic import BaseModel

from together.config import AuthSettings
from together.util.error import ExpiredTokenError, JWTError
from together.util.time import utc_now

__all__ = [
    "ExpiredTokenError",
    "JWTError",
    "TokenPayload",
    "create_token",
    "verify_token",
]

REQUIRED_CLAIMS = ["user_id", "exp"]


class TokenPayload(BaseModel):
    """Verified claims of an identity token."""

    user_id: str
    exp: datetime


def create_token(user_id: str, settings: AuthSettings) -> str:
    """Sign a token for ``user_id`` valid for ``jwt_expiry_days``."""
    claims = {
        "user_id": user_id,
        "exp": utc_now() + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check the signature and expiry of ``token`` and return its claims.

    Raises:
        ExpiredTokenError: If the token has expired
        JWTError: If the token is malformed, badly signed or missing claims
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as e:
        raise ExpiredTokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e
    return TokenPayload(user_id=str(claims["user_id"]), exp=claims["exp"])
