"""Mapping of domain errors to HTTP responses.

Every error body has the shape ``{"code": ..., "detail": ...}``; clients
branch on ``code``, ``detail`` is for humans.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from together.domain.error import (
    AlreadyInSpaceError,
    AlreadyPairedError,
    AlreadyPendingError,
    ConflictError,
    DomainError,
    InvalidCodeError,
    InviteCodeNotFoundError,
    NoPendingRequestError,
    NotFoundError,
    NotPairedError,
    NotSpaceMemberError,
    SelfJoinError,
    ServiceUnavailableError,
    SpaceFullError,
    SpaceNotFoundError,
    ValidationError,
)
from together.interface.error import UnauthenticatedError

# Starlette resolves handlers along the exception's MRO, so subclasses listed
# here take precedence over their bases.
ERROR_RESPONSES: dict[type[Exception], tuple[int, str]] = {
    AlreadyInSpaceError: (status.HTTP_409_CONFLICT, "ALREADY_IN_SPACE"),
    SpaceFullError: (status.HTTP_409_CONFLICT, "SPACE_FULL"),
    AlreadyPairedError: (status.HTTP_409_CONFLICT, "ALREADY_PAIRED"),
    NotPairedError: (status.HTTP_409_CONFLICT, "NOT_PAIRED"),
    AlreadyPendingError: (status.HTTP_409_CONFLICT, "ALREADY_PENDING"),
    ConflictError: (status.HTTP_409_CONFLICT, "CONFLICT"),
    InvalidCodeError: (status.HTTP_404_NOT_FOUND, "INVALID_CODE"),
    InviteCodeNotFoundError: (status.HTTP_404_NOT_FOUND, "INVALID_CODE"),
    SpaceNotFoundError: (status.HTTP_404_NOT_FOUND, "SPACE_NOT_FOUND"),
    NoPendingRequestError: (status.HTTP_404_NOT_FOUND, "NO_PENDING_REQUEST"),
    NotFoundError: (status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    SelfJoinError: (status.HTTP_400_BAD_REQUEST, "SELF_JOIN"),
    NotSpaceMemberError: (status.HTTP_403_FORBIDDEN, "NOT_SPACE_MEMBER"),
    ValidationError: (status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR"),
    ServiceUnavailableError: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "SERVICE_UNAVAILABLE",
    ),
    DomainError: (status.HTTP_400_BAD_REQUEST, "DOMAIN_ERROR"),
    UnauthenticatedError: (status.HTTP_401_UNAUTHORIZED, "UNAUTHENTICATED"),
}


def error_response(exc: Exception) -> JSONResponse:
    """Build the JSON error response for a known exception type."""
    for cls in type(exc).__mro__:
        if cls in ERROR_RESPONSES:
            status_code, code = ERROR_RESPONSES[cls]
            break
    else:
        status_code, code = status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR"

    return JSONResponse(
        status_code=status_code,
        content={"code": code, "detail": str(exc)},
    )


async def handle_error(request: Request, exc: Exception) -> JSONResponse:
    response = error_response(exc)
    if response.status_code >= 500:
        logfire.error("Request failed", path=request.url.path, error=str(exc))
    return response


def register_error_handlers(app: FastAPI) -> None:
    """Register the domain and interface error handlers on the app."""
    for exc_class in ERROR_RESPONSES:
        app.add_exception_handler(exc_class, handle_error)
