"""Unbind use cases."""

from together.application.usecase.unbind.cancel_unbind import (
    CancelUnbindRequest,
    CancelUnbindUseCase,
)
from together.application.usecase.unbind.common import UnbindRequestResponse
from together.application.usecase.unbind.get_unbind_status import (
    GetUnbindStatusRequest,
    GetUnbindStatusUseCase,
)
from together.application.usecase.unbind.request_unbind import (
    RequestUnbindRequest,
    RequestUnbindUseCase,
)

__all__ = [
    "CancelUnbindRequest",
    "CancelUnbindUseCase",
    "GetUnbindStatusRequest",
    "GetUnbindStatusUseCase",
    "RequestUnbindRequest",
    "RequestUnbindUseCase",
    "UnbindRequestResponse",
]
