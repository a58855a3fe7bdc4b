"""Client side of the pairing flow."""

from .api import ApiError, JoinedSpace, RedeemedMatch, SpacesApiClient
from .confirmation import ConfirmationFlow, FlowStep, HeldMatch
from .session import SessionStorage

__all__ = [
    "ApiError",
    "ConfirmationFlow",
    "FlowStep",
    "HeldMatch",
    "JoinedSpace",
    "RedeemedMatch",
    "SessionStorage",
    "SpacesApiClient",
]
