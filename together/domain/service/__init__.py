"""Domain services."""

from .archival_service import ArchivalService, ContentArchiver
from .base import Service
from .invite_code_service import InviteCodeService
from .jwt_service import JWTService
from .notification_service import NotificationClient, NotificationService
from .pairing_service import PairingService
from .space_service import SpaceService
from .unbind_service import UnbindService
from .user_service import UserService

__all__ = [
    "ArchivalService",
    "ContentArchiver",
    "InviteCodeService",
    "JWTService",
    "NotificationClient",
    "NotificationService",
    "PairingService",
    "Service",
    "SpaceService",
    "UnbindService",
    "UserService",
]
