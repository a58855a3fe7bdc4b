"""Mock providers for testing."""

from .archival import MockArchivalProvider
from .notification import MockNotificationProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockArchivalProvider",
    "MockNotificationProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
