"""Infrastructure providers."""

# Import bases
from .archival import ArchivalProvider
from .notification import NotificationProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .archival import ProdArchivalProvider  # noqa: F401
from .notification import ProdNotificationProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "ArchivalProvider",
    "NotificationProvider",
    "PersistenceProvider",
    "ProdArchivalProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]
