# Token Notifier - Core Library
"""
Track token expiry dates and remind an operator before they lapse.
"""

from .config import Settings
from .daemon import NotifierDaemon
from .errors import (
    ConfigurationError,
    NotificationDeliveryError,
    StorageError,
    TokenNotifierError,
    ValidationError,
)
from .models import TokenRecord
from .store import TokenStore

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "NotifierDaemon",
    "TokenRecord",
    "TokenStore",
    "TokenNotifierError",
    "ValidationError",
    "ConfigurationError",
    "StorageError",
    "NotificationDeliveryError",
]
