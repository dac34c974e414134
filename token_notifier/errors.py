"""Error taxonomy for the token notifier.

Every failure the command surface reports derives from ``TokenNotifierError``
so the CLI can map it to a nonzero exit code in one place.
"""


class TokenNotifierError(Exception):
    """Base class for all notifier errors."""


class ValidationError(TokenNotifierError, ValueError):
    """Raised when user input (token name, expiry date) is malformed."""


class ConfigurationError(TokenNotifierError):
    """Raised when a required setting is missing or malformed."""


class StorageError(TokenNotifierError):
    """Raised when the underlying SQLite database fails."""


class NotificationDeliveryError(TokenNotifierError):
    """Raised when an outbound notification cannot be delivered."""
