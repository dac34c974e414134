"""
Notification Channels

Each channel sends directly via the provider's HTTP API.
"""

from .telegram import TelegramChannel

__all__ = ["TelegramChannel"]
