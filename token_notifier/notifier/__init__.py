"""
Token Notifier - Notifier Module

Direct notification delivery to the operator over a messaging channel.
"""

from .channels import TelegramChannel

__all__ = ["TelegramChannel"]
