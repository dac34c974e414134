"""
Observability module: structured logging.

Usage:
    from token_notifier.observability import configure_logging

    configure_logging("INFO")
"""

from .logging import HumanFormatter, JSONFormatter, configure_logging

__all__ = ["configure_logging", "HumanFormatter", "JSONFormatter"]
