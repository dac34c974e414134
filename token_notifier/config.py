"""
Runtime settings for the notification daemon.

Read from the environment (optionally pre-populated from a local ``.env``
file by the CLI). Settings are built once at startup and passed explicitly
to the components that need them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from token_notifier.errors import ConfigurationError

ENV_BOT_TOKEN = "TELEGRAM_BOT_TOKEN"
ENV_CHAT_ID = "TELEGRAM_CHAT_ID"
ENV_THRESHOLD_DAYS = "NOTIFICATION_THRESHOLD_DAYS"
ENV_CHECK_INTERVAL = "CHECK_INTERVAL_SECONDS"
ENV_LOG_LEVEL = "TOKEN_NOTIFIER_LOG_LEVEL"

DEFAULT_THRESHOLD_DAYS = 1
DEFAULT_CHECK_INTERVAL_SECONDS = 3600
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Messaging credentials and loop timing for the daemon."""

    telegram_bot_token: str
    telegram_chat_id: str
    notification_threshold_days: int = DEFAULT_THRESHOLD_DAYS
    check_interval_seconds: int = DEFAULT_CHECK_INTERVAL_SECONDS

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        source = os.environ if env is None else env

        bot_token = _required(source, ENV_BOT_TOKEN)
        chat_id = _required(source, ENV_CHAT_ID)
        threshold = _int_setting(source, ENV_THRESHOLD_DAYS, DEFAULT_THRESHOLD_DAYS, minimum=0)
        interval = _int_setting(
            source, ENV_CHECK_INTERVAL, DEFAULT_CHECK_INTERVAL_SECONDS, minimum=1
        )
        return cls(
            telegram_bot_token=bot_token,
            telegram_chat_id=chat_id,
            notification_threshold_days=threshold,
            check_interval_seconds=interval,
        )


def log_level_from_env(env: Mapping[str, str] | None = None) -> str:
    source = os.environ if env is None else env
    return source.get(ENV_LOG_LEVEL, "").strip().upper() or DEFAULT_LOG_LEVEL


def _required(source: Mapping[str, str], key: str) -> str:
    value = source.get(key, "").strip()
    if not value:
        raise ConfigurationError(f"{key} environment variable not set")
    return value


def _int_setting(source: Mapping[str, str], key: str, default: int, *, minimum: int) -> int:
    raw = source.get(key, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc
    if value < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}, got {value}")
    return value
