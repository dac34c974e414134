"""
Test configuration: ensures repo root is in sys.path + isolation guards.

Every test gets its own app home so nothing touches the operator's real
database under ~/.token_notifier.
"""

import sys
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import token_notifier without install
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from token_notifier.config import Settings  # noqa: E402
from token_notifier.store import TokenStore  # noqa: E402

MESSAGING_ENV_VARS = (
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_CHAT_ID",
    "NOTIFICATION_THRESHOLD_DAYS",
    "CHECK_INTERVAL_SECONDS",
    "TOKEN_NOTIFIER_DB",
    "TOKEN_NOTIFIER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_app_home(tmp_path, monkeypatch):
    """Point the app home at a temp dir and clear notifier env vars."""
    home = tmp_path / "app_home"
    monkeypatch.setenv("TOKEN_NOTIFIER_HOME", str(home))
    for var in MESSAGING_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "tokens.db"


@pytest.fixture
def store(db_path):
    return TokenStore(db_path)


@pytest.fixture
def settings():
    return Settings(
        telegram_bot_token="123456:TEST-TOKEN",
        telegram_chat_id="-100200300",
        notification_threshold_days=1,
        check_interval_seconds=60,
    )


class FakeChannel:
    """Records messages; succeeds unless told to fail."""

    def __init__(self, fail_for: set[str] | None = None, fail_all: bool = False):
        self.sent: list[str] = []
        self.fail_for = fail_for or set()
        self.fail_all = fail_all
        self.on_send = None

    def send(self, message: str) -> dict:
        self.sent.append(message)
        if self.on_send is not None:
            self.on_send(message)
        if self.fail_all or any(f"'{name}'" in message for name in self.fail_for):
            return {"status": "error", "success": False, "error": "HTTP 502 from Telegram"}
        return {"status": "sent", "success": True}


@pytest.fixture
def channel():
    return FakeChannel()


class FixedClock:
    """Deterministic today/now pair for daemon tests."""

    def __init__(self, today: date, now: datetime | None = None):
        self.today = today
        self.now = now or datetime(today.year, today.month, today.day, 9, 0, tzinfo=timezone.utc)

    def today_fn(self) -> date:
        return self.today

    def now_fn(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FixedClock(date(2024, 6, 10))
