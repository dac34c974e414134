from __future__ import annotations

import os
from pathlib import Path

APP_ENV_HOME = "TOKEN_NOTIFIER_HOME"
APP_ENV_DB = "TOKEN_NOTIFIER_DB"
DB_FILENAME = "token_notifier.db"


def app_home() -> Path:
    """
    User-writable home for the notifier.
    Override with TOKEN_NOTIFIER_HOME.
    """
    if os.environ.get(APP_ENV_HOME):
        return Path(os.environ[APP_ENV_HOME]).expanduser().resolve()
    return (Path.home() / ".token_notifier").resolve()


def data_dir() -> Path:
    d = app_home() / "data"
    d.mkdir(parents=True, exist_ok=True)
    return d


def db_path() -> Path:
    """
    Canonical DB path.

    Resolution order:
    1. TOKEN_NOTIFIER_DB env var (explicit override)
    2. ~/.token_notifier/data/token_notifier.db (default)
    """
    if os.environ.get(APP_ENV_DB):
        return Path(os.environ[APP_ENV_DB]).expanduser().resolve()
    return data_dir() / DB_FILENAME
