"""
Database access for the token notifier.

Single place for:
- the ``tokens`` table schema
- the connection factory (one short-lived connection per operation)
- translating sqlite3 failures into ``StorageError``
"""

import logging
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from token_notifier.errors import StorageError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS tokens (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL UNIQUE,
    expires_at TEXT NOT NULL,
    last_notified TEXT
)
"""


@contextmanager
def get_connection(db_path: Path | str) -> Generator[sqlite3.Connection, None, None]:
    """
    Open a connection, commit on success, always close.

    Usage:
        with get_connection(path) as conn:
            conn.execute(...)
    """
    try:
        conn = sqlite3.connect(str(db_path))
    except sqlite3.Error as e:
        raise StorageError(f"Could not open database {db_path}: {e}") from e

    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise StorageError(f"Database operation failed: {e}") from e
    finally:
        conn.close()


def init_db(db_path: Path | str) -> None:
    """Create the database file and schema if missing."""
    path = Path(db_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"Could not create database directory {path.parent}: {e}") from e

    with get_connection(db_path) as conn:
        conn.execute(SCHEMA)
    logger.debug("Schema ready at %s", db_path)
