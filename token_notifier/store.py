"""
Token Store - durable table of tracked tokens.

SQLite-backed. Each call opens its own connection, so the daemon and a
short-lived CLI invocation can share one database file.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from pathlib import Path

from token_notifier import db
from token_notifier.errors import StorageError
from token_notifier.models import TokenRecord, format_timestamp, parse_expiry

logger = logging.getLogger(__name__)


def _hydrate(row) -> TokenRecord:
    """Build a record from a stored row; unreadable values mean a corrupt table."""
    try:
        return TokenRecord.from_row(row)
    except ValueError as e:
        raise StorageError(f"Corrupt row {row['name']!r}: {e}") from e


class TokenStore:
    """
    Persistence for ``TokenRecord`` rows keyed by name.

    All sqlite3 failures surface as ``StorageError``.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = db_path
        db.init_db(db_path)
        logger.debug("TokenStore ready, DB path: %s", db_path)

    def _get_conn(self):
        return db.get_connection(self.db_path)

    # ==================== CRUD Operations ====================

    def add(self, name: str, expires_at: str) -> TokenRecord:
        """Insert or replace a token.

        Replacing writes only ``name`` and ``expires_at``, so a re-added token
        loses its ``last_notified`` value.
        """
        record = TokenRecord(name=name, expires_at=parse_expiry(expires_at))
        with self._get_conn() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO tokens (name, expires_at) VALUES (?, ?)",
                (record.name, record.expires_at.isoformat()),
            )
        logger.info("Tracking token %r (expires %s)", record.name, record.expires_at)
        return record

    def remove(self, name: str) -> bool:
        """Delete a token. Returns True if a row was removed."""
        with self._get_conn() as conn:
            result = conn.execute("DELETE FROM tokens WHERE name = ?", (name,))
            removed = result.rowcount > 0
        if removed:
            logger.info("Stopped tracking token %r", name)
        return removed

    def get(self, name: str) -> TokenRecord | None:
        with self._get_conn() as conn:
            row = conn.execute(
                "SELECT name, expires_at, last_notified FROM tokens WHERE name = ?",
                (name,),
            ).fetchone()
        return _hydrate(row) if row else None

    def list(self) -> list[TokenRecord]:
        """All tokens in storage order."""
        with self._get_conn() as conn:
            rows = conn.execute("SELECT name, expires_at, last_notified FROM tokens").fetchall()
        return [_hydrate(row) for row in rows]

    # ==================== Expiry Queries ====================

    def find_expiring(self, threshold_days: int, today: date) -> list[TokenRecord]:
        """Tokens expiring on or before ``today + threshold_days``."""
        cutoff = today + timedelta(days=threshold_days)
        with self._get_conn() as conn:
            rows = conn.execute(
                "SELECT name, expires_at, last_notified FROM tokens "
                "WHERE date(expires_at) <= date(?)",
                (cutoff.isoformat(),),
            ).fetchall()
        return [_hydrate(row) for row in rows]

    def mark_notified(self, name: str, timestamp: datetime) -> bool:
        """Record a successful notification.

        A token removed since it was queried is silently skipped.
        """
        with self._get_conn() as conn:
            result = conn.execute(
                "UPDATE tokens SET last_notified = ? WHERE name = ?",
                (format_timestamp(timestamp), name),
            )
            updated = result.rowcount > 0
        if not updated:
            logger.debug("Token %r vanished before mark_notified", name)
        return updated
