"""Domain model for tracked tokens."""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass
from datetime import date, datetime, timezone

from token_notifier.errors import ValidationError

DATE_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)


def utc_now() -> datetime:
    """Current UTC time truncated to whole seconds (the stored precision)."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def parse_expiry(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` calendar date.

    Raises ``ValidationError`` for anything else, including well-formed but
    impossible dates such as ``2024-13-40``.
    """
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise ValidationError(f"expires_at must be a date in YYYY-MM-DD form, got {value!r}")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        raise ValidationError(f"expires_at is not a valid calendar date: {value!r}") from exc


def format_timestamp(value: datetime) -> str:
    """Serialize a timestamp as UTC ``YYYY-MM-DD HH:MM:SS``."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    return datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class TokenRecord:
    """A named secret tracked for expiration."""

    name: str
    expires_at: date
    last_notified: datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("name must not be empty")

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> TokenRecord:
        """Hydrate from a ``tokens`` table row."""
        last_notified = row["last_notified"]
        return cls(
            name=row["name"],
            expires_at=datetime.strptime(row["expires_at"], DATE_FORMAT).date(),
            last_notified=parse_timestamp(last_notified) if last_notified else None,
        )

    def display_row(self) -> tuple[str, str, str]:
        """Columns for the ``list`` table: name, expiry, last notified."""
        last = format_timestamp(self.last_notified) if self.last_notified else "Never"
        return self.name, self.expires_at.isoformat(), last
