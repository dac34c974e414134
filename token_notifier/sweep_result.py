"""
SweepResult dataclass for daemon sweep tracking.
"""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass
class SweepResult:
    """Outcome of one pass over the due tokens."""

    started_at: datetime
    today: date
    completed_at: datetime | None = None
    due: list[str] = field(default_factory=list)
    notified: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    dry_run: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def aborted(self) -> bool:
        """True when a storage error cut the sweep short."""
        return self.error is not None

    @property
    def duration_seconds(self) -> float:
        if self.completed_at is None:
            return 0.0
        return (self.completed_at - self.started_at).total_seconds()

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "today": self.today.isoformat(),
            "duration_seconds": self.duration_seconds,
            "due": list(self.due),
            "notified": list(self.notified),
            "failed": list(self.failed),
            "dry_run": list(self.dry_run),
            "error": self.error,
        }
