"""
Token Notifier Daemon: periodic expiry check loop.

Each sweep:
- queries the store for tokens due within the threshold window
- sends one notification per due token
- records ``last_notified`` for every successful send (never for a dry run)

A failed send leaves the token untouched, so the next sweep picks it up
again. A storage error ends the current sweep only; the loop keeps going.

Usage:
    token-notifier daemon        # run forever
    token-notifier check         # one sweep and exit
"""

import logging
import threading
from collections.abc import Callable
from datetime import date, datetime

from token_notifier.config import Settings
from token_notifier.errors import StorageError
from token_notifier.expiry import format_message, is_due
from token_notifier.models import utc_now
from token_notifier.notifier.channels import TelegramChannel
from token_notifier.store import TokenStore
from token_notifier.sweep_result import SweepResult

logger = logging.getLogger(__name__)


class NotifierDaemon:
    """
    Single-threaded check loop over a ``TokenStore``.

    ``today_fn`` supplies the local civil date used both for the due query and
    for the message wording; ``now_fn`` supplies the UTC timestamp written to
    ``last_notified``.
    """

    def __init__(
        self,
        store: TokenStore,
        channel: TelegramChannel,
        settings: Settings,
        today_fn: Callable[[], date] = date.today,
        now_fn: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.channel = channel
        self.settings = settings
        self._today = today_fn
        self._now = now_fn
        self.running = False
        self.sweep_count = 0
        self._shutdown_event = threading.Event()

    def sweep(self) -> SweepResult:
        """Run one pass: notify every due token once."""
        result = SweepResult(started_at=self._now(), today=self._today())
        self.sweep_count += 1

        try:
            threshold = self.settings.notification_threshold_days
            found = self.store.find_expiring(threshold, result.today)
            due = [record for record in found if is_due(record, result.today, threshold)]
            if len(due) != len(found):
                logger.warning(
                    "Store returned %d token(s) outside the threshold window; skipped",
                    len(found) - len(due),
                )
            result.due = [record.name for record in due]

            for record in due:
                message = format_message(record, result.today)
                delivery = self.channel.send(message)
                if not delivery.get("success"):
                    logger.warning(
                        "Failed to send notification for %r: %s",
                        record.name,
                        delivery.get("error", "unknown error"),
                    )
                    result.failed.append(record.name)
                    continue

                if delivery.get("status") == "dry_run":
                    result.dry_run.append(record.name)
                    continue

                self.store.mark_notified(record.name, self._now())
                result.notified.append(record.name)

        except StorageError as e:
            result.error = str(e)
            logger.error("Error checking tokens: %s", e, exc_info=True)

        result.completed_at = self._now()
        logger.info(
            "Sweep %d: %d due, %d notified, %d failed",
            self.sweep_count,
            len(result.due),
            len(result.notified),
            len(result.failed),
            extra={"sweep": result.to_dict()},
        )
        return result

    def run_once(self) -> SweepResult:
        """Run a single sweep and return."""
        logger.info(
            "Running one-shot check (threshold %d days)", self.settings.notification_threshold_days
        )
        return self.sweep()

    def run(self) -> None:
        """Main loop: sweep, sleep for the check interval, repeat until ``stop()``."""
        self.running = True
        logger.info("Starting token expiration notifier daemon...")
        logger.info("Checking every %d seconds", self.settings.check_interval_seconds)
        logger.info("Notification threshold: %d days", self.settings.notification_threshold_days)

        try:
            while not self._shutdown_event.is_set():
                try:
                    self.sweep()
                except Exception:
                    logger.exception("Sweep crashed; continuing with next interval")

                self._shutdown_event.wait(timeout=self.settings.check_interval_seconds)
        finally:
            self.running = False
            logger.info("Daemon stopped")

    def stop(self) -> None:
        """Ask the loop to exit after the current sweep or wait."""
        self._shutdown_event.set()
