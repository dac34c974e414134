"""Expiry evaluation: which tokens are due and what to tell the operator."""

from datetime import date, timedelta

from token_notifier.models import TokenRecord


def days_remaining(expires_at: date, today: date) -> int:
    """Whole calendar days from ``today`` until ``expires_at`` (negative once past)."""
    return (expires_at - today).days


def is_due(record: TokenRecord, today: date, threshold_days: int) -> bool:
    return record.expires_at <= today + timedelta(days=threshold_days)


def format_message(record: TokenRecord, today: date) -> str:
    """Notification text for a due token."""
    remaining = days_remaining(record.expires_at, today)
    if remaining <= 0:
        return f"🚨 Token '{record.name}' has EXPIRED!"
    unit = "day" if remaining == 1 else "days"
    return f"⚠️ Token '{record.name}' will expire in {remaining} {unit}!"
