"""Custom exceptions for notification delivery."""

from __future__ import annotations


class NotificationError(RuntimeError):
    """Raised when a notifier cannot accept a notification."""


__all__ = ["NotificationError"]
