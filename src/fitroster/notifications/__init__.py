"""Notification subsystem exports."""

from .dispatcher import NotificationDispatcher
from .exceptions import NotificationError
from .inbox import InboxNotifier
from .interfaces import Notifier
from .templates import render
from .webhook import WebhookNotifier

__all__ = [
    "InboxNotifier",
    "NotificationDispatcher",
    "NotificationError",
    "Notifier",
    "WebhookNotifier",
    "render",
]
