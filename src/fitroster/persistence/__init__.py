"""Persistence layer exports."""

from .errors import ConcurrencyError, NotFoundError, RepositoryError, StoreUnavailableError
from .interfaces import ClassRecordStore, NotificationRepository
from .memory import InMemoryClassRecordStore, InMemoryNotificationRepository

__all__ = [
    "ClassRecordStore",
    "ConcurrencyError",
    "InMemoryClassRecordStore",
    "InMemoryNotificationRepository",
    "NotFoundError",
    "NotificationRepository",
    "RepositoryError",
    "StoreUnavailableError",
]
