"""In-memory repository implementations for unit testing."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from copy import deepcopy
from dataclasses import dataclass, field
from typing import TypeVar

from fitroster.domain import ClassId, ClassRecord, ClassStatus, Notification, NotificationId
from fitroster.persistence.interfaces import ClassRecordStore, NotificationRepository
from fitroster.utils import utc_now

from .errors import ConcurrencyError, NotFoundError, RepositoryError

T = TypeVar("T")


def _copy(value: T) -> T:
    return deepcopy(value)


@dataclass
class InMemoryClassRecordStore(ClassRecordStore):
    _records: dict[ClassId, ClassRecord] = field(default_factory=dict)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    async def get(self, class_id: ClassId) -> ClassRecord | None:
        return _copy(self._records.get(class_id))

    async def add(self, record: ClassRecord) -> None:
        async with self._lock:
            if record.id in self._records:
                msg = f"Class {record.id} already exists"
                raise RepositoryError(msg)
            self._records[record.id] = record

    async def conditional_write(
        self,
        class_id: ClassId,
        expected_revision: int,
        new_state: ClassRecord,
    ) -> int:
        async with self._lock:
            current = self._records.get(class_id)
            if current is None:
                msg = f"Class {class_id} not found"
                raise NotFoundError(msg)
            if current.revision != expected_revision:
                msg = (
                    f"Class {class_id} is at revision {current.revision}, "
                    f"expected {expected_revision}"
                )
                raise ConcurrencyError(msg)
            next_revision = expected_revision + 1
            self._records[class_id] = new_state.model_copy(
                update={"revision": next_revision, "updated_at": utc_now()}
            )
            return next_revision

    async def list_by_status(self, status: ClassStatus) -> Sequence[ClassRecord]:
        matching = [record for record in self._records.values() if record.status == status]
        ordered = sorted(
            matching,
            key=lambda record: (record.start_time or record.created_at, record.id),
        )
        return [_copy(record) for record in ordered]


@dataclass
class InMemoryNotificationRepository(NotificationRepository):
    _notifications: dict[NotificationId, Notification] = field(default_factory=dict)

    async def add(self, notification: Notification) -> None:
        self._notifications[notification.id] = notification

    async def list_for_recipient(
        self,
        recipient_id: str,
        *,
        limit: int = 10,
    ) -> Sequence[Notification]:
        matching = [
            notification
            for notification in self._notifications.values()
            if notification.recipient_id == recipient_id
        ]
        ordered = sorted(matching, key=lambda item: item.created_at, reverse=True)
        return [_copy(notification) for notification in ordered[:limit]]

    async def unread_count(self, recipient_id: str) -> int:
        return sum(
            1
            for notification in self._notifications.values()
            if notification.recipient_id == recipient_id and not notification.is_read
        )

    async def mark_read(self, notification_id: NotificationId) -> Notification:
        notification = self._notifications.get(notification_id)
        if notification is None:
            msg = f"Notification {notification_id} not found"
            raise NotFoundError(msg)
        if notification.is_read:
            return _copy(notification)
        updated = notification.model_copy(update={"is_read": True, "read_at": utc_now()})
        self._notifications[notification_id] = updated
        return _copy(updated)


__all__ = ["InMemoryClassRecordStore", "InMemoryNotificationRepository"]
