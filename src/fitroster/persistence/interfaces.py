"""Persistence layer abstractions for roster and notification storage."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from fitroster.domain import ClassId, ClassRecord, ClassStatus, Notification, NotificationId


class ClassRecordStore(Protocol):
    """Durable class rosters guarded by a compare-and-swap on ``revision``."""

    async def get(self, class_id: ClassId) -> ClassRecord | None: ...

    async def add(self, record: ClassRecord) -> None: ...

    async def conditional_write(
        self,
        class_id: ClassId,
        expected_revision: int,
        new_state: ClassRecord,
    ) -> int:
        """Persist ``new_state`` if the stored revision still matches.

        Returns the new revision. Raises ``ConcurrencyError`` when another
        writer advanced the revision first.
        """

    async def list_by_status(self, status: ClassStatus) -> Sequence[ClassRecord]: ...


class NotificationRepository(Protocol):
    """In-app notification inbox."""

    async def add(self, notification: Notification) -> None: ...

    async def list_for_recipient(
        self,
        recipient_id: str,
        *,
        limit: int = 10,
    ) -> Sequence[Notification]: ...

    async def unread_count(self, recipient_id: str) -> int: ...

    async def mark_read(self, notification_id: NotificationId) -> Notification: ...
