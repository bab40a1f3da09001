"""SQLite repository implementations."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import Select, func, select, update

from fitroster.domain import ClassId, ClassRecord, ClassStatus, Notification, NotificationId
from fitroster.persistence.errors import ConcurrencyError, NotFoundError, RepositoryError
from fitroster.persistence.interfaces import ClassRecordStore, NotificationRepository
from fitroster.utils import utc_now

from .database import SQLiteDatabase
from .models import ClassRosterRow, NotificationRow


def _to_record(row: ClassRosterRow) -> ClassRecord:
    payload = dict(row.payload)
    payload["revision"] = row.revision
    return ClassRecord.model_validate(payload)


class SQLiteClassRecordStore(ClassRecordStore):
    def __init__(self, database: SQLiteDatabase) -> None:
        self._database = database

    async def get(self, class_id: ClassId) -> ClassRecord | None:
        async with self._database.session() as session:
            row = await session.get(ClassRosterRow, str(class_id))
            if row is None:
                return None
            return _to_record(row)

    async def add(self, record: ClassRecord) -> None:
        async with self._database.session() as session:
            existing = await session.get(ClassRosterRow, str(record.id))
            if existing is not None:
                msg = f"Class {record.id} already exists"
                raise RepositoryError(msg)
            session.add(
                ClassRosterRow(
                    id=str(record.id),
                    instructor_id=str(record.instructor_id),
                    status=record.status.value,
                    revision=record.revision,
                    start_time=record.start_time,
                    created_at=record.created_at,
                    updated_at=record.updated_at,
                    payload=record.model_dump(mode="json"),
                )
            )

    async def conditional_write(
        self,
        class_id: ClassId,
        expected_revision: int,
        new_state: ClassRecord,
    ) -> int:
        next_revision = expected_revision + 1
        stamped = new_state.model_copy(
            update={"revision": next_revision, "updated_at": utc_now()}
        )
        async with self._database.session() as session:
            stmt = (
                update(ClassRosterRow)
                .where(
                    ClassRosterRow.id == str(class_id),
                    ClassRosterRow.revision == expected_revision,
                )
                .values(
                    revision=next_revision,
                    status=stamped.status.value,
                    updated_at=stamped.updated_at,
                    payload=stamped.model_dump(mode="json"),
                )
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(stmt)
            if result.rowcount == 1:
                return next_revision

            current = await session.scalar(
                select(ClassRosterRow.revision).where(ClassRosterRow.id == str(class_id))
            )
            if current is None:
                msg = f"Class {class_id} not found"
                raise NotFoundError(msg)
            msg = f"Class {class_id} is at revision {current}, expected {expected_revision}"
            raise ConcurrencyError(msg)

    async def list_by_status(self, status: ClassStatus) -> Sequence[ClassRecord]:
        stmt: Select[tuple[ClassRosterRow]] = (
            select(ClassRosterRow)
            .where(ClassRosterRow.status == status.value)
            .order_by(
                func.coalesce(ClassRosterRow.start_time, ClassRosterRow.created_at),
                ClassRosterRow.id,
            )
        )
        async with self._database.session() as session:
            result = await session.execute(stmt)
            return [_to_record(row) for row in result.scalars().all()]


class SQLiteNotificationRepository(NotificationRepository):
    def __init__(self, database: SQLiteDatabase) -> None:
        self._database = database

    async def add(self, notification: Notification) -> None:
        async with self._database.session() as session:
            session.add(
                NotificationRow(
                    id=str(notification.id),
                    recipient_id=notification.recipient_id,
                    kind=notification.kind.value,
                    is_read=notification.is_read,
                    created_at=notification.created_at,
                    payload=notification.model_dump(mode="json"),
                )
            )

    async def list_for_recipient(
        self,
        recipient_id: str,
        *,
        limit: int = 10,
    ) -> Sequence[Notification]:
        stmt: Select[tuple[NotificationRow]] = (
            select(NotificationRow)
            .where(NotificationRow.recipient_id == recipient_id)
            .order_by(NotificationRow.created_at.desc())
            .limit(limit)
        )
        async with self._database.session() as session:
            result = await session.execute(stmt)
            return [Notification.model_validate(row.payload) for row in result.scalars().all()]

    async def unread_count(self, recipient_id: str) -> int:
        stmt = select(func.count()).where(
            NotificationRow.recipient_id == recipient_id,
            NotificationRow.is_read.is_(False),
        )
        async with self._database.session() as session:
            count = await session.scalar(stmt)
        return int(count or 0)

    async def mark_read(self, notification_id: NotificationId) -> Notification:
        async with self._database.session() as session:
            row = await session.get(NotificationRow, str(notification_id))
            if row is None:
                msg = f"Notification {notification_id} not found"
                raise NotFoundError(msg)
            notification = Notification.model_validate(row.payload)
            if notification.is_read:
                return notification
            updated = notification.model_copy(update={"is_read": True, "read_at": utc_now()})
            row.is_read = True
            row.payload = updated.model_dump(mode="json")
            return updated


__all__ = ["SQLiteClassRecordStore", "SQLiteNotificationRepository"]
