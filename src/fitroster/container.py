"""Service container wiring application components."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from fitroster.config import AppSettings
from fitroster.enrollment import EnrollmentService
from fitroster.notifications import (
    InboxNotifier,
    NotificationDispatcher,
    NotificationError,
    WebhookNotifier,
)
from fitroster.persistence import ClassRecordStore, NotificationRepository
from fitroster.persistence.sqlite import (
    SQLiteClassRecordStore,
    SQLiteDatabase,
    SQLiteNotificationRepository,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContainer:
    """Aggregates constructed services with shared configuration."""

    settings: AppSettings
    database: SQLiteDatabase
    class_store: ClassRecordStore
    notification_repository: NotificationRepository
    dispatcher: NotificationDispatcher
    enrollment_service: EnrollmentService


def _ensure_sqlite_directory(database_url: str) -> None:
    if not database_url.startswith("sqlite"):
        return
    try:
        _, path = database_url.split(":///", maxsplit=1)
    except ValueError:
        return
    if not path or path == ":memory:":
        return
    db_path = Path(path).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)


def build_container(settings: AppSettings | None = None) -> ServiceContainer:
    """Construct the primary service container."""

    resolved_settings = settings or AppSettings.from_env()

    _ensure_sqlite_directory(resolved_settings.database_url)
    database = SQLiteDatabase(resolved_settings.database_url)
    class_store = SQLiteClassRecordStore(database)
    notification_repository = SQLiteNotificationRepository(database)

    dispatcher = NotificationDispatcher()
    if resolved_settings.inbox_notifications:
        dispatcher.register(InboxNotifier(notification_repository))
    if resolved_settings.notification_webhook_url:
        try:
            dispatcher.register(
                WebhookNotifier(
                    resolved_settings.notification_webhook_url,
                    timeout=resolved_settings.notification_timeout,
                )
            )
        except NotificationError as exc:  # pragma: no cover - defensive path
            logger.warning("Unable to register webhook notifier: %s", exc)

    enrollment_service = EnrollmentService(
        class_store,
        dispatcher,
        max_attempts=resolved_settings.max_attempts,
        retry_delay=resolved_settings.retry_delay,
    )

    return ServiceContainer(
        settings=resolved_settings,
        database=database,
        class_store=class_store,
        notification_repository=notification_repository,
        dispatcher=dispatcher,
        enrollment_service=enrollment_service,
    )


__all__ = ["ServiceContainer", "build_container"]
