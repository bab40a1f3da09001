"""Notifier that stores rendered notifications in the in-app inbox."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from fitroster.domain import Notification, NotificationId, NotificationKind, RecipientType
from fitroster.persistence import NotificationRepository, RepositoryError

from .exceptions import NotificationError
from .interfaces import Notifier
from .templates import render


class InboxNotifier(Notifier):
    """Render a template and persist it as an unread inbox entry."""

    name = "inbox"

    def __init__(self, repository: NotificationRepository) -> None:
        self._repository = repository

    async def dispatch(
        self,
        recipient_id: str,
        kind: NotificationKind,
        context: Mapping[str, Any],
        *,
        recipient_type: RecipientType = RecipientType.MEMBER,
    ) -> None:
        title, message, priority = render(kind, context)
        class_id = context.get("class_id")
        notification = Notification(
            id=NotificationId(uuid4()),
            recipient_id=recipient_id,
            recipient_type=recipient_type,
            kind=kind,
            title=title,
            message=message,
            priority=priority,
            related_id=str(class_id) if class_id is not None else None,
            metadata={"source_type": "class", "data": {k: str(v) for k, v in context.items()}},
        )
        try:
            await self._repository.add(notification)
        except RepositoryError as exc:
            msg = f"Unable to store {kind} notification for {recipient_id}"
            raise NotificationError(msg) from exc


__all__ = ["InboxNotifier"]
