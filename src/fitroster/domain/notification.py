"""In-app notification domain model."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import Field

from fitroster.utils import utc_now

from .base import DomainModel
from .enums import NotificationKind, NotificationPriority, RecipientType
from .types import NotificationId


class Notification(DomainModel):
    """Inbox entry rendered from a roster notification request."""

    id: NotificationId
    recipient_id: Annotated[str, Field(min_length=1)]
    recipient_type: RecipientType
    kind: NotificationKind
    title: str
    message: str
    type: str = "training"
    priority: NotificationPriority = NotificationPriority.NORMAL
    related_id: str | None = None
    is_read: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    read_at: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


__all__ = ["Notification"]
