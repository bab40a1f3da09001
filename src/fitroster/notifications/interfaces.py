"""Protocols for notification channels."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from fitroster.domain import NotificationKind, RecipientType


class Notifier(Protocol):
    """Contract implemented by notification channel adapters."""

    name: str

    async def dispatch(
        self,
        recipient_id: str,
        kind: NotificationKind,
        context: Mapping[str, Any],
        *,
        recipient_type: RecipientType = RecipientType.MEMBER,
    ) -> None:
        """Accept a notification for delivery; raise ``NotificationError`` on refusal."""


__all__ = ["Notifier"]
