"""Notifier that forwards notifications to an HTTP webhook."""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any

import httpx

from fitroster.domain import NotificationKind, RecipientType
from fitroster.utils import utc_now

from .exceptions import NotificationError
from .interfaces import Notifier
from .templates import render


class WebhookNotifier(Notifier):
    """POST each notification as JSON to a configured endpoint."""

    name = "webhook"

    def __init__(
        self,
        url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        if not url:
            msg = "Webhook URL is not configured"
            raise NotificationError(msg)
        self._url = url
        self._client = client
        self._timeout = timeout

    async def dispatch(
        self,
        recipient_id: str,
        kind: NotificationKind,
        context: Mapping[str, Any],
        *,
        recipient_type: RecipientType = RecipientType.MEMBER,
    ) -> None:
        title, message, priority = render(kind, context)
        body = {
            "recipient_id": recipient_id,
            "recipient_type": recipient_type.value,
            "kind": kind.value,
            "title": title,
            "message": message,
            "priority": priority.value,
            "context": {key: str(value) for key, value in context.items()},
            "sent_at": utc_now().isoformat(),
        }
        async with self._client_scope() as client:
            try:
                response = await client.post(self._url, json=body)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                msg = f"Webhook rejected notification with status {exc.response.status_code}"
                raise NotificationError(msg) from exc
            except httpx.HTTPError as exc:
                msg = "Webhook request failed"
                raise NotificationError(msg) from exc

    @asynccontextmanager
    async def _client_scope(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client


__all__ = ["WebhookNotifier"]
