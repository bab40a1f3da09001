"""Fire-and-forget fan-out of roster notifications."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from fitroster.domain import NotificationRequest

from .interfaces import Notifier


class NotificationDispatcher:
    """Schedules one background delivery per notification and channel.

    Deliveries never propagate errors to the caller; failures are logged and
    dropped. ``drain`` waits for in-flight deliveries, which shutdown paths and
    tests use to observe the side effects.
    """

    def __init__(
        self,
        notifiers: Sequence[Notifier] = (),
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._notifiers = list(notifiers)
        self._logger = logger or logging.getLogger(__name__)
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def notifiers(self) -> tuple[Notifier, ...]:
        return tuple(self._notifiers)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def register(self, notifier: Notifier) -> None:
        self._notifiers.append(notifier)

    def dispatch_all(
        self,
        requests: Sequence[NotificationRequest],
        context: Mapping[str, Any],
    ) -> list[asyncio.Task[None]]:
        """Schedule delivery of every request on every channel and return immediately."""

        tasks: list[asyncio.Task[None]] = []
        for request in requests:
            for notifier in self._notifiers:
                task = asyncio.create_task(
                    self._deliver(notifier, request, dict(context)),
                    name=f"notify-{notifier.name}-{request.kind}-{request.recipient_id}",
                )
                self._pending.add(task)
                task.add_done_callback(self._pending.discard)
                tasks.append(task)
        return tasks

    async def drain(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _deliver(
        self,
        notifier: Notifier,
        request: NotificationRequest,
        context: Mapping[str, Any],
    ) -> None:
        try:
            await notifier.dispatch(
                request.recipient_id,
                request.kind,
                context,
                recipient_type=request.recipient_type,
            )
        except Exception:
            self._logger.exception(
                "Notification %s for %s via %s failed",
                request.kind,
                request.recipient_id,
                notifier.name,
            )
            return
        self._logger.debug(
            "Notification %s accepted for %s via %s",
            request.kind,
            request.recipient_id,
            notifier.name,
        )


__all__ = ["NotificationDispatcher"]
