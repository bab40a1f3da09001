"""Enrollment service adapting the pure engine to a shared roster store."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from fitroster.domain import ClassId, ClassRecord, EnrollmentOutcome, MemberId
from fitroster.notifications import NotificationDispatcher
from fitroster.persistence import (
    ClassRecordStore,
    ConcurrencyError,
    NotFoundError,
    RepositoryError,
    StoreUnavailableError,
)

from .engine import EnrollmentDecision, decide_cancel, decide_enroll
from .exceptions import ContentionError, EnrollmentCancelledError, EnrollmentTimeoutError

Decider = Callable[[ClassRecord, MemberId], EnrollmentDecision]

DEFAULT_MAX_ATTEMPTS = 5


def _notification_context(record: ClassRecord, outcome: EnrollmentOutcome) -> dict[str, Any]:
    context: dict[str, Any] = {
        "class_id": record.id,
        "class_name": record.name,
        "member_id": outcome.member_id,
        "capacity": record.capacity,
        "enrolled_count": len(outcome.enrolled),
    }
    if record.start_time is not None:
        context["start_time"] = record.start_time.isoformat()
    if record.location:
        context["location"] = record.location
    if outcome.promoted is not None:
        context["promoted_member_id"] = outcome.promoted
    if outcome.member_id in outcome.waitlist:
        context["waitlist_position"] = outcome.waitlist.index(outcome.member_id) + 1
    return context


class EnrollmentService:
    """Optimistic read-decide-write loop around the enrollment engine.

    No lock is held between loading a roster and writing it back. A write
    that loses the race on ``revision`` reloads and decides again, up to
    ``max_attempts`` times. Notifications are handed to the dispatcher only
    after the write succeeds and never affect the returned outcome.
    """

    def __init__(
        self,
        store: ClassRecordStore,
        dispatcher: NotificationDispatcher,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = 0.0,
        logger: logging.Logger | None = None,
    ) -> None:
        if max_attempts < 1:
            msg = "max_attempts must be at least 1"
            raise ValueError(msg)
        self._store = store
        self._dispatcher = dispatcher
        self._max_attempts = max_attempts
        self._retry_delay = max(0.0, retry_delay)
        self._logger = logger or logging.getLogger(__name__)

    @property
    def dispatcher(self) -> NotificationDispatcher:
        return self._dispatcher

    async def enroll(
        self,
        class_id: ClassId,
        member_id: MemberId,
        *,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> EnrollmentOutcome:
        return await self._run(
            "enroll",
            decide_enroll,
            class_id,
            member_id,
            timeout=timeout,
            cancel_event=cancel_event,
        )

    async def cancel(
        self,
        class_id: ClassId,
        member_id: MemberId,
        *,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> EnrollmentOutcome:
        return await self._run(
            "cancel",
            decide_cancel,
            class_id,
            member_id,
            timeout=timeout,
            cancel_event=cancel_event,
        )

    async def roster(self, class_id: ClassId) -> ClassRecord:
        return await self._load(class_id)

    async def _run(
        self,
        action: str,
        decide: Decider,
        class_id: ClassId,
        member_id: MemberId,
        *,
        timeout: float | None,
        cancel_event: asyncio.Event | None,
    ) -> EnrollmentOutcome:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout if timeout is not None else None

        for attempt in range(1, self._max_attempts + 1):
            if cancel_event is not None and cancel_event.is_set():
                msg = f"{action} of {member_id} in class {class_id} was cancelled"
                raise EnrollmentCancelledError(msg)
            if deadline is not None and loop.time() >= deadline:
                msg = f"{action} of {member_id} in class {class_id} timed out after {timeout}s"
                raise EnrollmentTimeoutError(msg)

            record = await self._load(class_id)
            decision = decide(record, member_id)
            if not decision.changed:
                return decision.outcome

            try:
                revision = await self._store.conditional_write(
                    class_id, record.revision, decision.next_state
                )
            except ConcurrencyError:
                self._logger.info(
                    "Revision conflict on class %s during %s (attempt %d/%d)",
                    class_id,
                    action,
                    attempt,
                    self._max_attempts,
                )
                if self._retry_delay and attempt < self._max_attempts:
                    await asyncio.sleep(self._retry_delay)
                continue
            except RepositoryError:
                raise
            except Exception as exc:
                msg = f"Store failed while writing class {class_id}"
                raise StoreUnavailableError(msg) from exc

            outcome = decision.outcome.model_copy(update={"revision": revision})
            self._logger.info(
                "%s %s in class %s -> %s (revision %d)",
                action,
                member_id,
                class_id,
                outcome.result,
                revision,
            )
            if outcome.notifications:
                self._dispatcher.dispatch_all(
                    outcome.notifications,
                    _notification_context(decision.next_state, outcome),
                )
            return outcome

        msg = (
            f"Gave up on {action} of {member_id} in class {class_id} "
            f"after {self._max_attempts} conflicting attempts"
        )
        raise ContentionError(msg)

    async def _load(self, class_id: ClassId) -> ClassRecord:
        try:
            record = await self._store.get(class_id)
        except RepositoryError:
            raise
        except Exception as exc:
            msg = f"Store failed while loading class {class_id}"
            raise StoreUnavailableError(msg) from exc
        if record is None:
            msg = f"Class {class_id} not found"
            raise NotFoundError(msg)
        return record


__all__ = ["DEFAULT_MAX_ATTEMPTS", "EnrollmentService"]
