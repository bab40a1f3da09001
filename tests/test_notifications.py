from __future__ import annotations

import asyncio
import json
from uuid import uuid4

import httpx
import pytest

from fitroster.domain import (
    NotificationKind,
    NotificationPriority,
    NotificationRequest,
    RecipientType,
)
from fitroster.notifications import (
    InboxNotifier,
    NotificationDispatcher,
    NotificationError,
    WebhookNotifier,
    render,
)
from fitroster.persistence import InMemoryNotificationRepository, NotFoundError

CONTEXT = {
    "class_id": "yoga-1",
    "class_name": "Sunrise Yoga",
    "member_id": "m-1",
    "capacity": 10,
    "enrolled_count": 4,
    "start_time": "2025-05-01T07:00:00+00:00",
}


def test_render_fills_template_from_context() -> None:
    title, message, priority = render(NotificationKind.SEAT_FREED, CONTEXT)

    assert title == "A seat opened up"
    assert "Sunrise Yoga" in message
    assert "2025-05-01T07:00:00+00:00" in message
    assert priority is NotificationPriority.HIGH


def test_render_tolerates_missing_context() -> None:
    title, message, _ = render(NotificationKind.WAITLISTED, {"class_id": "yoga-1"})

    assert title == "Added to the waitlist"
    assert message.startswith("yoga-1 is full.")


def test_every_kind_has_a_template() -> None:
    for kind in NotificationKind:
        title, message, _ = render(kind, CONTEXT)
        assert title
        assert message


def test_inbox_notifier_stores_unread_entry() -> None:
    repository = InMemoryNotificationRepository()
    notifier = InboxNotifier(repository)

    async def _run() -> None:
        await notifier.dispatch(
            "coach-1",
            NotificationKind.NEW_ENROLLMENT,
            CONTEXT,
            recipient_type=RecipientType.TRAINER,
        )
        items = await repository.list_for_recipient("coach-1")
        assert len(items) == 1
        entry = items[0]
        assert entry.recipient_type is RecipientType.TRAINER
        assert entry.related_id == "yoga-1"
        assert entry.type == "training"
        assert "(4/10)" in entry.message
        assert await repository.unread_count("coach-1") == 1

        read = await repository.mark_read(entry.id)
        assert read.is_read
        assert read.read_at is not None
        assert await repository.unread_count("coach-1") == 0

    asyncio.run(_run())


def test_mark_read_unknown_notification_raises() -> None:
    repository = InMemoryNotificationRepository()

    async def _run() -> None:
        with pytest.raises(NotFoundError):
            await repository.mark_read(uuid4())  # type: ignore[arg-type]

    asyncio.run(_run())


def test_webhook_notifier_posts_json() -> None:
    captured: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(json.loads(request.content))
        return httpx.Response(202)

    async def _run() -> None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            notifier = WebhookNotifier("https://hooks.example/roster", client=client)
            await notifier.dispatch("m-1", NotificationKind.ENROLLED, CONTEXT)

    asyncio.run(_run())

    assert len(captured) == 1
    body = captured[0]
    assert body["recipient_id"] == "m-1"
    assert body["kind"] == "enrolled"
    assert body["title"] == "Enrollment confirmed"
    assert body["context"]["class_name"] == "Sunrise Yoga"  # type: ignore[index]


def test_webhook_notifier_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    async def _run() -> None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            notifier = WebhookNotifier("https://hooks.example/roster", client=client)
            with pytest.raises(NotificationError, match="503"):
                await notifier.dispatch("m-1", NotificationKind.ENROLLED, CONTEXT)

    asyncio.run(_run())


def test_webhook_requires_url() -> None:
    with pytest.raises(NotificationError):
        WebhookNotifier("")


def test_dispatcher_fans_out_to_every_channel() -> None:
    first = InMemoryNotificationRepository()
    second = InMemoryNotificationRepository()
    dispatcher = NotificationDispatcher([InboxNotifier(first), InboxNotifier(second)])
    requests = [
        NotificationRequest(recipient_id="m-1", kind=NotificationKind.ENROLLMENT_CANCELLED),
        NotificationRequest(recipient_id="m-2", kind=NotificationKind.SEAT_FREED),
    ]

    async def _run() -> None:
        tasks = dispatcher.dispatch_all(requests, CONTEXT)
        assert len(tasks) == 4
        await dispatcher.drain()
        assert dispatcher.pending == 0
        for repository in (first, second):
            assert await repository.unread_count("m-1") == 1
            assert await repository.unread_count("m-2") == 1

    asyncio.run(_run())
