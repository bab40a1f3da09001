from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from fitroster.config import AppSettings
from fitroster.container import build_container
from fitroster.domain import ClassStatus
from fitroster.notifications import InboxNotifier, WebhookNotifier


def test_build_container_wires_inbox_notifier(tmp_path: Path) -> None:
    db_url = f"sqlite+aiosqlite:///{tmp_path/'nested'/'container.db'}"
    settings = AppSettings(environment="test", database_url=db_url, max_attempts=3)

    container = build_container(settings)

    assert (tmp_path / "nested").exists()
    channels = container.dispatcher.notifiers
    assert len(channels) == 1
    assert isinstance(channels[0], InboxNotifier)

    async def _round_trip() -> int:
        classes = await container.class_store.list_by_status(ClassStatus.SCHEDULED)
        return len(classes)

    assert asyncio.run(_round_trip()) == 0


def test_build_container_adds_webhook_when_configured(tmp_path: Path) -> None:
    settings = AppSettings(
        environment="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path/'hooks.db'}",
        inbox_notifications=False,
        notification_webhook_url="https://hooks.example/roster",
    )

    container = build_container(settings)

    channels = container.dispatcher.notifiers
    assert [type(channel) for channel in channels] == [WebhookNotifier]


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FITROSTER_ENV", "staging")
    monkeypatch.setenv("FITROSTER_MAX_ATTEMPTS", "7")
    monkeypatch.setenv("FITROSTER_RETRY_DELAY", "0.25")
    monkeypatch.setenv("FITROSTER_INBOX_NOTIFICATIONS", "no")
    monkeypatch.delenv("FITROSTER_NOTIFICATION_WEBHOOK_URL", raising=False)

    settings = AppSettings.from_env()

    assert settings.environment == "staging"
    assert settings.max_attempts == 7
    assert settings.retry_delay == 0.25
    assert settings.inbox_notifications is False
    assert settings.notification_webhook_url is None
