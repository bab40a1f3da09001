"""Lightweight application configuration loader."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


@dataclass(frozen=True)
class AppSettings:
    """Immutable configuration sourced from environment variables."""

    environment: str = "development"
    database_url: str = "sqlite+aiosqlite:///fitroster.db"
    max_attempts: int = 5
    retry_delay: float = 0.0
    inbox_notifications: bool = True
    notification_webhook_url: str | None = None
    notification_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> AppSettings:
        return cls(
            environment=os.getenv("FITROSTER_ENV", cls.environment),
            database_url=os.getenv("FITROSTER_DATABASE_URL", cls.database_url),
            max_attempts=_env_int("FITROSTER_MAX_ATTEMPTS", cls.max_attempts),
            retry_delay=_env_float("FITROSTER_RETRY_DELAY", cls.retry_delay),
            inbox_notifications=_env_bool("FITROSTER_INBOX_NOTIFICATIONS", True),
            notification_webhook_url=os.getenv("FITROSTER_NOTIFICATION_WEBHOOK_URL") or None,
            notification_timeout=_env_float(
                "FITROSTER_NOTIFICATION_TIMEOUT", cls.notification_timeout
            ),
        )


__all__ = ["AppSettings"]
