"""Title and message templates for roster notifications."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fitroster.domain import NotificationKind, NotificationPriority


@dataclass(frozen=True, slots=True)
class NotificationTemplate:
    title: str
    message: str
    priority: NotificationPriority = NotificationPriority.NORMAL


TEMPLATES: dict[NotificationKind, NotificationTemplate] = {
    NotificationKind.ENROLLED: NotificationTemplate(
        title="Enrollment confirmed",
        message="You are enrolled in {class_name}{when}.",
    ),
    NotificationKind.NEW_ENROLLMENT: NotificationTemplate(
        title="New enrollment",
        message="Member {member_id} enrolled in {class_name} ({enrolled_count}/{capacity}).",
        priority=NotificationPriority.LOW,
    ),
    NotificationKind.WAITLISTED: NotificationTemplate(
        title="Added to the waitlist",
        message=(
            "{class_name} is full. You are number {waitlist_position} on the waitlist "
            "and will be notified if a seat frees up."
        ),
    ),
    NotificationKind.ENROLLMENT_CANCELLED: NotificationTemplate(
        title="Enrollment cancelled",
        message="Your enrollment in {class_name}{when} has been cancelled.",
    ),
    NotificationKind.WAITLIST_LEFT: NotificationTemplate(
        title="Removed from the waitlist",
        message="You are no longer on the waitlist for {class_name}.",
        priority=NotificationPriority.LOW,
    ),
    NotificationKind.SEAT_FREED: NotificationTemplate(
        title="A seat opened up",
        message="A seat freed up in {class_name}{when} and you are now enrolled.",
        priority=NotificationPriority.HIGH,
    ),
}


class _Defaults(dict[str, Any]):
    def __missing__(self, key: str) -> str:
        return ""


def render(
    kind: NotificationKind,
    context: Mapping[str, Any],
) -> tuple[str, str, NotificationPriority]:
    """Return ``(title, message, priority)`` for ``kind`` filled from ``context``.

    Missing context keys render as empty strings. ``when`` is derived from
    ``start_time`` when the caller did not supply it.
    """

    template = TEMPLATES[kind]
    values = _Defaults(context)
    values.setdefault("class_name", context.get("class_id", "your class"))
    if "when" not in values:
        start = context.get("start_time")
        values["when"] = f" on {start}" if start else ""
    return (
        template.title.format_map(values),
        template.message.format_map(values),
        template.priority,
    )


__all__ = ["TEMPLATES", "NotificationTemplate", "render"]
