"""Enumerations used across the Fitroster domain layer."""

from __future__ import annotations

from enum import StrEnum


class ClassStatus(StrEnum):
    """Lifecycle of a scheduled group class."""

    SCHEDULED = "scheduled"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class EnrollmentResult(StrEnum):
    """Business-level result of an enroll or cancel request."""

    ENROLLED = "enrolled"
    WAITLISTED = "waitlisted"
    ALREADY_ENROLLED = "already_enrolled"
    ALREADY_WAITLISTED = "already_waitlisted"
    NOT_ENROLLED = "not_enrolled"
    CLASS_UNAVAILABLE = "class_unavailable"
    CANCELLED = "cancelled"
    LEFT_WAITLIST = "left_waitlist"


class NotificationKind(StrEnum):
    """Template selector for roster notifications."""

    ENROLLED = "enrolled"
    NEW_ENROLLMENT = "new_enrollment"
    WAITLISTED = "waitlisted"
    ENROLLMENT_CANCELLED = "enrollment_cancelled"
    WAITLIST_LEFT = "waitlist_left"
    SEAT_FREED = "seat_freed"


class RecipientType(StrEnum):
    """Audience a notification is addressed to."""

    MEMBER = "member"
    TRAINER = "trainer"


class NotificationPriority(StrEnum):
    """Relative urgency shown in the member inbox."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


__all__ = [
    "ClassStatus",
    "EnrollmentResult",
    "NotificationKind",
    "NotificationPriority",
    "RecipientType",
]
