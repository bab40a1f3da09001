"""Domain models and enumerations."""

from .base import DomainModel
from .enums import (
    ClassStatus,
    EnrollmentResult,
    NotificationKind,
    NotificationPriority,
    RecipientType,
)
from .notification import Notification
from .outcome import EnrollmentOutcome, NotificationRequest
from .roster import ClassRecord
from .types import ClassId, InstructorId, JsonMapping, MemberId, NotificationId

__all__ = [
    "ClassId",
    "ClassRecord",
    "ClassStatus",
    "DomainModel",
    "EnrollmentOutcome",
    "EnrollmentResult",
    "InstructorId",
    "JsonMapping",
    "MemberId",
    "Notification",
    "NotificationId",
    "NotificationKind",
    "NotificationPriority",
    "NotificationRequest",
    "RecipientType",
]
