"""Ephemeral results produced by enrollment decisions."""

from __future__ import annotations

from .base import DomainModel
from .enums import EnrollmentResult, NotificationKind, RecipientType
from .types import ClassId, MemberId


class NotificationRequest(DomainModel):
    """A single notification the service should fan out after commit."""

    recipient_id: str
    recipient_type: RecipientType = RecipientType.MEMBER
    kind: NotificationKind


class EnrollmentOutcome(DomainModel):
    """Business result of an enroll/cancel request, never persisted."""

    class_id: ClassId
    member_id: MemberId
    result: EnrollmentResult
    promoted: MemberId | None = None
    notifications: tuple[NotificationRequest, ...] = ()
    enrolled: tuple[MemberId, ...] = ()
    waitlist: tuple[MemberId, ...] = ()
    revision: int | None = None
    changed: bool = False

    @property
    def waitlisted(self) -> bool:
        return self.result is EnrollmentResult.WAITLISTED


__all__ = ["EnrollmentOutcome", "NotificationRequest"]
