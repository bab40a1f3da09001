"""Pure enrollment decisions over a class roster.

Nothing here performs I/O. Each function takes the roster as loaded and
returns the roster that should be written together with the business outcome
and the notifications to fan out once the write is durable. When the request
does not change the roster, ``next_state`` is the input record itself.
"""

from __future__ import annotations

from dataclasses import dataclass

from fitroster.domain import (
    ClassRecord,
    EnrollmentOutcome,
    EnrollmentResult,
    MemberId,
    NotificationKind,
    NotificationRequest,
    RecipientType,
)

from .exceptions import RosterInvariantError


@dataclass(frozen=True, slots=True)
class EnrollmentDecision:
    """Roster to persist plus the outcome reported to the caller."""

    next_state: ClassRecord
    outcome: EnrollmentOutcome

    @property
    def changed(self) -> bool:
        return self.outcome.changed


def _require_consistent(record: ClassRecord) -> None:
    violations = record.invariant_violations()
    if violations:
        raise RosterInvariantError(record.id, violations)


def _member_notice(member_id: MemberId, kind: NotificationKind) -> NotificationRequest:
    return NotificationRequest(
        recipient_id=member_id,
        recipient_type=RecipientType.MEMBER,
        kind=kind,
    )


def _unchanged(
    record: ClassRecord,
    member_id: MemberId,
    result: EnrollmentResult,
) -> EnrollmentDecision:
    outcome = EnrollmentOutcome(
        class_id=record.id,
        member_id=member_id,
        result=result,
        enrolled=record.enrolled,
        waitlist=record.waitlist,
        revision=record.revision,
    )
    return EnrollmentDecision(next_state=record, outcome=outcome)


def _changed(
    record: ClassRecord,
    member_id: MemberId,
    result: EnrollmentResult,
    *,
    enrolled: tuple[MemberId, ...],
    waitlist: tuple[MemberId, ...],
    notifications: tuple[NotificationRequest, ...],
    promoted: MemberId | None = None,
) -> EnrollmentDecision:
    next_state = record.model_copy(update={"enrolled": enrolled, "waitlist": waitlist})
    _require_consistent(next_state)
    outcome = EnrollmentOutcome(
        class_id=record.id,
        member_id=member_id,
        result=result,
        promoted=promoted,
        notifications=notifications,
        enrolled=enrolled,
        waitlist=waitlist,
        changed=True,
    )
    return EnrollmentDecision(next_state=next_state, outcome=outcome)


def decide_enroll(record: ClassRecord, member_id: MemberId) -> EnrollmentDecision:
    """Seat ``member_id`` if a spot is free, otherwise queue them at the tail."""

    _require_consistent(record)
    if not record.is_open:
        return _unchanged(record, member_id, EnrollmentResult.CLASS_UNAVAILABLE)
    if record.is_enrolled(member_id):
        return _unchanged(record, member_id, EnrollmentResult.ALREADY_ENROLLED)
    if record.is_waitlisted(member_id):
        return _unchanged(record, member_id, EnrollmentResult.ALREADY_WAITLISTED)

    if not record.is_full:
        return _changed(
            record,
            member_id,
            EnrollmentResult.ENROLLED,
            enrolled=(*record.enrolled, member_id),
            waitlist=record.waitlist,
            notifications=(
                _member_notice(member_id, NotificationKind.ENROLLED),
                NotificationRequest(
                    recipient_id=record.instructor_id,
                    recipient_type=RecipientType.TRAINER,
                    kind=NotificationKind.NEW_ENROLLMENT,
                ),
            ),
        )

    return _changed(
        record,
        member_id,
        EnrollmentResult.WAITLISTED,
        enrolled=record.enrolled,
        waitlist=(*record.waitlist, member_id),
        notifications=(_member_notice(member_id, NotificationKind.WAITLISTED),),
    )


def decide_cancel(record: ClassRecord, member_id: MemberId) -> EnrollmentDecision:
    """Release the member's seat or waitlist slot, promoting the waitlist head."""

    _require_consistent(record)
    if not record.is_open:
        return _unchanged(record, member_id, EnrollmentResult.CLASS_UNAVAILABLE)

    if record.is_waitlisted(member_id):
        return _changed(
            record,
            member_id,
            EnrollmentResult.LEFT_WAITLIST,
            enrolled=record.enrolled,
            waitlist=tuple(m for m in record.waitlist if m != member_id),
            notifications=(_member_notice(member_id, NotificationKind.WAITLIST_LEFT),),
        )

    if not record.is_enrolled(member_id):
        return _unchanged(record, member_id, EnrollmentResult.NOT_ENROLLED)

    enrolled = tuple(m for m in record.enrolled if m != member_id)
    notifications = [_member_notice(member_id, NotificationKind.ENROLLMENT_CANCELLED)]
    promoted: MemberId | None = None
    waitlist = record.waitlist
    if waitlist:
        promoted, waitlist = waitlist[0], waitlist[1:]
        enrolled = (*enrolled, promoted)
        notifications.append(_member_notice(promoted, NotificationKind.SEAT_FREED))

    return _changed(
        record,
        member_id,
        EnrollmentResult.CANCELLED,
        enrolled=enrolled,
        waitlist=waitlist,
        notifications=tuple(notifications),
        promoted=promoted,
    )


__all__ = ["EnrollmentDecision", "decide_cancel", "decide_enroll"]
