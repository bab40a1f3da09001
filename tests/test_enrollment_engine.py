from __future__ import annotations

import pytest

from fitroster.domain import (
    ClassId,
    ClassRecord,
    ClassStatus,
    EnrollmentResult,
    InstructorId,
    MemberId,
    NotificationKind,
    RecipientType,
)
from fitroster.enrollment import (
    EnrollmentDecision,
    RosterInvariantError,
    decide_cancel,
    decide_enroll,
)


def _record(
    capacity: int = 2,
    enrolled: tuple[str, ...] = (),
    waitlist: tuple[str, ...] = (),
    status: ClassStatus = ClassStatus.SCHEDULED,
) -> ClassRecord:
    return ClassRecord(
        id=ClassId("spin-7"),
        name="Spin",
        instructor_id=InstructorId("coach-1"),
        capacity=capacity,
        enrolled=tuple(MemberId(m) for m in enrolled),
        waitlist=tuple(MemberId(m) for m in waitlist),
        status=status,
        revision=4,
    )


def _kinds(decision: EnrollmentDecision) -> list[tuple[str, NotificationKind]]:
    return [(n.recipient_id, n.kind) for n in decision.outcome.notifications]


def test_enroll_takes_free_seat_and_notifies_member_and_instructor() -> None:
    decision = decide_enroll(_record(enrolled=("a",)), MemberId("b"))

    assert decision.changed
    assert decision.outcome.result is EnrollmentResult.ENROLLED
    assert decision.next_state.enrolled == ("a", "b")
    assert decision.next_state.revision == 4
    assert _kinds(decision) == [
        ("b", NotificationKind.ENROLLED),
        ("coach-1", NotificationKind.NEW_ENROLLMENT),
    ]
    assert decision.outcome.notifications[1].recipient_type is RecipientType.TRAINER


def test_enroll_when_full_appends_to_waitlist_tail() -> None:
    decision = decide_enroll(_record(capacity=1, enrolled=("a",), waitlist=("b",)), MemberId("c"))

    assert decision.outcome.result is EnrollmentResult.WAITLISTED
    assert decision.outcome.waitlisted
    assert decision.next_state.enrolled == ("a",)
    assert decision.next_state.waitlist == ("b", "c")
    assert _kinds(decision) == [("c", NotificationKind.WAITLISTED)]


@pytest.mark.parametrize(
    ("member", "expected"),
    [
        ("a", EnrollmentResult.ALREADY_ENROLLED),
        ("b", EnrollmentResult.ALREADY_WAITLISTED),
    ],
)
def test_enroll_existing_member_is_noop(member: str, expected: EnrollmentResult) -> None:
    record = _record(capacity=1, enrolled=("a",), waitlist=("b",))

    decision = decide_enroll(record, MemberId(member))

    assert not decision.changed
    assert decision.outcome.result is expected
    assert decision.next_state is record
    assert decision.outcome.notifications == ()
    assert decision.outcome.revision == 4


@pytest.mark.parametrize("status", [ClassStatus.CANCELLED, ClassStatus.COMPLETED])
def test_closed_class_rejects_enroll_and_cancel(status: ClassStatus) -> None:
    record = _record(enrolled=("a",), status=status)

    enroll = decide_enroll(record, MemberId("b"))
    cancel = decide_cancel(record, MemberId("a"))

    assert enroll.outcome.result is EnrollmentResult.CLASS_UNAVAILABLE
    assert cancel.outcome.result is EnrollmentResult.CLASS_UNAVAILABLE
    assert enroll.next_state is record
    assert cancel.next_state is record


def test_cancel_unknown_member_is_idempotent_noop() -> None:
    record = _record(enrolled=("a",))

    decision = decide_cancel(record, MemberId("zed"))

    assert decision.outcome.result is EnrollmentResult.NOT_ENROLLED
    assert not decision.changed
    assert decision.outcome.notifications == ()


def test_cancel_from_waitlist_keeps_order_and_does_not_promote() -> None:
    record = _record(capacity=1, enrolled=("a",), waitlist=("b", "c", "d"))

    decision = decide_cancel(record, MemberId("c"))

    assert decision.outcome.result is EnrollmentResult.LEFT_WAITLIST
    assert decision.outcome.promoted is None
    assert decision.next_state.enrolled == ("a",)
    assert decision.next_state.waitlist == ("b", "d")
    assert _kinds(decision) == [("c", NotificationKind.WAITLIST_LEFT)]


def test_cancel_enrolled_promotes_waitlist_head() -> None:
    record = _record(capacity=2, enrolled=("a", "b"), waitlist=("c", "d"))

    decision = decide_cancel(record, MemberId("a"))

    assert decision.outcome.result is EnrollmentResult.CANCELLED
    assert decision.outcome.promoted == "c"
    assert decision.next_state.enrolled == ("b", "c")
    assert decision.next_state.waitlist == ("d",)
    assert _kinds(decision) == [
        ("a", NotificationKind.ENROLLMENT_CANCELLED),
        ("c", NotificationKind.SEAT_FREED),
    ]


def test_cancel_enrolled_with_empty_waitlist_only_confirms() -> None:
    decision = decide_cancel(_record(enrolled=("a", "b")), MemberId("b"))

    assert decision.outcome.promoted is None
    assert decision.next_state.enrolled == ("a",)
    assert _kinds(decision) == [("b", NotificationKind.ENROLLMENT_CANCELLED)]


def test_member_in_both_lists_is_reported_not_repaired() -> None:
    record = _record(capacity=2, enrolled=("a",), waitlist=("a",))

    with pytest.raises(RosterInvariantError) as excinfo:
        decide_cancel(record, MemberId("a"))
    with pytest.raises(RosterInvariantError):
        decide_enroll(record, MemberId("b"))

    assert excinfo.value.class_id == "spin-7"
    assert excinfo.value.violations


def test_over_capacity_roster_is_rejected() -> None:
    record = _record(capacity=1, enrolled=("a", "b"))

    with pytest.raises(RosterInvariantError):
        decide_enroll(record, MemberId("c"))
