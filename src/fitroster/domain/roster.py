"""Group class roster domain model."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import Field, field_validator, model_validator

from fitroster.utils import to_utc, utc_now

from .base import DomainModel
from .enums import ClassStatus
from .types import ClassId, InstructorId, MemberId


def _duplicates(members: Iterable[MemberId]) -> list[MemberId]:
    return [member for member, count in Counter(members).items() if count > 1]


class ClassRecord(DomainModel):
    """Persisted roster state of a scheduled group class.

    ``enrolled`` holds confirmed seats in booking order and ``waitlist`` is a
    FIFO queue whose head is the next member to be promoted. ``revision`` is
    owned by the store and advances on every successful write.
    """

    id: ClassId
    name: Annotated[str, Field(min_length=1)]
    instructor_id: InstructorId
    capacity: Annotated[int, Field(gt=0)]
    enrolled: tuple[MemberId, ...] = ()
    waitlist: tuple[MemberId, ...] = ()
    status: ClassStatus = ClassStatus.SCHEDULED
    revision: Annotated[int, Field(ge=0)] = 0
    description: str | None = None
    location: str | None = None
    difficulty: str | None = None
    price: Annotated[Decimal, Field(ge=0)] = Decimal("0")
    start_time: datetime | None = None
    end_time: datetime | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("start_time", "end_time", "created_at", "updated_at", mode="before")
    @classmethod
    def ensure_timezone(cls, value: datetime | str | None) -> datetime | None:
        return None if value is None else to_utc(value)

    @model_validator(mode="after")
    def check_schedule(self) -> ClassRecord:
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            msg = "end_time must be after start_time"
            raise ValueError(msg)
        return self

    @property
    def is_open(self) -> bool:
        return self.status is ClassStatus.SCHEDULED

    @property
    def available_spots(self) -> int:
        return max(0, self.capacity - len(self.enrolled))

    @property
    def is_full(self) -> bool:
        return len(self.enrolled) >= self.capacity

    def is_enrolled(self, member_id: MemberId) -> bool:
        return member_id in self.enrolled

    def is_waitlisted(self, member_id: MemberId) -> bool:
        return member_id in self.waitlist

    def position_of(self, member_id: MemberId) -> int | None:
        """Return the 1-based waitlist position of ``member_id``."""

        try:
            return self.waitlist.index(member_id) + 1
        except ValueError:
            return None

    def invariant_violations(self) -> list[str]:
        """Describe every roster invariant this record breaks.

        Construction never rejects a broken roster; corrupt stored data is
        reported at decision time instead of failing to load.
        """

        problems: list[str] = []
        if len(self.enrolled) > self.capacity:
            problems.append(
                f"class {self.id} has {len(self.enrolled)} enrolled members "
                f"but capacity {self.capacity}"
            )
        dup_enrolled = _duplicates(self.enrolled)
        if dup_enrolled:
            problems.append(f"duplicate enrolled members: {', '.join(dup_enrolled)}")
        dup_waitlist = _duplicates(self.waitlist)
        if dup_waitlist:
            problems.append(f"duplicate waitlisted members: {', '.join(dup_waitlist)}")
        overlap = sorted(set(self.enrolled) & set(self.waitlist))
        if overlap:
            problems.append(f"members both enrolled and waitlisted: {', '.join(overlap)}")
        return problems


__all__ = ["ClassRecord"]
