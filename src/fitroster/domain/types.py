"""Shared type aliases for the domain layer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NewType
from uuid import UUID

ClassId = NewType("ClassId", str)
MemberId = NewType("MemberId", str)
InstructorId = NewType("InstructorId", str)
NotificationId = NewType("NotificationId", UUID)
JsonMapping = Mapping[str, Any]

__all__ = [
    "ClassId",
    "InstructorId",
    "JsonMapping",
    "MemberId",
    "NotificationId",
]
