"""Enrollment engine and service exports."""

from .engine import EnrollmentDecision, decide_cancel, decide_enroll
from .exceptions import (
    ContentionError,
    EnrollmentCancelledError,
    EnrollmentError,
    EnrollmentTimeoutError,
    RosterInvariantError,
)
from .service import DEFAULT_MAX_ATTEMPTS, EnrollmentService

__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "ContentionError",
    "EnrollmentCancelledError",
    "EnrollmentDecision",
    "EnrollmentError",
    "EnrollmentService",
    "EnrollmentTimeoutError",
    "RosterInvariantError",
    "decide_cancel",
    "decide_enroll",
]
