"""Exceptions for the enrollment engine and service."""

from __future__ import annotations


class EnrollmentError(RuntimeError):
    """Base class for non-business enrollment failures."""


class ContentionError(EnrollmentError):
    """Raised when the optimistic retry budget is exhausted."""


class EnrollmentTimeoutError(EnrollmentError):
    """Raised when the caller deadline passes between attempts."""


class EnrollmentCancelledError(EnrollmentError):
    """Raised when the caller signals cancellation between attempts."""


class RosterInvariantError(EnrollmentError):
    """Raised when a roster breaks its structural invariants."""

    def __init__(self, class_id: str, violations: list[str]) -> None:
        self.class_id = class_id
        self.violations = violations
        super().__init__(f"Roster for class {class_id} is inconsistent: {'; '.join(violations)}")


__all__ = [
    "ContentionError",
    "EnrollmentCancelledError",
    "EnrollmentError",
    "EnrollmentTimeoutError",
    "RosterInvariantError",
]
