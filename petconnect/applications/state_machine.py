"""Adoption application status lifecycle.

    pending -> approved -> completed
    pending -> rejected

``rejected`` and ``completed`` are terminal. Re-opening a rejected
application is not supported; the adopter submits a new one instead.
"""

from __future__ import annotations

from enum import StrEnum


class ApplicationStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


INITIAL_STATUS = ApplicationStatus.PENDING

ALLOWED_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.PENDING: frozenset(
        {ApplicationStatus.APPROVED, ApplicationStatus.REJECTED}
    ),
    ApplicationStatus.APPROVED: frozenset({ApplicationStatus.COMPLETED}),
    ApplicationStatus.REJECTED: frozenset(),
    ApplicationStatus.COMPLETED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)


class InvalidStatusError(ValueError):
    """Raised for a status literal outside the known set."""


class InvalidTransitionError(ValueError):
    """Raised when the lifecycle does not allow ``current -> requested``."""

    def __init__(self, current: ApplicationStatus, requested: ApplicationStatus) -> None:
        if current in TERMINAL_STATUSES:
            message = f"Application is already {current} and can no longer change"
        else:
            message = f"Cannot change status from {current} to {requested}"
        super().__init__(message)
        self.current = current
        self.requested = requested


def parse_status(value: object) -> ApplicationStatus:
    try:
        return ApplicationStatus(str(value).strip().lower())
    except ValueError as exc:
        raise InvalidStatusError(f"Invalid status: {value!r}") from exc


def can_transition(current: ApplicationStatus, requested: ApplicationStatus) -> bool:
    """Return whether ``requested`` is reachable in one step (or unchanged)."""
    return requested == current or requested in ALLOWED_TRANSITIONS[current]


def transition(
    current: ApplicationStatus, requested: ApplicationStatus
) -> ApplicationStatus:
    """Validate a status change and return the resulting status.

    Requesting the current status is a no-op rather than an error so a
    repeated click in the dashboard does not fail.
    """
    if not can_transition(current, requested):
        raise InvalidTransitionError(current, requested)
    return requested
