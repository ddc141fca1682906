from __future__ import annotations

import pytest

from petconnect.applications.state_machine import (
    INITIAL_STATUS,
    TERMINAL_STATUSES,
    ApplicationStatus,
    InvalidStatusError,
    InvalidTransitionError,
    can_transition,
    parse_status,
    transition,
)

PENDING = ApplicationStatus.PENDING
APPROVED = ApplicationStatus.APPROVED
REJECTED = ApplicationStatus.REJECTED
COMPLETED = ApplicationStatus.COMPLETED


def test_initial_and_terminal_statuses() -> None:
    assert INITIAL_STATUS is PENDING
    assert TERMINAL_STATUSES == {REJECTED, COMPLETED}


@pytest.mark.parametrize(
    ("current", "requested"),
    [(PENDING, APPROVED), (PENDING, REJECTED), (APPROVED, COMPLETED)],
)
def test_allowed_transitions(current: ApplicationStatus, requested: ApplicationStatus) -> None:
    assert transition(current, requested) is requested


@pytest.mark.parametrize(
    ("current", "requested"),
    [
        (PENDING, COMPLETED),
        (APPROVED, REJECTED),
        (APPROVED, PENDING),
        (REJECTED, PENDING),
        (REJECTED, APPROVED),
        (COMPLETED, PENDING),
        (COMPLETED, APPROVED),
    ],
)
def test_disallowed_transitions(current: ApplicationStatus, requested: ApplicationStatus) -> None:
    assert not can_transition(current, requested)
    with pytest.raises(InvalidTransitionError) as exc:
        transition(current, requested)

    assert exc.value.current is current
    assert exc.value.requested is requested


def test_same_status_is_a_no_op() -> None:
    for status in ApplicationStatus:
        assert transition(status, status) is status


def test_parse_status_accepts_known_literals_only() -> None:
    assert parse_status("approved") is APPROVED
    assert parse_status(" Rejected ") is REJECTED
    with pytest.raises(InvalidStatusError):
        parse_status("archived")
    with pytest.raises(InvalidStatusError):
        parse_status(None)


def test_transition_error_names_terminal_status() -> None:
    with pytest.raises(InvalidTransitionError) as from_terminal:
        transition(REJECTED, PENDING)
    with pytest.raises(InvalidTransitionError) as skipped:
        transition(PENDING, COMPLETED)

    assert str(from_terminal.value) == "Application is already rejected and can no longer change"
    assert str(skipped.value) == "Cannot change status from pending to completed"
