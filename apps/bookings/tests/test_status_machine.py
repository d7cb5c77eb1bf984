"""Tests for booking status transition rules."""

import pytest

from apps.bookings.domain.status import (
    BookingStatus,
    can_transition,
    ensure_cancellable,
    validate_transition,
)
from apps.bookings.exceptions import IllegalStateError, IllegalTransitionError

ALL = list(BookingStatus.values)


@pytest.mark.parametrize("requested", ALL)
def test_cancelled_is_terminal(requested):
    with pytest.raises(IllegalTransitionError):
        validate_transition(BookingStatus.CANCELLED, requested)


@pytest.mark.parametrize("requested", ALL)
def test_checked_out_only_accepts_itself(requested):
    assert can_transition(BookingStatus.CHECKED_OUT, requested) == (requested == BookingStatus.CHECKED_OUT)


@pytest.mark.parametrize("current", [BookingStatus.PENDING, BookingStatus.CHECKED_IN])
def test_check_in_requires_confirmed(current):
    with pytest.raises(IllegalTransitionError) as excinfo:
        validate_transition(current, BookingStatus.CHECKED_IN)
    assert excinfo.value.details == {"current": current, "requested": BookingStatus.CHECKED_IN}


@pytest.mark.parametrize(
    "current, requested",
    [
        (BookingStatus.PENDING, BookingStatus.CONFIRMED),
        (BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN),
        (BookingStatus.CONFIRMED, BookingStatus.CANCELLED),
        (BookingStatus.CHECKED_IN, BookingStatus.CHECKED_OUT),
        (BookingStatus.CHECKED_IN, BookingStatus.CANCELLED),
        (BookingStatus.CHECKED_IN, BookingStatus.CONFIRMED),
        (BookingStatus.CONFIRMED, BookingStatus.PENDING),
    ],
)
def test_other_transitions_are_allowed(current, requested):
    validate_transition(current, requested)


def test_unknown_status_is_rejected():
    with pytest.raises(IllegalTransitionError):
        validate_transition(BookingStatus.CONFIRMED, "ARCHIVED")


@pytest.mark.parametrize("current", [BookingStatus.CHECKED_IN, BookingStatus.CHECKED_OUT])
def test_started_or_finished_stays_cannot_be_cancelled(current):
    with pytest.raises(IllegalStateError):
        ensure_cancellable(current)


@pytest.mark.parametrize("current", [BookingStatus.PENDING, BookingStatus.CONFIRMED])
def test_upcoming_stays_can_be_cancelled(current):
    ensure_cancellable(current)
