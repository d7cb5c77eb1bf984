"""
Booking status state machine.

    PENDING ──► CONFIRMED ──► CHECKED_IN ──► CHECKED_OUT
       │            │
       └────────────┴──► CANCELLED

CANCELLED is terminal. CHECKED_OUT only accepts itself. CHECKED_IN can only
be reached from CONFIRMED. Any other move is allowed, including backwards
moves staff use to correct mistakes (e.g. CHECKED_IN -> CONFIRMED).
Payment status has no transition rules.
"""

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.exceptions import IllegalStateError, IllegalTransitionError


class BookingStatus(models.TextChoices):
    PENDING = "PENDING", _("Pending")
    CONFIRMED = "CONFIRMED", _("Confirmed")
    CHECKED_IN = "CHECKED_IN", _("Checked in")
    CHECKED_OUT = "CHECKED_OUT", _("Checked out")
    CANCELLED = "CANCELLED", _("Cancelled")


class PaymentStatus(models.TextChoices):
    UNPAID = "UNPAID", _("Unpaid")
    PARTIAL = "PARTIAL", _("Partially paid")
    PAID = "PAID", _("Paid")


# Bookings in these statuses no longer hold their beds.
RELEASED_STATUSES = (BookingStatus.CANCELLED, BookingStatus.CHECKED_OUT)


def can_transition(current: str, requested: str) -> bool:
    if current == BookingStatus.CANCELLED:
        return False
    if current == BookingStatus.CHECKED_OUT:
        return requested == BookingStatus.CHECKED_OUT
    if requested == BookingStatus.CHECKED_IN:
        return current == BookingStatus.CONFIRMED
    return True


def validate_transition(current: str, requested: str) -> None:
    if requested not in BookingStatus.values:
        raise IllegalTransitionError(current, requested)
    if not can_transition(current, requested):
        raise IllegalTransitionError(current, requested)


def ensure_cancellable(current: str) -> None:
    if current in (BookingStatus.CHECKED_IN, BookingStatus.CHECKED_OUT):
        raise IllegalStateError(
            f"Cannot cancel a booking that is {current}",
            details={"status": current},
        )
