"""
Booking Exceptions

Errors raised by the booking command handlers and availability services.
"""

from typing import Any, Dict, Optional

from shared.application.exceptions import ApplicationError


class BookingValidationError(ApplicationError):
    """Request parameters are invalid; retrying the same request cannot succeed"""

    error_code = "BOOKING_VALIDATION_ERROR"
    status_code = 400


class BookingConflictError(ApplicationError):
    """
    A requested bed is already taken for an overlapping date range

    details carry bed_id, bed_number and room_number when a specific bed
    caused the conflict.
    """

    error_code = "BOOKING_CONFLICT"
    status_code = 409
    retryable = False

    def __init__(
        self,
        message: str,
        *,
        bed_id: Optional[int] = None,
        bed_number: Optional[str] = None,
        room_number: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if bed_id is not None:
            details.update(bed_id=bed_id, bed_number=bed_number, room_number=room_number)
        super().__init__(message, details)
        self.bed_id = bed_id
        self.bed_number = bed_number
        self.room_number = room_number


class ConcurrencyConflictError(BookingConflictError):
    """The store aborted the transaction because of a concurrent write"""

    error_code = "CONCURRENCY_CONFLICT"
    retryable = True


class StaleBookingError(ConcurrencyConflictError):
    """The booking version changed since the caller last read it"""

    error_code = "STALE_BOOKING"

    def __init__(self, booking_id: int, expected_version: Optional[int] = None):
        super().__init__(
            f"Booking {booking_id} was modified concurrently",
            details={"booking_id": booking_id, "expected_version": expected_version},
        )


class IllegalTransitionError(ApplicationError):
    """Requested status change is not allowed from the current status"""

    error_code = "ILLEGAL_TRANSITION"
    status_code = 409

    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Cannot change booking status from {current} to {requested}",
            details={"current": current, "requested": requested},
        )


class IllegalStateError(ApplicationError):
    """Operation is not allowed in the booking's current status"""

    error_code = "ILLEGAL_STATE"
    status_code = 409
