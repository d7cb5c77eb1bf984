"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from apps.notifications.services import (
    send_booking_cancelled_email,
    send_booking_confirmation_email,
)
from shared.application.exceptions import ResourceNotFoundError

from .repositories import BookingRepository

logger = logging.getLogger(__name__)


@shared_task(name="bookings.notify_booking_confirmed")
def notify_booking_confirmed(booking_id: int) -> bool:
    """Email the guest their booking confirmation."""

    try:
        view = BookingRepository().get_view(booking_id)
    except ResourceNotFoundError:
        logger.warning(f"Booking {booking_id} disappeared before its confirmation was sent")
        return False

    return send_booking_confirmation_email(view)


@shared_task(name="bookings.notify_booking_cancelled")
def notify_booking_cancelled(booking_id: int) -> bool:
    """Email the guest that their booking was cancelled."""

    try:
        view = BookingRepository().get_view(booking_id)
    except ResourceNotFoundError:
        logger.warning(f"Booking {booking_id} disappeared before its cancellation notice was sent")
        return False

    return send_booking_cancelled_email(view)
