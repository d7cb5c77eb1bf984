"""
Booking event handlers

Registered on the message bus when the app is ready. They run after the
transaction commits and only queue Celery tasks or write log lines, so a
broker outage is logged and never undoes a booking.
"""

import logging

from django.conf import settings

from shared.application.message_bus import message_bus
from apps.bookings.domain.events import (
    BookingCancelled,
    BookingCreated,
    BookingDeleted,
    BookingPaymentStatusChanged,
    BookingStatusChanged,
)

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('apps.bookings.audit')

AUDITED_EVENTS = (
    BookingStatusChanged,
    BookingPaymentStatusChanged,
    BookingCancelled,
    BookingDeleted,
)

_EVENT_METADATA = frozenset({'event_id', 'occurred_at', 'aggregate_id', 'booking_reference'})


def _notifications_enabled() -> bool:
    return getattr(settings, 'BOOKING_NOTIFICATIONS_ENABLED', True)


def queue_confirmation_email(event: BookingCreated):
    if not _notifications_enabled():
        return
    from apps.bookings.tasks import notify_booking_confirmed

    try:
        notify_booking_confirmed.delay(event.aggregate_id)
    except Exception as e:
        logger.error(
            f"Could not queue confirmation for booking {event.booking_reference}: {e}",
            exc_info=True
        )


def queue_cancellation_email(event: BookingCancelled):
    if not _notifications_enabled():
        return
    from apps.bookings.tasks import notify_booking_cancelled

    try:
        notify_booking_cancelled.delay(event.aggregate_id)
    except Exception as e:
        logger.error(
            f"Could not queue cancellation notice for booking {event.booking_reference}: {e}",
            exc_info=True
        )


def record_audit_entry(event):
    """One audit line per committed change made after creation"""
    changes = ", ".join(
        f"{name}={value}" for name, value in vars(event).items()
        if name not in _EVENT_METADATA
    )
    audit_logger.info(
        f"{type(event).__name__}: booking {event.booking_reference} "
        f"(ID: {event.aggregate_id}) {changes}"
    )


def register_handlers():
    message_bus.register_event_handler(BookingCreated, queue_confirmation_email)
    message_bus.register_event_handler(BookingCancelled, queue_cancellation_email)
    for event_type in AUDITED_EVENTS:
        message_bus.register_event_handler(event_type, record_audit_entry)
