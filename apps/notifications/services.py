"""Notification services for sending booking emails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import escape, strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.projections import BookingView

logger = logging.getLogger(__name__)


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(
    recipient_email: str,
    subject: str,
    html_message: str,
) -> bool:
    """
    Send one email with an HTML body and its plain-text fallback.

    Returns:
        bool: True if the message was handed to the mail backend
    """
    try:
        send_mail(
            subject=subject,
            message=strip_tags(html_message),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def _format_date(value) -> str:
    return value.strftime("%d/%m/%Y")


def _beds_html(view: "BookingView") -> str:
    return "".join(
        f"<li>Bed {escape(bed.bed_number)}, room {escape(bed.room_number)}</li>"
        for bed in view.beds
    )


def _services_html(view: "BookingView") -> str:
    if not view.services:
        return ""
    items = "".join(
        f"<li>{escape(service.name)}: {service.price} {view.currency}"
        f"{' per night' if service.price_type == 'PER_NIGHT' else ''}</li>"
        for service in view.services
    )
    return f"<h3>Services</h3><ul>{items}</ul>"


def _pack_html(view: "BookingView") -> str:
    if view.pack is None:
        return ""
    return (
        f"<p><strong>Pack:</strong> {escape(view.pack.name)} "
        f"({view.pack.duration_days} days, {view.pack.promo_price} {view.currency})</p>"
    )


def send_booking_confirmation_email(view: "BookingView") -> bool:
    """Booking confirmation with the guest's reference and access code."""
    subject = f"Booking {view.booking_reference} confirmed"

    html_message = f"""
    <html>
    <body>
        <h2>Hello {escape(view.guest_name)},</h2>
        <p>Your booking is confirmed.</p>

        <h3>Booking details</h3>
        <ul>
            <li><strong>Reference:</strong> {view.booking_reference}</li>
            <li><strong>Access code:</strong> {view.access_code}</li>
            <li><strong>Check-in:</strong> {_format_date(view.check_in_date)}</li>
            <li><strong>Check-out:</strong> {_format_date(view.check_out_date)}</li>
            <li><strong>Nights:</strong> {view.nights}</li>
        </ul>

        <h3>Beds</h3>
        <ul>{_beds_html(view)}</ul>
        {_services_html(view)}
        {_pack_html(view)}

        <p><strong>Total:</strong> {view.total_price} {view.currency}</p>

        <p>Keep your access code to look up your booking at any time.</p>

        <p>See you soon,<br>{escape(settings.HOSTEL_NAME)}</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=view.guest_email,
        subject=subject,
        html_message=html_message,
    )


def send_booking_cancelled_email(view: "BookingView") -> bool:
    """Notice sent after a booking has been cancelled."""
    subject = f"Booking {view.booking_reference} cancelled"

    html_message = f"""
    <html>
    <body>
        <h2>Hello {escape(view.guest_name)},</h2>
        <p>Your booking <strong>{view.booking_reference}</strong> for
        {_format_date(view.check_in_date)} - {_format_date(view.check_out_date)}
        has been cancelled.</p>

        <p>If you did not ask for this cancellation, please contact us.</p>

        <p>{escape(settings.HOSTEL_NAME)}</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=view.guest_email,
        subject=subject,
        html_message=html_message,
    )
