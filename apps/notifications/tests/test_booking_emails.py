from datetime import date, datetime, timezone
from decimal import Decimal
from unittest import mock

from django.core import mail

from apps.bookings.projections import BedInfo, BookingView, PackInfo, ServiceInfo
from apps.notifications.services import (
    send_booking_cancelled_email,
    send_booking_confirmation_email,
    send_email_notification,
)


def _view(**overrides) -> BookingView:
    stamp = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)
    data = dict(
        id=1,
        booking_reference="BK-20240501-A1B2",
        access_code="482913",
        guest_name="Nadia <b>Benali</b>",
        guest_email="nadia@example.com",
        guest_phone="+212600000000",
        check_in_date=date(2024, 6, 1),
        check_out_date=date(2024, 6, 3),
        nights=2,
        status="CONFIRMED",
        payment_status="UNPAID",
        total_price=Decimal("260.00"),
        currency="MAD",
        beds=(BedInfo(7, "2", 3, "104", "SINGLE", Decimal("100.00")),),
        services=(ServiceInfo(5, "Breakfast", Decimal("30.00"), "PER_NIGHT", "FOOD"),),
        pack=None,
        notes="",
        created_at=stamp,
        updated_at=stamp,
        version=0,
    )
    data.update(overrides)
    return BookingView(**data)


class TestBookingEmails:
    def test_confirmation_lists_booking_details(self, settings):
        settings.HOSTEL_NAME = "Dar Atlas Hostel"

        assert send_booking_confirmation_email(_view()) is True

        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.subject == "Booking BK-20240501-A1B2 confirmed"
        assert message.to == ["nadia@example.com"]
        html = message.alternatives[0][0]
        assert "482913" in html
        assert "01/06/2024" in html and "03/06/2024" in html
        assert "Bed 2, room 104" in html
        assert "Breakfast: 30.00 MAD per night" in html
        assert "260.00 MAD" in html
        assert "Dar Atlas Hostel" in html
        assert "&lt;b&gt;Benali&lt;/b&gt;" in html
        assert "<b>Benali</b>" not in html

    def test_confirmation_mentions_pack(self):
        view = _view(services=(), pack=PackInfo(2, "Surf week", 7, Decimal("900.00")))

        send_booking_confirmation_email(view)

        html = mail.outbox[0].alternatives[0][0]
        assert "Surf week" in html
        assert "<h3>Services</h3>" not in html

    def test_cancellation_notice(self):
        assert send_booking_cancelled_email(_view(status="CANCELLED")) is True

        assert mail.outbox[0].subject == "Booking BK-20240501-A1B2 cancelled"
        assert "has been cancelled" in mail.outbox[0].body

    def test_backend_failure_returns_false(self):
        with mock.patch("apps.notifications.services.send_mail", side_effect=OSError("smtp down")):
            assert send_email_notification("nadia@example.com", "Hi", "<p>Hi</p>") is False

        assert mail.outbox == []
