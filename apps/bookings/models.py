"""Booking domain models for the hostel."""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.base import AggregateRoot
from shared.domain.value_objects import DateRange

from .domain.status import BookingStatus, PaymentStatus


class Booking(AggregateRoot, models.Model):
    """Reservation of one or more beds for a contiguous range of nights."""

    Status = BookingStatus
    PaymentStatus = PaymentStatus

    booking_reference = models.CharField(max_length=20, unique=True, editable=False)
    access_code = models.CharField(max_length=6, unique=True, editable=False)
    guest_name = models.CharField(max_length=100)
    guest_email = models.EmailField()
    guest_phone = models.CharField(max_length=20)
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=BookingStatus.choices,
        default=BookingStatus.CONFIRMED,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID,
    )
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Computed once when the booking is allocated."),
    )
    currency = models.CharField(max_length=3, default="MAD")
    beds = models.ManyToManyField("inventory.Bed", related_name="bookings")
    services = models.ManyToManyField("inventory.Service", blank=True, related_name="bookings")
    pack = models.ForeignKey(
        "inventory.Pack",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bookings",
    )
    notes = models.TextField(blank=True, max_length=1000)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    version = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out_date__gt=models.F("check_in_date")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["check_in_date", "check_out_date"], name="booking_dates_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
            models.Index(fields=["guest_email"], name="booking_guest_email_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking {self.booking_reference} ({self.guest_name})"

    @property
    def dates(self) -> DateRange:
        return DateRange(self.check_in_date, self.check_out_date)

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days

    def clean(self) -> None:
        if self.check_in_date and self.check_out_date and self.check_out_date <= self.check_in_date:
            raise ValidationError(_("Check-out date must be after check-in date."))

    def save(self, *args, **kwargs):  # type: ignore
        self.clean()
        super().save(*args, **kwargs)
