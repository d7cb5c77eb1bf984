"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    """Read-only view; bookings are created and changed through the API handlers."""

    list_display = (
        "booking_reference",
        "guest_name",
        "guest_email",
        "status",
        "payment_status",
        "check_in_date",
        "check_out_date",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "payment_status", "check_in_date", "check_out_date")
    search_fields = ("booking_reference", "access_code", "guest_name", "guest_email")
    readonly_fields = (
        "booking_reference",
        "access_code",
        "guest_name",
        "guest_email",
        "guest_phone",
        "check_in_date",
        "check_out_date",
        "status",
        "payment_status",
        "total_price",
        "currency",
        "beds",
        "services",
        "pack",
        "notes",
        "created_at",
        "updated_at",
        "version",
    )

    def has_add_permission(self, request) -> bool:  # type: ignore
        return False
