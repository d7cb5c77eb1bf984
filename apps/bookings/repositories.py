"""Booking queries returning fully loaded read views."""

from __future__ import annotations

from datetime import date
from typing import List

from django.db.models import Prefetch, QuerySet  # type: ignore

from apps.inventory.models import Bed, Service
from shared.application.exceptions import ResourceNotFoundError

from .domain.status import BookingStatus
from .models import Booking
from .projections import BookingView


class BookingRepository:
    """Loads bookings with all the associations a BookingView needs in one go."""

    @staticmethod
    def base_queryset() -> QuerySet:
        return Booking.objects.select_related("pack").prefetch_related(
            Prefetch("beds", queryset=Bed.objects.select_related("room").order_by("id")),
            Prefetch("services", queryset=Service.objects.order_by("id")),
        )

    def _get_view(self, lookup: str, **filters) -> BookingView:
        try:
            booking = self.base_queryset().get(**filters)
        except Booking.DoesNotExist as exc:
            raise ResourceNotFoundError("Booking", lookup) from exc
        return BookingView.from_booking(booking)

    def get_view(self, booking_id: int) -> BookingView:
        return self._get_view(booking_id, pk=booking_id)

    def get_view_by_reference(self, reference: str) -> BookingView:
        return self._get_view(reference, booking_reference=reference)

    def get_view_by_access_code(self, access_code: str) -> BookingView:
        return self._get_view(access_code, access_code=access_code)

    def get(self, booking_id: int) -> Booking:
        try:
            return Booking.objects.get(pk=booking_id)
        except Booking.DoesNotExist as exc:
            raise ResourceNotFoundError("Booking", booking_id) from exc

    def check_ins_on(self, day: date) -> List[BookingView]:
        """Arrivals expected on `day` (cancelled bookings left out)."""
        queryset = (
            self.base_queryset()
            .filter(check_in_date=day)
            .exclude(status=BookingStatus.CANCELLED)
            .order_by("id")
        )
        return [BookingView.from_booking(booking) for booking in queryset]

    def check_outs_on(self, day: date) -> List[BookingView]:
        """Departures expected on `day` (cancelled bookings left out)."""
        queryset = (
            self.base_queryset()
            .filter(check_out_date=day)
            .exclude(status=BookingStatus.CANCELLED)
            .order_by("id")
        )
        return [BookingView.from_booking(booking) for booking in queryset]
