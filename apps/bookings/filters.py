"""FilterSet definitions for the staff booking listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .domain.status import BookingStatus, PaymentStatus
from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=BookingStatus.choices)
    payment_status = django_filters.ChoiceFilter(choices=PaymentStatus.choices)
    check_in_date = django_filters.DateFilter(field_name="check_in_date")
    check_out_date = django_filters.DateFilter(field_name="check_out_date")
    check_in_from = django_filters.DateFilter(field_name="check_in_date", lookup_expr="gte")
    check_in_to = django_filters.DateFilter(field_name="check_in_date", lookup_expr="lte")
    guest_email = django_filters.CharFilter(method="filter_guest_email")

    class Meta:
        model = Booking
        fields = [
            "status",
            "payment_status",
            "check_in_date",
            "check_out_date",
        ]

    def filter_guest_email(self, queryset, name, value):  # type: ignore
        # Emails are stored normalised
        return queryset.filter(guest_email=value.strip().lower())
