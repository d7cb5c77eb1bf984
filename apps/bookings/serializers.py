"""Serializers for the booking API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.inventory.models import RoomType

from .application.command_handlers import CreateBookingCommand
from .domain.status import BookingStatus, PaymentStatus

PHONE_REGEX = r"^[+0-9][0-9\s\-().]{7,19}$"


class BookingCreateSerializer(serializers.Serializer):
    guest_name = serializers.CharField(min_length=2, max_length=100)
    guest_email = serializers.EmailField()
    guest_phone = serializers.RegexField(
        PHONE_REGEX,
        error_messages={"invalid": "Enter a valid phone number."},
    )
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    bed_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        min_length=1,
        max_length=10,
    )
    service_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        max_length=20,
        required=False,
        default=list,
    )
    pack_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")

    def validate(self, attrs):  # type: ignore
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError({"check_out": "Check-out date must be after check-in date."})
        return attrs

    def to_command(self) -> CreateBookingCommand:
        data = self.validated_data
        return CreateBookingCommand(
            guest_name=data["guest_name"],
            guest_email=data["guest_email"],
            guest_phone=data["guest_phone"],
            check_in=data["check_in"],
            check_out=data["check_out"],
            bed_ids=tuple(data["bed_ids"]),
            service_ids=tuple(data.get("service_ids") or ()),
            pack_id=data.get("pack_id"),
            notes=data.get("notes", ""),
        )


class BedInfoSerializer(serializers.Serializer):
    bed_id = serializers.IntegerField()
    bed_number = serializers.CharField()
    room_id = serializers.IntegerField()
    room_number = serializers.CharField()
    room_type = serializers.CharField()
    price_per_night = serializers.DecimalField(max_digits=10, decimal_places=2)


class ServiceInfoSerializer(serializers.Serializer):
    service_id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    price_type = serializers.CharField()
    category = serializers.CharField()


class PackInfoSerializer(serializers.Serializer):
    pack_id = serializers.IntegerField()
    name = serializers.CharField()
    duration_days = serializers.IntegerField()
    promo_price = serializers.DecimalField(max_digits=10, decimal_places=2)


class BookingViewSerializer(serializers.Serializer):
    """Renders a BookingView; read only."""

    id = serializers.IntegerField()
    booking_reference = serializers.CharField()
    access_code = serializers.CharField()
    guest_name = serializers.CharField()
    guest_email = serializers.EmailField()
    guest_phone = serializers.CharField()
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()
    nights = serializers.IntegerField()
    status = serializers.CharField()
    payment_status = serializers.CharField()
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()
    beds = BedInfoSerializer(many=True)
    services = ServiceInfoSerializer(many=True)
    pack = PackInfoSerializer(allow_null=True)
    notes = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    version = serializers.IntegerField()


class BookingStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BookingStatus.choices)
    expected_version = serializers.IntegerField(min_value=0, required=False, allow_null=True)


class PaymentStatusUpdateSerializer(serializers.Serializer):
    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices)
    expected_version = serializers.IntegerField(min_value=0, required=False, allow_null=True)


class CancelBookingSerializer(serializers.Serializer):
    expected_version = serializers.IntegerField(min_value=0, required=False, allow_null=True)


class DateRangeQuerySerializer(serializers.Serializer):
    check_in = serializers.DateField()
    check_out = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError({"check_out": "Check-out date must be after check-in date."})
        return attrs


class AvailableRoomsQuerySerializer(DateRangeQuerySerializer):
    room_type = serializers.ChoiceField(choices=RoomType.choices, required=False)


class BedAvailabilityRequestSerializer(DateRangeQuerySerializer):
    bed_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        min_length=1,
        max_length=10,
    )


class AvailabilityReportSerializer(serializers.Serializer):
    room_id = serializers.IntegerField()
    room_number = serializers.CharField()
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    is_available = serializers.BooleanField()
    available_beds = serializers.IntegerField()
    available_bed_ids = serializers.ListField(child=serializers.IntegerField())
    next_available_date = serializers.DateField(allow_null=True)


class BedAvailabilityReportSerializer(serializers.Serializer):
    bed_ids = serializers.ListField(child=serializers.IntegerField())
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    is_available = serializers.BooleanField()
    unavailable_bed_ids = serializers.ListField(child=serializers.IntegerField())
