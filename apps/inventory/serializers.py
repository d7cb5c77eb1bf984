"""Serializers for the inventory domain."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import Bed, Pack, Room, RoomType, Service


class BedSerializer(serializers.ModelSerializer):
    class Meta:
        model = Bed
        fields = ["id", "bed_number", "is_available"]


class RoomSerializer(serializers.ModelSerializer):
    beds = BedSerializer(many=True, read_only=True)
    capacity = serializers.IntegerField(read_only=True)

    class Meta:
        model = Room
        fields = [
            "id",
            "room_number",
            "room_type",
            "description",
            "price_per_night",
            "is_active",
            "capacity",
            "beds",
            "created_at",
            "updated_at",
        ]


class RoomCreateSerializer(serializers.Serializer):
    room_number = serializers.CharField(max_length=10)
    room_type = serializers.ChoiceField(choices=RoomType.choices)
    price_per_night = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.01")
    )
    number_of_beds = serializers.IntegerField(min_value=1, required=False)
    description = serializers.CharField(required=False, allow_blank=True, default="")


class ServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Service
        fields = [
            "id",
            "name",
            "description",
            "category",
            "price",
            "price_type",
            "is_active",
        ]


class PackSerializer(serializers.ModelSerializer):
    included_services = ServiceSerializer(many=True, read_only=True)

    class Meta:
        model = Pack
        fields = [
            "id",
            "name",
            "description",
            "room_type",
            "duration_days",
            "original_price",
            "promo_price",
            "included_services",
            "is_active",
        ]
