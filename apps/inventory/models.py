"""Inventory models: rooms, beds, extra services and packs.

Inventory is read-mostly reference data for the booking core. A bed is the
unit of allocation; beds belong to a room and only keep the room's id, the
room never stores references to its beds.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class RoomType(models.TextChoices):
    DOUBLE = "DOUBLE", _("Double room")
    SINGLE = "SINGLE", _("Single room")
    DORTOIR = "DORTOIR", _("Dormitory")


ROOM_TYPE_CAPACITY = {
    RoomType.DOUBLE: 1,
    RoomType.SINGLE: 2,
    RoomType.DORTOIR: 8,
}


class Room(models.Model):
    """Physical room grouping one or more beds under a single nightly price."""

    room_number = models.CharField(max_length=10, unique=True)
    room_type = models.CharField(max_length=20, choices=RoomType.choices)
    description = models.TextField(blank=True)
    price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["room_number"]
        indexes = [
            models.Index(fields=["room_type"], name="room_type_idx"),
            models.Index(fields=["is_active"], name="room_active_idx"),
        ]

    def __str__(self) -> str:
        return f"Room {self.room_number} ({self.get_room_type_display()})"

    @property
    def capacity(self) -> int:
        return ROOM_TYPE_CAPACITY.get(self.room_type, 0)

    @property
    def total_beds(self) -> int:
        return Bed.objects.filter(room_id=self.pk).count()

    @property
    def available_beds_count(self) -> int:
        """Beds not taken out of service by staff (not date availability)."""
        return Bed.objects.filter(room_id=self.pk, is_available=True).count()

    @property
    def has_available_beds(self) -> bool:
        return self.available_beds_count > 0


class Bed(models.Model):
    """Smallest unit of inventory that can be reserved for a date range."""

    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="beds")
    bed_number = models.CharField(max_length=10)
    is_available = models.BooleanField(
        default=True,
        help_text=_("Administrative flag, unrelated to date-range availability."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Bed")
        verbose_name_plural = _("Beds")
        ordering = ["room_id", "id"]
        constraints = [
            models.UniqueConstraint(fields=["room", "bed_number"], name="uk_room_bed_number"),
        ]

    def __str__(self) -> str:
        return f"Bed {self.bed_number} (room #{self.room_id})"


class Service(models.Model):
    """Optional extra sold with a booking (transport, meals, activities)."""

    class Category(models.TextChoices):
        TRANSPORT = "TRANSPORT", _("Transport")
        MEAL = "MEAL", _("Meals")
        ACTIVITY = "ACTIVITY", _("Activities")
        OTHER = "OTHER", _("Other")

    class PriceType(models.TextChoices):
        FIXED = "FIXED", _("Charged once for the stay")
        PER_NIGHT = "PER_NIGHT", _("Multiplied by the number of nights")

    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    category = models.CharField(max_length=20, choices=Category.choices)
    price_type = models.CharField(max_length=20, choices=PriceType.choices, default=PriceType.FIXED)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Service")
        verbose_name_plural = _("Services")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["category"], name="service_category_idx"),
            models.Index(fields=["is_active"], name="service_active_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    def total_for(self, nights: int) -> Decimal:
        if self.price_type == self.PriceType.PER_NIGHT:
            return self.price * nights
        return self.price


class Pack(models.Model):
    """Flat-priced bundle; its promo price replaces per-bed pricing."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    duration_days = models.PositiveIntegerField()
    original_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    promo_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    room_type = models.CharField(max_length=20, choices=RoomType.choices)
    included_services = models.ManyToManyField(Service, blank=True, related_name="packs")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Pack")
        verbose_name_plural = _("Packs")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
