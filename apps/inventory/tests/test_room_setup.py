"""Tests for room creation and inventory models."""

from __future__ import annotations

from decimal import Decimal

import pytest

from apps.inventory.exceptions import RoomNumberTakenError
from apps.inventory.models import Bed, Room, RoomType, Service
from apps.inventory.services import create_room, room_number_exists


@pytest.mark.django_db
@pytest.mark.parametrize(
    "room_type, expected_beds",
    [(RoomType.DOUBLE, 1), (RoomType.SINGLE, 2), (RoomType.DORTOIR, 8)],
)
def test_create_room_adds_one_bed_per_capacity_slot(room_type, expected_beds):
    room = create_room("12", room_type, Decimal("80.00"))

    bed_numbers = list(Bed.objects.filter(room=room).order_by("id").values_list("bed_number", flat=True))
    assert bed_numbers == [str(n) for n in range(1, expected_beds + 1)]
    assert room.capacity == expected_beds
    assert room.total_beds == expected_beds


@pytest.mark.django_db
def test_number_of_beds_overrides_capacity():
    room = create_room("D1", RoomType.DORTOIR, Decimal("40.00"), number_of_beds=4)

    assert room.total_beds == 4


@pytest.mark.django_db
def test_duplicate_room_number_is_rejected():
    create_room("7", RoomType.DOUBLE, Decimal("100.00"))

    with pytest.raises(RoomNumberTakenError) as excinfo:
        create_room("7", RoomType.SINGLE, Decimal("90.00"))

    assert excinfo.value.status_code == 409
    assert excinfo.value.details == {"room_number": "7"}
    assert Room.objects.count() == 1
    assert room_number_exists("7")
    assert not room_number_exists("8")


@pytest.mark.django_db
def test_invalid_room_setup_is_rejected():
    with pytest.raises(ValueError):
        create_room("9", "SUITE", Decimal("100.00"))
    with pytest.raises(ValueError):
        create_room("9", RoomType.DOUBLE, Decimal("100.00"), number_of_beds=0)
    assert not Room.objects.exists()


@pytest.mark.django_db
def test_administrative_bed_flag_counts():
    room = create_room("3", RoomType.SINGLE, Decimal("60.00"))
    Bed.objects.filter(room=room, bed_number="1").update(is_available=False)

    assert room.available_beds_count == 1
    assert room.has_available_beds

    Bed.objects.filter(room=room).update(is_available=False)
    assert not room.has_available_beds


def test_service_total_depends_on_price_type():
    fixed = Service(name="Transfer", price=Decimal("30.00"), price_type=Service.PriceType.FIXED)
    nightly = Service(name="Breakfast", price=Decimal("5.50"), price_type=Service.PriceType.PER_NIGHT)

    assert fixed.total_for(3) == Decimal("30.00")
    assert nightly.total_for(3) == Decimal("16.50")
