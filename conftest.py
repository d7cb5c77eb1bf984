"""Shared pytest fixtures: inventory builders and a deterministic allocator."""

from __future__ import annotations

import itertools
from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.application.command_handlers import CreateBookingCommand, CreateBookingHandler
from apps.bookings.domain.codes import BookingCodeGenerator, SeededRandomSource
from apps.inventory.models import Pack, RoomType, Service
from apps.inventory.services import create_room

TODAY = date(2024, 5, 1)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_room(db):
    numbers = itertools.count(101)

    def _make(room_type=RoomType.DOUBLE, price="100.00", number_of_beds=None, room_number=None):
        return create_room(
            room_number or str(next(numbers)),
            room_type,
            Decimal(price),
            number_of_beds=number_of_beds,
        )

    return _make


@pytest.fixture
def make_service(db):
    def _make(name="Airport transfer", price="50.00", price_type=Service.PriceType.FIXED, **extra):
        return Service.objects.create(
            name=name,
            price=Decimal(price),
            category=extra.pop("category", Service.Category.TRANSPORT),
            price_type=price_type,
            **extra,
        )

    return _make


@pytest.fixture
def make_pack(db):
    def _make(name="Surf week", promo_price="450.00", is_active=True, services=()):
        pack = Pack.objects.create(
            name=name,
            duration_days=7,
            original_price=Decimal("600.00"),
            promo_price=Decimal(promo_price),
            room_type=RoomType.DORTOIR,
            is_active=is_active,
        )
        pack.included_services.set(services)
        return pack

    return _make


@pytest.fixture
def create_handler() -> CreateBookingHandler:
    return CreateBookingHandler(
        code_generator=BookingCodeGenerator(SeededRandomSource(42)),
        clock=lambda: TODAY,
    )


def booking_command(beds, check_in, check_out, **overrides) -> CreateBookingCommand:
    data = {
        "guest_name": "Amina Tazi",
        "guest_email": "amina@example.com",
        "guest_phone": "+212 600-000000",
        "check_in": check_in,
        "check_out": check_out,
        "bed_ids": [bed.pk if hasattr(bed, "pk") else bed for bed in beds],
    }
    data.update(overrides)
    return CreateBookingCommand(**data)


@pytest.fixture
def book(db, create_handler):
    def _book(beds, check_in, check_out, **overrides):
        return create_handler.handle(booking_command(beds, check_in, check_out, **overrides))

    return _book


@pytest.fixture
def make_command():
    return booking_command
