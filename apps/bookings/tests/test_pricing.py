"""Tests for price computation and the Money/DateRange value objects."""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from apps.bookings.domain.pricing import compute_total_price
from apps.inventory.models import Service
from shared.domain.value_objects import DateRange, Money


def _bed(price):
    return SimpleNamespace(room=SimpleNamespace(price_per_night=Decimal(price)))


def _service(price, price_type=Service.PriceType.FIXED):
    return Service(name="extra", price=Decimal(price), price_type=price_type)


def test_beds_are_priced_per_night():
    total = compute_total_price([_bed("100.00"), _bed("45.50")], [], None, 3)

    assert total == Money(Decimal("436.50"), "MAD")


def test_services_are_added_night_adjusted():
    services = [_service("30.00"), _service("7.25", Service.PriceType.PER_NIGHT)]

    total = compute_total_price([_bed("100.00")], services, None, 2)

    assert total.amount == Decimal("244.50")


@pytest.mark.parametrize("beds", [[_bed("10.00")], [_bed("500.00"), _bed("500.00"), _bed("90.00")]])
def test_pack_price_ignores_beds_and_nights(beds):
    pack = SimpleNamespace(promo_price=Decimal("450.00"))
    services = [_service("20.00"), _service("5.00", Service.PriceType.PER_NIGHT)]

    total = compute_total_price(beds, services, pack, 7)

    assert total.amount == Decimal("450.00") + Decimal("20.00") + Decimal("35.00")


def test_no_rounding_before_display():
    total = compute_total_price([_bed("33.333")], [], None, 3)

    assert total.amount == Decimal("99.999")
    assert total.quantized() == Decimal("100.00")
    assert str(total) == "100.00 MAD"


def test_stay_needs_a_night():
    with pytest.raises(ValueError):
        compute_total_price([_bed("10.00")], [], None, 0)


def test_money_rejects_mixed_currencies_and_negatives():
    with pytest.raises(ValueError):
        Money(Decimal("1"), "MAD") + Money(Decimal("1"), "EUR")
    with pytest.raises(ValueError):
        Money(Decimal("-1"))


def test_date_range_overlap_is_half_open():
    stay = DateRange(date(2024, 6, 1), date(2024, 6, 3))

    assert len(stay) == 2
    assert stay.overlaps_with(DateRange(date(2024, 6, 2), date(2024, 6, 4)))
    assert not stay.overlaps_with(DateRange(date(2024, 6, 3), date(2024, 6, 5)))
    assert not stay.overlaps_with(DateRange(date(2024, 5, 30), date(2024, 6, 1)))


@pytest.mark.parametrize("end", [date(2024, 6, 1), date(2024, 5, 31)])
def test_date_range_needs_one_night(end):
    with pytest.raises(ValueError):
        DateRange(date(2024, 6, 1), end)
