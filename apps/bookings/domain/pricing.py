"""
Booking price calculation.

A pack replaces per-bed pricing with its flat promo price, whatever the
number of beds or nights. Services are always added on top, night-adjusted
for PER_NIGHT services. Amounts stay unrounded until display.
"""

from typing import Iterable, Optional

from shared.domain.value_objects import Money


def compute_total_price(
    beds: Iterable,
    services: Iterable,
    pack: Optional[object],
    nights: int,
    currency: str = 'MAD',
) -> Money:
    """
    Compute the total price of a stay

    beds must expose `room.price_per_night`; services expose `total_for(nights)`;
    pack exposes `promo_price`.
    """
    if nights < 1:
        raise ValueError("A stay has at least one night")

    if pack is not None:
        total = Money(pack.promo_price, currency)
    else:
        total = Money.zero(currency)
        for bed in beds:
            total += Money(bed.room.price_per_night, currency) * nights

    for service in services:
        total += Money(service.total_for(nights), currency)

    return total
