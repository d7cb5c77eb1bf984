"""Domain services for inventory setup."""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import IntegrityError, transaction  # type: ignore

from .exceptions import RoomNumberTakenError
from .models import ROOM_TYPE_CAPACITY, Bed, Room, RoomType

logger = logging.getLogger(__name__)


def room_number_exists(room_number: str) -> bool:
    return Room.objects.filter(room_number=room_number).exists()


@transaction.atomic
def create_room(
    room_number: str,
    room_type: str,
    price_per_night: Decimal,
    *,
    number_of_beds: int | None = None,
    description: str = "",
) -> Room:
    """Create a room together with its beds.

    Beds are numbered "1".."n"; n defaults to the capacity of the room type.
    """

    if room_type not in RoomType.values:
        raise ValueError(f"Unknown room type: {room_type}")
    beds_count = number_of_beds if number_of_beds is not None else ROOM_TYPE_CAPACITY[room_type]
    if beds_count < 1:
        raise ValueError("A room needs at least one bed")
    if room_number_exists(room_number):
        raise RoomNumberTakenError(room_number)

    try:
        with transaction.atomic():
            room = Room.objects.create(
                room_number=room_number,
                room_type=room_type,
                price_per_night=price_per_night,
                description=description,
            )
    except IntegrityError as exc:
        # Concurrent insert of the same number between the check and the write.
        raise RoomNumberTakenError(room_number) from exc

    Bed.objects.bulk_create(
        [Bed(room=room, bed_number=str(number)) for number in range(1, beds_count + 1)]
    )
    logger.info(f"Created room {room.room_number} with {beds_count} beds")
    return room
