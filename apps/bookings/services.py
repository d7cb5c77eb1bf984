"""Overlap queries and availability checks for beds and rooms.

Every query here is read-only. Called inside the allocator's unit of work
they run at its isolation level, which is what makes the in-transaction
re-check meaningful.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Max, QuerySet  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.inventory.models import Bed, Room
from shared.application.exceptions import ResourceNotFoundError

from .domain.status import RELEASED_STATUSES
from .models import Booking

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_HORIZON_DAYS = 60


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _active_overlapping(bed_ids_subquery, check_in: date, check_out: date) -> QuerySet:
    if check_in >= check_out:
        return Booking.objects.none()
    # Filtering through the M2M table keeps one row per booking.
    booking_ids = Booking.beds.through.objects.filter(bed_id__in=bed_ids_subquery).values("booking_id")
    return (
        Booking.objects.filter(pk__in=booking_ids)
        .exclude(status__in=RELEASED_STATUSES)
        .filter(check_in_date__lt=check_out, check_out_date__gt=check_in)
    )


def overlapping_bookings_for_bed(bed_id: int, check_in: date, check_out: date) -> QuerySet:
    return _active_overlapping([bed_id], check_in, check_out)


def overlapping_bookings_for_beds(bed_ids: Iterable[int], check_in: date, check_out: date) -> QuerySet:
    return _active_overlapping(list(bed_ids), check_in, check_out)


def overlapping_bookings_for_room(room_id: int, check_in: date, check_out: date) -> QuerySet:
    room_beds = Bed.objects.filter(room_id=room_id).values("id")
    return _active_overlapping(room_beds, check_in, check_out)


def is_bed_available(bed_id: int, check_in: date, check_out: date) -> bool:
    return not overlapping_bookings_for_bed(bed_id, check_in, check_out).exists()


def are_beds_available(bed_ids: Iterable[int], check_in: date, check_out: date) -> bool:
    """All-or-nothing: one overlapping booking on any bed fails the whole set."""

    return not overlapping_bookings_for_beds(bed_ids, check_in, check_out).exists()


def is_room_available(room_id: int, check_in: date, check_out: date) -> bool:
    return not overlapping_bookings_for_room(room_id, check_in, check_out).exists()


@dataclass(frozen=True)
class AvailabilityReport:
    room_id: int
    room_number: str
    check_in: date
    check_out: date
    is_available: bool
    available_beds: int
    available_bed_ids: tuple[int, ...] = field(default_factory=tuple)
    next_available_date: Optional[date] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["available_bed_ids"] = list(self.available_bed_ids)
        return data


@dataclass(frozen=True)
class BedAvailabilityReport:
    bed_ids: tuple[int, ...]
    check_in: date
    check_out: date
    is_available: bool
    unavailable_bed_ids: tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["bed_ids"] = list(self.bed_ids)
        data["unavailable_bed_ids"] = list(self.unavailable_bed_ids)
        return data


def _search_horizon_days() -> int:
    return getattr(settings, "AVAILABILITY_SEARCH_HORIZON_DAYS", DEFAULT_SEARCH_HORIZON_DAYS)


def find_next_available_date(room_id: int, start: date) -> Optional[date]:
    """First date from `start` on which the room has no active booking at all.

    Checks one night at a time; when the night is taken it jumps straight to
    the latest checkout of the bookings blocking it. Gives up at the search
    horizon.
    """

    horizon = start + timedelta(days=_search_horizon_days())
    night = start
    while night < horizon:
        blocking = overlapping_bookings_for_room(room_id, night, night + timedelta(days=1))
        latest_checkout = blocking.aggregate(latest=Max("check_out_date"))["latest"]
        if latest_checkout is None:
            return night
        # Every blocking booking covers `night`, so its checkout is after it.
        night = latest_checkout
    return None


def check_room_availability(room_id: int, check_in: date, check_out: date) -> AvailabilityReport:
    try:
        room = Room.objects.get(pk=room_id)
    except Room.DoesNotExist as exc:
        raise ResourceNotFoundError("Room", room_id) from exc

    all_bed_ids = list(Bed.objects.filter(room_id=room_id).order_by("id").values_list("id", flat=True))
    overlapping = overlapping_bookings_for_room(room_id, check_in, check_out)
    taken_bed_ids = set(
        Booking.beds.through.objects.filter(
            booking_id__in=overlapping.values("pk"),
            bed_id__in=all_bed_ids,
        ).values_list("bed_id", flat=True)
    )
    free_bed_ids = tuple(bed_id for bed_id in all_bed_ids if bed_id not in taken_bed_ids)

    next_available = None
    if not free_bed_ids:
        next_available = find_next_available_date(room_id, check_out)

    return AvailabilityReport(
        room_id=room.pk,
        room_number=room.room_number,
        check_in=check_in,
        check_out=check_out,
        is_available=bool(free_bed_ids),
        available_beds=len(free_bed_ids),
        available_bed_ids=free_bed_ids,
        next_available_date=next_available,
    )


def check_bed_availability(bed_ids: Iterable[int], check_in: date, check_out: date) -> BedAvailabilityReport:
    requested = tuple(dict.fromkeys(bed_ids))
    overlapping = overlapping_bookings_for_beds(requested, check_in, check_out)
    taken = set(
        Booking.beds.through.objects.filter(
            booking_id__in=overlapping.values("pk"),
            bed_id__in=requested,
        ).values_list("bed_id", flat=True)
    )
    return BedAvailabilityReport(
        bed_ids=requested,
        check_in=check_in,
        check_out=check_out,
        is_available=not taken,
        unavailable_bed_ids=tuple(bed_id for bed_id in requested if bed_id in taken),
    )


def find_available_rooms(
    check_in: date,
    check_out: date,
    room_type: Optional[str] = None,
) -> list[AvailabilityReport]:
    """Active rooms with at least one bed free for the whole range, by room number."""

    queryset = Room.objects.filter(is_active=True)
    if room_type:
        queryset = queryset.filter(room_type=room_type)
    rooms = list(queryset.order_by("room_number"))
    beds = list(
        Bed.objects.filter(room_id__in=[room.pk for room in rooms])
        .order_by("id")
        .values_list("id", "room_id")
    )
    overlapping = _active_overlapping([bed_id for bed_id, _ in beds], check_in, check_out)
    taken = set(
        Booking.beds.through.objects.filter(booking_id__in=overlapping.values("pk")).values_list("bed_id", flat=True)
    )

    free_by_room: dict[int, list[int]] = {}
    for bed_id, room_id in beds:
        if bed_id not in taken:
            free_by_room.setdefault(room_id, []).append(bed_id)

    reports = []
    for room in rooms:
        free = free_by_room.get(room.pk)
        if not free:
            continue
        reports.append(
            AvailabilityReport(
                room_id=room.pk,
                room_number=room.room_number,
                check_in=check_in,
                check_out=check_out,
                is_available=True,
                available_beds=len(free),
                available_bed_ids=tuple(free),
            )
        )
    logger.info(f"{len(reports)} room(s) with free beds for {check_in} - {check_out}")
    return reports


def check_availability(
    check_in: date,
    check_out: date,
    *,
    room_id: Optional[int] = None,
    bed_ids: Optional[Iterable[int]] = None,
):
    """Availability for either a room or an explicit set of beds."""

    if (room_id is None) == (bed_ids is None):
        raise ValueError("Pass exactly one of room_id or bed_ids")
    if room_id is not None:
        return check_room_availability(room_id, check_in, check_out)
    return check_bed_availability(bed_ids, check_in, check_out)


def lock_beds(bed_ids: Iterable[int]) -> list[Bed]:
    """Load beds with their room, locking rows in id order where supported."""

    queryset = Bed.objects.select_related("room").filter(id__in=list(bed_ids)).order_by("id")
    return list(_lock_queryset_if_possible(queryset))
