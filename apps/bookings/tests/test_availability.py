"""Tests for overlap queries and availability reports."""

from __future__ import annotations

from datetime import date

import pytest

from apps.bookings.application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    UpdateBookingStatusCommand,
    UpdateBookingStatusHandler,
)
from apps.bookings.domain.status import BookingStatus
from apps.bookings.services import (
    are_beds_available,
    check_availability,
    check_room_availability,
    find_available_rooms,
    find_next_available_date,
    is_bed_available,
    is_room_available,
    overlapping_bookings_for_bed,
    overlapping_bookings_for_beds,
    overlapping_bookings_for_room,
)
from apps.inventory.models import Room, RoomType
from shared.application.exceptions import ResourceNotFoundError

pytestmark = pytest.mark.django_db

JUNE_1 = date(2024, 6, 1)
JUNE_3 = date(2024, 6, 3)


def _set_status(view, status):
    UpdateBookingStatusHandler().handle(UpdateBookingStatusCommand(booking_id=view.id, status=status))


def test_overlap_predicate_is_half_open(make_room, book):
    bed = make_room().beds.get()
    booking = book([bed], JUNE_1, JUNE_3)

    assert [b.pk for b in overlapping_bookings_for_bed(bed.pk, date(2024, 6, 2), date(2024, 6, 4))] == [booking.id]
    assert [b.pk for b in overlapping_bookings_for_bed(bed.pk, date(2024, 5, 30), date(2024, 6, 5))] == [booking.id]
    assert not overlapping_bookings_for_bed(bed.pk, JUNE_3, date(2024, 6, 5)).exists()
    assert not overlapping_bookings_for_bed(bed.pk, date(2024, 5, 30), JUNE_1).exists()


def test_inverted_or_empty_window_matches_nothing(make_room, book):
    bed = make_room().beds.get()
    book([bed], JUNE_1, JUNE_3)

    assert not overlapping_bookings_for_bed(bed.pk, date(2024, 6, 2), date(2024, 6, 2)).exists()
    assert not overlapping_bookings_for_beds([bed.pk], JUNE_3, JUNE_1).exists()


def test_multi_bed_booking_is_returned_once(make_room, book):
    room = make_room(room_type=RoomType.DORTOIR)
    beds = list(room.beds.order_by("id")[:3])
    booking = book(beds, JUNE_1, JUNE_3)

    overlapping = overlapping_bookings_for_beds([b.pk for b in beds], JUNE_1, JUNE_3)
    assert [b.pk for b in overlapping] == [booking.id]
    assert [b.pk for b in overlapping_bookings_for_room(room.pk, JUNE_1, JUNE_3)] == [booking.id]


@pytest.mark.parametrize("status", [BookingStatus.CANCELLED, BookingStatus.CHECKED_OUT])
def test_released_bookings_do_not_block(make_room, book, status):
    bed = make_room().beds.get()
    view = book([bed], JUNE_1, JUNE_3)
    if status == BookingStatus.CHECKED_OUT:
        _set_status(view, BookingStatus.CHECKED_IN)
    _set_status(view, status)

    assert is_bed_available(bed.pk, JUNE_1, JUNE_3)


@pytest.mark.parametrize("status", [BookingStatus.PENDING, BookingStatus.CHECKED_IN])
def test_active_bookings_block(make_room, book, status):
    bed = make_room().beds.get()
    view = book([bed], JUNE_1, JUNE_3)
    _set_status(view, status)

    assert not is_bed_available(bed.pk, JUNE_1, JUNE_3)


def test_bed_set_is_all_or_nothing(make_room, book):
    first, second = make_room(room_type=RoomType.SINGLE).beds.order_by("id")
    book([first], JUNE_1, JUNE_3)

    assert is_bed_available(second.pk, JUNE_1, JUNE_3)
    assert not are_beds_available([first.pk, second.pk], JUNE_1, JUNE_3)

    report = check_availability(JUNE_1, JUNE_3, bed_ids=[first.pk, second.pk])
    assert not report.is_available
    assert report.unavailable_bed_ids == (first.pk,)


def test_room_with_one_free_bed_is_reported_available(make_room, book):
    room = make_room(room_type=RoomType.SINGLE)
    booked, free = room.beds.order_by("id")
    book([booked], JUNE_1, JUNE_3)

    report = check_room_availability(room.pk, JUNE_1, JUNE_3)

    assert report.is_available
    assert report.available_beds == 1
    assert report.available_bed_ids == (free.pk,)
    assert booked.pk not in report.available_bed_ids
    assert report.next_available_date is None
    assert report.room_number == room.room_number
    assert not is_room_available(room.pk, JUNE_1, JUNE_3)


def test_checking_twice_gives_the_same_answer(make_room, book):
    room = make_room(room_type=RoomType.SINGLE)
    book([room.beds.order_by("id").first()], JUNE_1, JUNE_3)

    assert check_room_availability(room.pk, JUNE_1, JUNE_3) == check_room_availability(room.pk, JUNE_1, JUNE_3)


def test_full_room_reports_next_free_date_after_back_to_back_stays(make_room, book):
    room = make_room()
    bed = room.beds.get()
    book([bed], JUNE_1, date(2024, 6, 5))
    book([bed], date(2024, 6, 5), date(2024, 6, 8))

    report = check_room_availability(room.pk, date(2024, 6, 2), date(2024, 6, 4))

    assert not report.is_available
    assert report.available_beds == 0
    assert report.available_bed_ids == ()
    assert report.next_available_date == date(2024, 6, 8)


def test_next_free_date_jumps_to_the_blocking_checkout(make_room, book):
    room = make_room()
    book([room.beds.get()], JUNE_1, date(2024, 6, 5))

    report = check_room_availability(room.pk, JUNE_1, JUNE_3)

    assert report.next_available_date == date(2024, 6, 5)


def test_next_free_date_with_several_beds_waits_for_the_whole_room(make_room, book):
    room = make_room(room_type=RoomType.SINGLE)
    long_bed, short_bed = room.beds.order_by("id")
    book([long_bed], JUNE_1, date(2024, 6, 10))
    book([short_bed], JUNE_1, JUNE_3)
    book([short_bed], date(2024, 6, 5), date(2024, 6, 7))

    report = check_room_availability(room.pk, JUNE_1, JUNE_3)

    # Every night from the 3rd to the 9th has at least one bed taken.
    assert report.next_available_date == date(2024, 6, 10)
    assert find_next_available_date(room.pk, date(2024, 6, 10)) == date(2024, 6, 10)


def test_next_free_date_beyond_horizon_is_none(make_room, book, settings):
    settings.AVAILABILITY_SEARCH_HORIZON_DAYS = 60
    room = make_room()
    book([room.beds.get()], JUNE_1, date(2024, 9, 1))

    report = check_room_availability(room.pk, JUNE_1, date(2024, 6, 2))

    assert report.next_available_date is None


def test_unknown_room_is_not_found():
    with pytest.raises(ResourceNotFoundError):
        check_room_availability(999_999, JUNE_1, JUNE_3)


def test_cancelled_booking_frees_its_window(make_room, book):
    bed = make_room().beds.get()
    view = book([bed], JUNE_1, JUNE_3)

    CancelBookingHandler().handle(CancelBookingCommand(booking_id=view.id))

    assert is_bed_available(bed.pk, JUNE_1, JUNE_3)


def test_check_availability_needs_exactly_one_target():
    with pytest.raises(ValueError):
        check_availability(JUNE_1, JUNE_3)
    with pytest.raises(ValueError):
        check_availability(JUNE_1, JUNE_3, room_id=1, bed_ids=[1])


def test_available_rooms_lists_rooms_with_a_free_bed(make_room, book):
    full = make_room(room_type=RoomType.DOUBLE)
    shared = make_room(room_type=RoomType.SINGLE)
    empty = make_room(room_type=RoomType.SINGLE)
    closed = make_room(room_type=RoomType.SINGLE)
    Room.objects.filter(pk=closed.pk).update(is_active=False)
    taken, free = shared.beds.order_by("id")
    book([full.beds.get()], JUNE_1, JUNE_3)
    book([taken], JUNE_1, JUNE_3)

    reports = find_available_rooms(JUNE_1, JUNE_3)

    assert [report.room_id for report in reports] == [shared.pk, empty.pk]
    assert reports[0].available_bed_ids == (free.pk,)
    assert reports[0].available_beds == 1
    assert reports[1].available_beds == 2
    assert all(report.is_available for report in reports)


def test_available_rooms_by_type_and_adjacent_dates(make_room, book):
    double = make_room(room_type=RoomType.DOUBLE)
    make_room(room_type=RoomType.SINGLE)
    book([double.beds.get()], JUNE_1, JUNE_3)

    assert find_available_rooms(JUNE_1, JUNE_3, room_type=RoomType.DOUBLE) == []
    later = find_available_rooms(JUNE_3, date(2024, 6, 5), room_type=RoomType.DOUBLE)
    assert [report.room_id for report in later] == [double.pk]
