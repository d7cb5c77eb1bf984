"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Allocate beds and create a booking
- UpdateBookingStatusCommand: Move a booking through its lifecycle
- UpdatePaymentStatusCommand: Record the payment status
- CancelBookingCommand: Cancel a booking and release its beds
- DeleteBookingCommand: Administrative purge
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Sequence, Tuple
import logging

from django.conf import settings
from django.db import IntegrityError, OperationalError, transaction
from django.db.models import F
from django.utils import timezone

from shared.application.exceptions import ResourceNotFoundError
from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import DateRange
from apps.inventory.models import Bed, Pack, Service
from apps.bookings.domain.codes import BookingCodeGenerator
from apps.bookings.domain.events import (
    BookingCancelled,
    BookingCreated,
    BookingDeleted,
    BookingPaymentStatusChanged,
    BookingStatusChanged,
)
from apps.bookings.domain.pricing import compute_total_price
from apps.bookings.domain.status import (
    BookingStatus,
    PaymentStatus,
    ensure_cancellable,
    validate_transition,
)
from apps.bookings.exceptions import (
    BookingConflictError,
    BookingValidationError,
    ConcurrencyConflictError,
    StaleBookingError,
)
from apps.bookings.models import Booking
from apps.bookings.projections import BookingView
from apps.bookings.repositories import BookingRepository
from apps.bookings import services as availability

logger = logging.getLogger(__name__)

# SQLSTATE codes for serialization failure and deadlock (PostgreSQL)
SERIALIZATION_FAILURE_CODES = frozenset({'40001', '40P01'})

Clock = Callable[[], date]


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    This is the only entry point that creates bookings.
    """
    guest_name: str
    guest_email: str
    guest_phone: str
    check_in: date
    check_out: date
    bed_ids: Sequence[int]
    service_ids: Sequence[int] = field(default_factory=tuple)
    pack_id: Optional[int] = None
    notes: str = ''


@dataclass
class UpdateBookingStatusCommand:
    """Command to change the booking status"""
    booking_id: int
    status: str
    expected_version: Optional[int] = None


@dataclass
class UpdatePaymentStatusCommand:
    """Command to set the payment status"""
    booking_id: int
    payment_status: str
    expected_version: Optional[int] = None


@dataclass
class CancelBookingCommand:
    """Command to cancel a booking"""
    booking_id: int
    expected_version: Optional[int] = None


@dataclass
class DeleteBookingCommand:
    """Command to purge a booking, bypassing the state machine"""
    booking_id: int


# ===== Helpers =====

def is_serialization_failure(exc: BaseException) -> bool:
    """True when the store aborted the transaction because of a concurrent write"""
    cause = exc.__cause__
    code = getattr(cause, 'sqlstate', None) or getattr(cause, 'pgcode', None)
    if code in SERIALIZATION_FAILURE_CODES:
        return True
    # SQLite serializes writers with a database-wide lock
    return 'database is locked' in str(exc).lower()


def one_year_after(day: date) -> date:
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        # 29 February
        return day.replace(year=day.year + 1, day=28)


def _setting(name: str, default):
    return getattr(settings, name, default)


def _compare_and_swap(booking: Booking, **changes) -> None:
    """
    Apply `changes` only if nobody bumped the version since `booking` was read

    Raises StaleBookingError when the row moved on.
    """
    updated = Booking.objects.filter(pk=booking.pk, version=booking.version).update(
        version=F('version') + 1,
        updated_at=timezone.now(),
        **changes,
    )
    if not updated:
        raise StaleBookingError(booking.pk, booking.version)


def _ensure_expected_version(booking: Booking, expected_version: Optional[int]) -> None:
    if expected_version is not None and booking.version != expected_version:
        raise StaleBookingError(booking.pk, expected_version)


def _bed_taken_error(bed, check_in: date, check_out: date) -> BookingConflictError:
    logger.warning(
        f"Bed {bed.bed_number} in room {bed.room.room_number} "
        f"is taken for {check_in} - {check_out}"
    )
    return BookingConflictError(
        f"Bed {bed.bed_number} in room {bed.room.room_number} "
        f"is not available for the requested dates",
        bed_id=bed.pk,
        bed_number=bed.bed_number,
        room_number=bed.room.room_number,
    )


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Allocation runs in a SERIALIZABLE unit of work so the per-bed re-check
    and the insert behave as one step against concurrent allocators:

    1. Validate the request (no transaction yet)
    2. Advisory pre-check: unknown beds, then beds already taken (fast fail)
    3. Lock the requested beds and re-check each one inside the transaction
    4. Resolve pack and services
    5. Price the stay and generate codes
    6. Insert (codes regenerated on a uniqueness collision)
    7. Commit; BookingCreated is published after commit

    A serialization failure raised by the store is retried a limited number
    of times and then reported as ConcurrencyConflictError.
    """

    def __init__(
        self,
        repository: Optional[BookingRepository] = None,
        code_generator: Optional[BookingCodeGenerator] = None,
        clock: Optional[Clock] = None,
    ):
        self.repository = repository or BookingRepository()
        self.code_generator = code_generator or BookingCodeGenerator()
        self.clock = clock or timezone.localdate

    def handle(self, command: CreateBookingCommand) -> BookingView:
        today = self.clock()
        bed_ids, service_ids = self._validate(command, today)

        logger.info(
            f"Creating booking for beds {list(bed_ids)}, "
            f"dates {command.check_in} - {command.check_out}"
        )

        self._precheck(command, bed_ids)

        retries = _setting('BOOKING_SERIALIZATION_RETRIES', 2)
        attempt = 0
        while True:
            try:
                booking_id = self._allocate(command, bed_ids, service_ids, today)
                break
            except OperationalError as exc:
                if not is_serialization_failure(exc):
                    raise
                if attempt >= retries:
                    logger.warning(
                        f"Giving up on booking for beds {list(bed_ids)} after "
                        f"{attempt + 1} serialization failures"
                    )
                    raise ConcurrencyConflictError(
                        "The selected beds were booked concurrently, please try again",
                        details={'bed_ids': list(bed_ids)},
                    ) from exc
                attempt += 1
                logger.warning(
                    f"Serialization failure while booking beds {list(bed_ids)}, "
                    f"retry {attempt}/{retries}"
                )

        view = self.repository.get_view(booking_id)
        logger.info(
            f"Booking {view.booking_reference} created: {view.nights} night(s), "
            f"{view.total_price} {view.currency}"
        )
        return view

    def _validate(self, command: CreateBookingCommand, today: date) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        if command.check_in < today:
            raise BookingValidationError(
                "Check-in date cannot be in the past",
                details={'check_in': command.check_in.isoformat()},
            )
        if command.check_out <= command.check_in:
            raise BookingValidationError(
                "Check-out date must be after check-in date",
                details={
                    'check_in': command.check_in.isoformat(),
                    'check_out': command.check_out.isoformat(),
                },
            )
        if command.check_in > one_year_after(today):
            raise BookingValidationError(
                "Bookings can be made at most one year in advance",
                details={'check_in': command.check_in.isoformat()},
            )

        bed_ids = tuple(command.bed_ids or ())
        max_beds = _setting('BOOKING_MAX_BEDS', 10)
        if not bed_ids:
            raise BookingValidationError("At least one bed must be selected")
        if len(bed_ids) > max_beds:
            raise BookingValidationError(
                f"At most {max_beds} beds can be booked at once",
                details={'bed_count': len(bed_ids)},
            )
        if len(set(bed_ids)) != len(bed_ids):
            raise BookingValidationError(
                "The same bed was selected more than once",
                details={'bed_ids': list(bed_ids)},
            )

        service_ids = tuple(dict.fromkeys(command.service_ids or ()))
        max_services = _setting('BOOKING_MAX_SERVICES', 20)
        if len(service_ids) > max_services:
            raise BookingValidationError(
                f"At most {max_services} services can be added to a booking",
                details={'service_count': len(service_ids)},
            )
        return bed_ids, service_ids

    def _precheck(self, command: CreateBookingCommand, bed_ids: Tuple[int, ...]) -> None:
        """Fail fast, outside any transaction, on unknown or already taken beds"""
        beds = {bed.pk: bed for bed in Bed.objects.select_related('room').filter(pk__in=bed_ids)}
        missing = sorted(set(bed_ids) - set(beds))
        if missing:
            raise ResourceNotFoundError("Bed", missing[0])

        report = availability.check_bed_availability(bed_ids, command.check_in, command.check_out)
        if not report.is_available:
            raise _bed_taken_error(beds[report.unavailable_bed_ids[0]], command.check_in, command.check_out)

    def _allocate(
        self,
        command: CreateBookingCommand,
        bed_ids: Tuple[int, ...],
        service_ids: Tuple[int, ...],
        today: date,
    ) -> int:
        with DjangoUnitOfWork(serializable=True) as uow:
            beds = availability.lock_beds(bed_ids)
            if len(beds) != len(bed_ids):
                missing = sorted(set(bed_ids) - {bed.pk for bed in beds})
                raise ResourceNotFoundError("Bed", missing[0])

            for bed in beds:
                if not availability.is_bed_available(bed.pk, command.check_in, command.check_out):
                    raise _bed_taken_error(bed, command.check_in, command.check_out)

            pack = self._resolve_pack(command.pack_id)
            services = self._resolve_services(service_ids)

            dates = DateRange(command.check_in, command.check_out)
            currency = _setting('HOSTEL_CURRENCY', 'MAD')
            total = compute_total_price(beds, services, pack, len(dates), currency)

            booking = self._insert(command, pack, total, today)
            booking.beds.set(beds)
            if services:
                booking.services.set(services)

            booking.add_event(BookingCreated(
                aggregate_id=booking.pk,
                booking_reference=booking.booking_reference,
                bed_ids=tuple(bed.pk for bed in beds),
                dates=dates,
                total_price=total,
            ))
            uow.collect_events(booking)
            return booking.pk

    def _resolve_pack(self, pack_id: Optional[int]) -> Optional[Pack]:
        if pack_id is None:
            return None
        pack = Pack.objects.filter(pk=pack_id).first()
        if pack is None:
            raise ResourceNotFoundError("Pack", pack_id)
        if not pack.is_active:
            raise BookingValidationError(
                f"Pack {pack.name} is no longer offered",
                details={'pack_id': pack_id},
            )
        return pack

    def _resolve_services(self, service_ids: Tuple[int, ...]) -> list:
        if not service_ids:
            return []
        services = list(Service.objects.filter(pk__in=service_ids).order_by('id'))
        if len(services) != len(service_ids):
            missing = sorted(set(service_ids) - {service.pk for service in services})
            raise ResourceNotFoundError("Service", missing[0])
        return services

    def _insert(self, command: CreateBookingCommand, pack: Optional[Pack], total, today: date) -> Booking:
        max_attempts = _setting('BOOKING_CODE_MAX_ATTEMPTS', 5)
        for attempt in range(1, max_attempts + 1):
            reference = self.code_generator.booking_reference(today)
            access_code = self.code_generator.access_code()
            try:
                with transaction.atomic():
                    return Booking.objects.create(
                        booking_reference=reference,
                        access_code=access_code,
                        guest_name=command.guest_name.strip(),
                        guest_email=command.guest_email.strip().lower(),
                        guest_phone=command.guest_phone.strip(),
                        check_in_date=command.check_in,
                        check_out_date=command.check_out,
                        status=BookingStatus.CONFIRMED,
                        payment_status=PaymentStatus.UNPAID,
                        total_price=total.quantized(),
                        currency=total.currency,
                        pack=pack,
                        notes=command.notes or '',
                        version=0,
                    )
            except IntegrityError:
                collided = Booking.objects.filter(booking_reference=reference).exists() or \
                    Booking.objects.filter(access_code=access_code).exists()
                if not collided:
                    raise
                logger.warning(f"Booking code collision, regenerating (attempt {attempt}/{max_attempts})")
        raise ConcurrencyConflictError("Could not generate a unique booking reference, please try again")


class UpdateBookingStatusHandler:
    """
    Handler for UpdateBookingStatus command

    Transition rules live in apps.bookings.domain.status; the version
    counter protects against two staff members editing the same booking.
    """

    def __init__(self, repository: Optional[BookingRepository] = None):
        self.repository = repository or BookingRepository()

    def handle(self, command: UpdateBookingStatusCommand) -> BookingView:
        with DjangoUnitOfWork() as uow:
            booking = self.repository.get(command.booking_id)
            _ensure_expected_version(booking, command.expected_version)
            validate_transition(booking.status, command.status)

            old_status = booking.status
            _compare_and_swap(booking, status=command.status)

            booking.add_event(BookingStatusChanged(
                aggregate_id=booking.pk,
                booking_reference=booking.booking_reference,
                old_status=old_status,
                new_status=command.status,
            ))
            if command.status == BookingStatus.CANCELLED:
                booking.add_event(BookingCancelled(
                    aggregate_id=booking.pk,
                    booking_reference=booking.booking_reference,
                    previous_status=old_status,
                ))
            uow.collect_events(booking)

        logger.info(f"Booking {booking.booking_reference} status {old_status} -> {command.status}")
        return self.repository.get_view(command.booking_id)


class UpdatePaymentStatusHandler:
    """Handler for UpdatePaymentStatus command (any status may be set at any time)"""

    def __init__(self, repository: Optional[BookingRepository] = None):
        self.repository = repository or BookingRepository()

    def handle(self, command: UpdatePaymentStatusCommand) -> BookingView:
        if command.payment_status not in PaymentStatus.values:
            raise BookingValidationError(
                f"Unknown payment status: {command.payment_status}",
                details={'payment_status': command.payment_status},
            )

        with DjangoUnitOfWork() as uow:
            booking = self.repository.get(command.booking_id)
            _ensure_expected_version(booking, command.expected_version)

            old_payment_status = booking.payment_status
            _compare_and_swap(booking, payment_status=command.payment_status)

            booking.add_event(BookingPaymentStatusChanged(
                aggregate_id=booking.pk,
                booking_reference=booking.booking_reference,
                old_payment_status=old_payment_status,
                new_payment_status=command.payment_status,
            ))
            uow.collect_events(booking)

        logger.info(
            f"Booking {booking.booking_reference} payment "
            f"{old_payment_status} -> {command.payment_status}"
        )
        return self.repository.get_view(command.booking_id)


class CancelBookingHandler:
    """
    Handler for CancelBooking command

    A booking whose stay has started or ended cannot be cancelled.
    Cancelling an already cancelled booking does nothing.
    """

    def __init__(self, repository: Optional[BookingRepository] = None):
        self.repository = repository or BookingRepository()

    def handle(self, command: CancelBookingCommand) -> None:
        with DjangoUnitOfWork() as uow:
            booking = self.repository.get(command.booking_id)
            if booking.status == BookingStatus.CANCELLED:
                logger.info(f"Booking {booking.booking_reference} is already cancelled")
                return

            _ensure_expected_version(booking, command.expected_version)
            ensure_cancellable(booking.status)

            previous_status = booking.status
            _compare_and_swap(booking, status=BookingStatus.CANCELLED)

            booking.add_event(BookingCancelled(
                aggregate_id=booking.pk,
                booking_reference=booking.booking_reference,
                previous_status=previous_status,
            ))
            uow.collect_events(booking)

        logger.info(f"Booking {booking.booking_reference} cancelled (was {previous_status})")


class DeleteBookingHandler:
    """Handler for DeleteBooking command (administrative purge)"""

    def __init__(self, repository: Optional[BookingRepository] = None):
        self.repository = repository or BookingRepository()

    def handle(self, command: DeleteBookingCommand) -> None:
        with DjangoUnitOfWork() as uow:
            booking = self.repository.get(command.booking_id)
            reference = booking.booking_reference
            booking.add_event(BookingDeleted(aggregate_id=booking.pk, booking_reference=reference))
            uow.collect_events(booking)
            booking.delete()

        logger.warning(f"Booking {reference} purged")
