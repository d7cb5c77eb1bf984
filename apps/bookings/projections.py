"""
Read views of a booking.

A BookingView is a frozen snapshot carrying everything a caller or the
notification task needs (beds with their room numbers, services with
prices, pack details). It is built from an already-joined booking and never
touches the database afterwards.
"""

from dataclasses import asdict, dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Tuple


@dataclass(frozen=True)
class BedInfo:
    bed_id: int
    bed_number: str
    room_id: int
    room_number: str
    room_type: str
    price_per_night: Decimal


@dataclass(frozen=True)
class ServiceInfo:
    service_id: int
    name: str
    price: Decimal
    price_type: str
    category: str


@dataclass(frozen=True)
class PackInfo:
    pack_id: int
    name: str
    duration_days: int
    promo_price: Decimal


@dataclass(frozen=True)
class BookingView:
    id: int
    booking_reference: str
    access_code: str
    guest_name: str
    guest_email: str
    guest_phone: str
    check_in_date: date
    check_out_date: date
    nights: int
    status: str
    payment_status: str
    total_price: Decimal
    currency: str
    beds: Tuple[BedInfo, ...]
    services: Tuple[ServiceInfo, ...]
    pack: Optional[PackInfo]
    notes: str
    created_at: datetime
    updated_at: datetime
    version: int

    @property
    def room_numbers(self) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(bed.room_number for bed in self.beds))

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_booking(cls, booking) -> 'BookingView':
        """
        Build a view from a booking loaded with BookingRepository.base_queryset()

        beds, beds__room, services and pack must already be loaded.
        """
        beds = tuple(
            BedInfo(
                bed_id=bed.pk,
                bed_number=bed.bed_number,
                room_id=bed.room_id,
                room_number=bed.room.room_number,
                room_type=bed.room.room_type,
                price_per_night=bed.room.price_per_night,
            )
            for bed in booking.beds.all()
        )
        services = tuple(
            ServiceInfo(
                service_id=service.pk,
                name=service.name,
                price=service.price,
                price_type=service.price_type,
                category=service.category,
            )
            for service in booking.services.all()
        )
        pack = None
        if booking.pack is not None:
            pack = PackInfo(
                pack_id=booking.pack.pk,
                name=booking.pack.name,
                duration_days=booking.pack.duration_days,
                promo_price=booking.pack.promo_price,
            )
        return cls(
            id=booking.pk,
            booking_reference=booking.booking_reference,
            access_code=booking.access_code,
            guest_name=booking.guest_name,
            guest_email=booking.guest_email,
            guest_phone=booking.guest_phone,
            check_in_date=booking.check_in_date,
            check_out_date=booking.check_out_date,
            nights=booking.nights,
            status=booking.status,
            payment_status=booking.payment_status,
            total_price=booking.total_price,
            currency=booking.currency,
            beds=beds,
            services=services,
            pack=pack,
            notes=booking.notes,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            version=booking.version,
        )
