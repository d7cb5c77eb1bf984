"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from typing import Tuple

from shared.domain.base import DomainEvent
from shared.domain.value_objects import DateRange, Money


@dataclass(kw_only=True)
class BookingCreated(DomainEvent):
    """
    Event: A new booking was allocated

    Triggers:
    - Send confirmation email to guest
    """
    booking_reference: str
    bed_ids: Tuple[int, ...]
    dates: DateRange
    total_price: Money


@dataclass(kw_only=True)
class BookingStatusChanged(DomainEvent):
    """Event: Staff moved the booking to another status"""
    booking_reference: str
    old_status: str
    new_status: str


@dataclass(kw_only=True)
class BookingPaymentStatusChanged(DomainEvent):
    """Event: Payment status was set"""
    booking_reference: str
    old_payment_status: str
    new_payment_status: str


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    """
    Event: Booking was cancelled and its beds released

    Triggers:
    - Send cancellation notice to guest
    """
    booking_reference: str
    previous_status: str


@dataclass(kw_only=True)
class BookingDeleted(DomainEvent):
    """Event: Booking was purged by an administrator"""
    booking_reference: str
