"""
Base Domain Classes

This module provides the foundational building blocks for Domain-Driven Design:
- ValueObject: Immutable objects compared by value
- AggregateRoot: Mixin for consistency boundaries that record domain events
- DomainEvent: Events that represent something that happened
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


class AggregateRoot:
    """
    Mixin for aggregate roots

    Aggregates are the consistency boundaries in DDD.
    They collect domain events that will be published after successful transaction.
    The mixin keeps events outside of model fields, so it can be combined
    with Django models without touching the schema.
    """

    def _pending_events(self) -> List['DomainEvent']:
        return self.__dict__.setdefault('_recorded_events', [])

    def add_event(self, event: 'DomainEvent'):
        """Add a domain event to be published"""
        self._pending_events().append(event)

    def clear_events(self):
        """Clear all collected events (called after publishing)"""
        self._pending_events().clear()

    @property
    def events(self) -> List['DomainEvent']:
        """Get copy of collected events"""
        return list(self._pending_events())


@dataclass(kw_only=True)
class DomainEvent:
    """
    Base class for domain events

    Domain events represent something that happened in the domain.
    They are used to communicate between bounded contexts.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=datetime.now)
    aggregate_id: int | None = None

    def to_dict(self) -> dict:
        """Convert event to dictionary for serialization"""
        return {
            'event_id': str(self.event_id),
            'event_type': self.__class__.__name__,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': self.aggregate_id,
        }
