"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import DomainEvent


@dataclass
class BookingCreated(DomainEvent):
    """
    Event: Deposit confirmed, property claimed (-> ACTIVE)

    Triggers:
    - Notify tenant with the rent deadline
    - Audit record
    """
    booking_id: int
    tenant_id: int
    property_id: int
    start_date: date
    expiry_date: date
    payment_deadline: date


@dataclass
class BookingCompleted(DomainEvent):
    """
    Event: Rent paid (ACTIVE -> COMPLETED)

    The lease is activated in the same transaction.
    """
    booking_id: int
    tenant_id: int
    property_id: int


@dataclass
class BookingExpired(DomainEvent):
    """
    Event: Payment deadline passed without rent (ACTIVE -> EXPIRED)

    Triggers:
    - Notify tenant that the property was released
    """
    booking_id: int
    tenant_id: int
    property_id: int


@dataclass
class BookingCancelled(DomainEvent):
    """Event: Booking cancelled, property released"""
    booking_id: int
    tenant_id: int
    property_id: int
    reason: str = ''
