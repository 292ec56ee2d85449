"""
Lease Domain Events
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from shared.domain.base import DomainEvent


@dataclass
class LeaseActivated(DomainEvent):
    """
    Event: A completed booking became a lease

    Emitted once per booking, never on repeated activation.
    """
    lease_id: int
    booking_id: int
    tenant_id: int
    property_id: int
    start_date: date
    end_date: date
    monthly_rent: Decimal
    currency: str
