"""
Audit sink

Writes one AuditRecord for every booking and lease event published on the
message bus.
"""

import logging

from apps.bookings.domain.events import (
    BookingCancelled,
    BookingCompleted,
    BookingCreated,
    BookingExpired,
)
from apps.leases.events import LeaseActivated

from .models import AuditRecord

logger = logging.getLogger(__name__)

OBJECT_TYPES = {
    BookingCreated: 'booking',
    BookingCompleted: 'booking',
    BookingExpired: 'booking',
    BookingCancelled: 'booking',
    LeaseActivated: 'lease',
}


def record_event(event):
    record = AuditRecord.log(event, OBJECT_TYPES.get(type(event), 'unknown'))
    logger.debug(f"Audit record {record.pk} for {event.event_type}")


def register_handlers(bus) -> None:
    for event_type in OBJECT_TYPES:
        bus.register_event_handler(event_type, record_event)
