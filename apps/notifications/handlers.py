"""
Message bus handlers queueing notification tasks.

They run after the booking transaction commits. A failure to queue is
logged by the message bus and never affects the booking.
"""

import logging

from apps.bookings.domain.events import BookingCancelled, BookingCreated, BookingExpired
from apps.leases.events import LeaseActivated

from . import tasks

logger = logging.getLogger(__name__)


def on_booking_created(event: BookingCreated):
    tasks.send_booking_created_notification.delay(event.booking_id)


def on_booking_expired(event: BookingExpired):
    tasks.send_booking_expired_notification.delay(event.booking_id)


def on_booking_cancelled(event: BookingCancelled):
    tasks.send_booking_cancelled_notification.delay(event.booking_id)


def on_lease_activated(event: LeaseActivated):
    tasks.send_lease_activated_notification.delay(event.lease_id)


def register_handlers(bus) -> None:
    bus.register_event_handler(BookingCreated, on_booking_created)
    bus.register_event_handler(BookingExpired, on_booking_expired)
    bus.register_event_handler(BookingCancelled, on_booking_cancelled)
    bus.register_event_handler(LeaseActivated, on_lease_activated)
    logger.debug("Notification handlers registered")
