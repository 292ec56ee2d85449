"""Celery tasks delivering booking and lease notices."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from . import services

logger = logging.getLogger(__name__)


def _load_booking(booking_id: int):
    from apps.bookings.models import Booking

    try:
        return Booking.objects.select_related("tenant", "property").get(pk=booking_id)
    except Booking.DoesNotExist:
        logger.warning(f"Booking {booking_id} not found, notification dropped")
        return None


@shared_task(name="notifications.booking_created")
def send_booking_created_notification(booking_id: int) -> dict[str, bool]:
    booking = _load_booking(booking_id)
    if booking is None:
        return {}
    return services.notify_booking_created(booking)


@shared_task(name="notifications.booking_expired")
def send_booking_expired_notification(booking_id: int) -> dict[str, bool]:
    booking = _load_booking(booking_id)
    if booking is None:
        return {}
    return services.notify_booking_expired(booking)


@shared_task(name="notifications.booking_cancelled")
def send_booking_cancelled_notification(booking_id: int) -> dict[str, bool]:
    booking = _load_booking(booking_id)
    if booking is None:
        return {}
    return services.notify_booking_cancelled(booking)


@shared_task(name="notifications.lease_activated")
def send_lease_activated_notification(lease_id: int) -> dict[str, bool]:
    from apps.leases.models import Lease

    try:
        lease = Lease.objects.select_related("tenant", "property").get(pk=lease_id)
    except Lease.DoesNotExist:
        logger.warning(f"Lease {lease_id} not found, notification dropped")
        return {}
    return services.notify_lease_activated(lease)
