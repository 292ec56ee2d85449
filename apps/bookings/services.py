"""Domain services for booking workflows.

Periodic jobs (expiry sweep, payment reminders) and the read helpers other
contexts use to ask about a tenant's or a property's booking.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore

from apps.properties.ledger import AvailabilityLedger
from shared.application.uow import DjangoUnitOfWork
from shared.exceptions import InvalidStateError

from .application.command_handlers import transition_booking
from .domain.entities import OPEN_STATES, BookingStatus
from .domain.events import BookingExpired
from .models import Booking

logger = logging.getLogger(__name__)


def get_active_booking(tenant_id: int) -> Booking | None:
    """The tenant's ACTIVE booking, if any. At most one exists."""
    try:
        return Booking.objects.get(tenant_id=tenant_id, status=BookingStatus.ACTIVE)
    except Booking.DoesNotExist:
        return None


def is_property_booked(property_id: int) -> bool:
    return Booking.objects.filter(property_id=property_id, status__in=OPEN_STATES).exists()


def overdue_bookings(today: date):
    """ACTIVE bookings whose payment deadline passed without rent."""
    return Booking.objects.filter(
        status=BookingStatus.ACTIVE,
        rent_paid=False,
        payment_deadline__lt=today,
    ).order_by("payment_deadline", "pk")


def expire_booking(booking: Booking, ledger: AvailabilityLedger | None = None) -> bool:
    """
    Expire one booking and release its property.

    Returns False when the booking left ACTIVE before the update (rent
    arrived or it was cancelled), in which case nothing changes.
    """
    ledger = ledger or AvailabilityLedger()
    with DjangoUnitOfWork() as uow:
        try:
            transition_booking(booking, BookingStatus.EXPIRED, expired_at=timezone.now())
        except InvalidStateError:
            return False
        ledger.release(booking.property_id)
        uow.add_event(BookingExpired(
            booking_id=booking.pk,
            tenant_id=booking.tenant_id,
            property_id=booking.property_id,
            aggregate_id=booking.pk,
        ))
    return True


def sweep_expired_bookings(today: date | None = None) -> dict[str, int]:
    """
    Expire every overdue booking.

    Safe to run repeatedly: each booking is moved with a compare-and-set, so
    a booking completed or expired by someone else is skipped. A failure on
    one booking is logged and does not stop the sweep.
    """
    today = today or timezone.localdate()
    summary = {"expired": 0, "skipped": 0, "failed": 0}
    ledger = AvailabilityLedger()

    for booking in list(overdue_bookings(today)):
        try:
            if expire_booking(booking, ledger):
                summary["expired"] += 1
                logger.info(
                    f"Booking {booking.pk} expired: deadline {booking.payment_deadline} passed"
                )
            else:
                summary["skipped"] += 1
        except Exception as exc:
            summary["failed"] += 1
            logger.error(f"Failed to expire booking {booking.pk}: {exc}", exc_info=True)

    if any(summary.values()):
        logger.info(f"Expiry sweep for {today}: {summary}")
    return summary


def send_payment_deadline_reminders(today: date | None = None) -> dict[str, int]:
    """
    Remind tenants whose rent deadline falls within the reminder window.

    Delivery is fire-and-forget; a failed reminder is counted, never raised.
    """
    from apps.notifications.services import send_payment_reminder

    today = today or timezone.localdate()
    horizon = today + timedelta(days=settings.BOOKING_REMINDER_WINDOW_DAYS)
    summary = {"sent": 0, "failed": 0}

    bookings = Booking.objects.filter(
        status=BookingStatus.ACTIVE,
        rent_paid=False,
        payment_deadline__gte=today,
        payment_deadline__lte=horizon,
    ).select_related("tenant", "property")

    for booking in bookings:
        if send_payment_reminder(booking, today):
            summary["sent"] += 1
        else:
            summary["failed"] += 1

    logger.info(f"Payment reminders for {today}: {summary}")
    return summary
