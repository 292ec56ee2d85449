"""
Lease Activation Engine

Turns a COMPLETED booking into a lease. Activation is idempotent per
booking: the one-to-one booking reference on the lease makes a second
insert fail, and the existing lease is returned instead. The property
claim is left in place, the tenant now occupies it.
"""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.db import IntegrityError  # type: ignore

from apps.bookings.domain.entities import BookingStatus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import DateRange
from shared.exceptions import InvalidStateError

from .events import LeaseActivated
from .models import Lease

logger = logging.getLogger(__name__)


class LeaseActivationEngine:
    """Creates leases for completed bookings."""

    def activate(self, booking) -> Lease:
        """
        Return the lease for a completed booking, creating it on first call

        Raises:
            InvalidStateError: BOOKING_NOT_READY if the booking is not COMPLETED
        """
        booking.refresh_from_db(fields=["status"])
        if booking.status != BookingStatus.COMPLETED:
            raise InvalidStateError(
                f"Booking {booking.pk} is {booking.status}, lease needs a completed booking",
                code="BOOKING_NOT_READY",
            )

        existing = self._existing_lease(booking)
        if existing is not None:
            logger.info(f"Lease {existing.pk} already exists for booking {booking.pk}")
            return existing

        property_obj = booking.property
        term = DateRange.starting(booking.start_date, settings.LEASE_TERM_DAYS)

        try:
            with DjangoUnitOfWork() as uow:
                lease = Lease.objects.create(
                    booking=booking,
                    tenant_id=booking.tenant_id,
                    property=property_obj,
                    start_date=term.start_date,
                    end_date=term.end_date,
                    monthly_rent=property_obj.rent_amount,
                    deposit_amount=property_obj.deposit_amount,
                    currency=property_obj.currency,
                    deposit_paid=True,
                    status=Lease.Status.ACTIVE,
                )
                uow.add_event(LeaseActivated(
                    lease_id=lease.pk,
                    booking_id=booking.pk,
                    tenant_id=booking.tenant_id,
                    property_id=property_obj.pk,
                    start_date=lease.start_date,
                    end_date=lease.end_date,
                    monthly_rent=lease.monthly_rent,
                    currency=lease.currency,
                    aggregate_id=lease.pk,
                ))
        except IntegrityError:
            # A concurrent activation inserted the lease first
            lease = Lease.objects.get(booking_id=booking.pk)
            logger.info(f"Concurrent activation for booking {booking.pk}, using lease {lease.pk}")
            return lease

        logger.info(
            f"Lease {lease.pk} activated for booking {booking.pk}: "
            f"{term} at {lease.monthly_rent} {lease.currency}"
        )
        return lease

    def _existing_lease(self, booking) -> Lease | None:
        return Lease.objects.filter(booking_id=booking.pk).first()
