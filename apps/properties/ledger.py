"""
Availability Ledger

Decides which tenant currently holds a property. A property is claimed
with a compare-and-swap on its revision counter, so of two concurrent
claims on the same revision exactly one wins and the other observes
``CONCURRENT_CONFLICT``. Callers run ``try_claim`` inside the same
transaction that records the booking, so a failed insert rolls the claim
back with it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from django.db.models import F  # type: ignore
from django.utils import timezone  # type: ignore

from shared.exceptions import NotFoundError

from .models import PropertyAvailability

logger = logging.getLogger(__name__)


class ClaimFailure(str, Enum):
    PROPERTY_UNAVAILABLE = "PROPERTY_UNAVAILABLE"
    TENANT_ALREADY_BOOKED = "TENANT_ALREADY_BOOKED"
    CONCURRENT_CONFLICT = "CONCURRENT_CONFLICT"


@dataclass(frozen=True)
class ClaimResult:
    succeeded: bool
    reason: ClaimFailure | None = None
    revision: int | None = None


class AvailabilityLedger:
    """Claims and releases properties on behalf of tenants."""

    def try_claim(self, property_id: int, tenant_id: int) -> ClaimResult:
        """
        Claim a property for a tenant

        Fails with TENANT_ALREADY_BOOKED when the tenant holds an open
        booking, PROPERTY_UNAVAILABLE when the property is already claimed
        and CONCURRENT_CONFLICT when another writer changed the row between
        the read and the update.

        Raises:
            NotFoundError: If the property has no availability record
        """
        availability = self._load(property_id)

        if self._tenant_has_open_booking(tenant_id):
            logger.info(f"Tenant {tenant_id} already holds a booking, claim on {property_id} refused")
            return ClaimResult(False, ClaimFailure.TENANT_ALREADY_BOOKED, availability.revision)

        if availability.status != PropertyAvailability.Status.CLAIMABLE:
            logger.info(f"Property {property_id} is not claimable (rev {availability.revision})")
            return ClaimResult(False, ClaimFailure.PROPERTY_UNAVAILABLE, availability.revision)

        updated = PropertyAvailability.objects.filter(
            pk=availability.pk,
            revision=availability.revision,
            status=PropertyAvailability.Status.CLAIMABLE,
        ).update(
            status=PropertyAvailability.Status.CLAIMED,
            revision=F("revision") + 1,
            claimed_by_id=tenant_id,
            claimed_at=timezone.now(),
            updated_at=timezone.now(),
        )
        if not updated:
            logger.warning(
                f"Lost claim race on property {property_id} at rev {availability.revision} "
                f"(tenant {tenant_id})"
            )
            return ClaimResult(False, ClaimFailure.CONCURRENT_CONFLICT, availability.revision)

        revision = availability.revision + 1
        logger.info(f"Property {property_id} claimed by tenant {tenant_id} (rev {revision})")
        return ClaimResult(True, None, revision)

    def release(self, property_id: int) -> None:
        """Make a property claimable again, whatever its current state."""
        updated = PropertyAvailability.objects.filter(property_id=property_id).update(
            status=PropertyAvailability.Status.CLAIMABLE,
            revision=F("revision") + 1,
            claimed_by=None,
            claimed_at=None,
            updated_at=timezone.now(),
        )
        if not updated:
            raise NotFoundError(f"Property {property_id} has no availability record")
        logger.info(f"Property {property_id} released")

    def is_claimable(self, property_id: int) -> bool:
        return self._load(property_id).status == PropertyAvailability.Status.CLAIMABLE

    def _load(self, property_id: int) -> PropertyAvailability:
        try:
            return PropertyAvailability.objects.get(property_id=property_id)
        except PropertyAvailability.DoesNotExist:
            raise NotFoundError(f"Property {property_id} has no availability record")

    def _tenant_has_open_booking(self, tenant_id: int) -> bool:
        from apps.bookings.models import Booking

        return Booking.objects.filter(
            tenant_id=tenant_id,
            status__in=Booking.OPEN_STATUSES,
        ).exists()
