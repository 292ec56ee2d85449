"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingFromDepositCommand: Claim a property once the deposit is paid
- CompleteBookingPaymentCommand: Record rent and activate the lease
- CancelBookingCommand: Cancel an open booking and release the property

Every status change goes through ``transition_booking``, a compare-and-set
on the current status. If another writer moved the booking first, zero rows
are updated and the transition is rejected.
"""

from dataclasses import dataclass
from datetime import date, timedelta
import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import DateRange
from shared.exceptions import ConflictError, InvalidStateError, NotFoundError
from apps.bookings.domain.entities import BookingStatus, ensure_transition
from apps.bookings.domain.events import BookingCancelled, BookingCompleted, BookingCreated
from apps.bookings.models import Booking
from apps.leases.engine import LeaseActivationEngine
from apps.properties.ledger import AvailabilityLedger, ClaimFailure

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingFromDepositCommand:
    """
    Command to open a booking after a successful deposit

    ``today`` defaults to the local date; the booking window and the
    payment deadline are counted from it.
    """
    tenant_id: int
    property_id: int
    today: date | None = None


@dataclass
class CompleteBookingPaymentCommand:
    """Command to record rent for the tenant's active booking"""
    tenant_id: int
    property_id: int


@dataclass
class CancelBookingCommand:
    """Command to cancel a booking"""
    booking_id: int
    reason: str = ''


# ===== Transitions =====

def transition_booking(booking: Booking, target: str, **changes) -> Booking:
    """
    Move a booking to ``target`` if nobody else moved it first

    The update is conditional on the status the caller read. The in-memory
    booking is updated on success.

    Raises:
        InvalidStateError: If the table forbids the transition, or the
            booking changed status since it was read
    """
    expected = booking.status
    ensure_transition(expected, target)

    changes['updated_at'] = timezone.now()
    updated = Booking.objects.filter(pk=booking.pk, status=expected).update(status=target, **changes)
    if not updated:
        current = Booking.objects.filter(pk=booking.pk).values_list('status', flat=True).first()
        logger.info(
            f"Booking {booking.pk} transition {expected} -> {target} lost: status is now {current}"
        )
        raise InvalidStateError(
            f"Booking {booking.pk} is no longer {expected} (now {current})"
        )

    booking.status = target
    for name, value in changes.items():
        setattr(booking, name, value)
    logger.info(f"Booking {booking.pk}: {expected} -> {target}")
    return booking


# ===== Command Handlers =====

class CreateBookingFromDepositHandler:
    """
    Handler for CreateBookingFromDeposit command

    The claim and the insert share one transaction: if the insert fails the
    claim is rolled back with it. The partial unique indexes on ACTIVE
    bookings catch what the ledger's tenant check cannot see (two deposits
    from the same tenant racing on different properties).
    """

    def __init__(self, ledger: AvailabilityLedger | None = None):
        self.ledger = ledger or AvailabilityLedger()

    def handle(self, command: CreateBookingFromDepositCommand) -> Booking:
        """
        Handle booking creation

        Returns: The ACTIVE booking

        Raises:
            ConflictError: With the ledger's failure reason as code
            NotFoundError: If the property does not exist
        """
        today = command.today or timezone.localdate()
        window = DateRange.starting(today, settings.BOOKING_WINDOW_DAYS)
        payment_deadline = today + timedelta(days=settings.BOOKING_PAYMENT_GRACE_DAYS)

        logger.info(
            f"Creating booking for property {command.property_id}, tenant {command.tenant_id}, "
            f"window {window}"
        )

        with DjangoUnitOfWork() as uow:
            claim = self.ledger.try_claim(command.property_id, command.tenant_id)
            if not claim.succeeded:
                raise ConflictError(
                    f"Cannot claim property {command.property_id} for tenant {command.tenant_id}",
                    code=claim.reason.value,
                )

            try:
                with transaction.atomic():
                    booking = Booking.objects.create(
                        tenant_id=command.tenant_id,
                        property_id=command.property_id,
                        status=BookingStatus.ACTIVE,
                        deposit_paid=True,
                        rent_paid=False,
                        start_date=window.start_date,
                        expiry_date=window.end_date,
                        payment_deadline=payment_deadline,
                    )
            except IntegrityError:
                reason = self._conflict_reason(command)
                logger.warning(
                    f"Booking insert for tenant {command.tenant_id} on property "
                    f"{command.property_id} lost to a concurrent booking ({reason.value})"
                )
                raise ConflictError("Concurrent booking detected", code=reason.value)

            uow.add_event(BookingCreated(
                booking_id=booking.pk,
                tenant_id=booking.tenant_id,
                property_id=booking.property_id,
                start_date=booking.start_date,
                expiry_date=booking.expiry_date,
                payment_deadline=booking.payment_deadline,
                aggregate_id=booking.pk,
            ))

        logger.info(f"Booking {booking.pk} created, rent due by {booking.payment_deadline}")
        return booking

    def _conflict_reason(self, command: CreateBookingFromDepositCommand) -> ClaimFailure:
        tenant_busy = Booking.objects.filter(
            tenant_id=command.tenant_id,
            status=BookingStatus.ACTIVE,
        ).exists()
        if tenant_busy:
            return ClaimFailure.TENANT_ALREADY_BOOKED
        return ClaimFailure.PROPERTY_UNAVAILABLE


class CompleteBookingPaymentHandler:
    """
    Handler for CompleteBookingPayment command

    ACTIVE -> COMPLETED, then the lease is activated in the same
    transaction. The property stays claimed by the tenant.
    """

    def __init__(self, engine: LeaseActivationEngine | None = None):
        self.engine = engine or LeaseActivationEngine()

    def handle(self, command: CompleteBookingPaymentCommand):
        """
        Handle rent payment

        Returns: The activated Lease

        Raises:
            NotFoundError: NO_ACTIVE_BOOKING if the tenant has no ACTIVE booking
            InvalidStateError: PROPERTY_MISMATCH if it is for another property,
                INVALID_TRANSITION if the booking expired concurrently
        """
        logger.info(
            f"Completing payment for tenant {command.tenant_id}, property {command.property_id}"
        )

        with DjangoUnitOfWork() as uow:
            try:
                booking = Booking.objects.select_related('property').get(
                    tenant_id=command.tenant_id,
                    status=BookingStatus.ACTIVE,
                )
            except Booking.DoesNotExist:
                raise NotFoundError(
                    f"Tenant {command.tenant_id} has no active booking",
                    code='NO_ACTIVE_BOOKING',
                )

            if booking.property_id != command.property_id:
                raise InvalidStateError(
                    f"Active booking {booking.pk} is for property {booking.property_id}, "
                    f"not {command.property_id}",
                    code='PROPERTY_MISMATCH',
                )

            transition_booking(
                booking,
                BookingStatus.COMPLETED,
                rent_paid=True,
                completed_at=timezone.now(),
            )
            uow.add_event(BookingCompleted(
                booking_id=booking.pk,
                tenant_id=booking.tenant_id,
                property_id=booking.property_id,
                aggregate_id=booking.pk,
            ))

            lease = self.engine.activate(booking)

        return lease


class CancelBookingHandler:
    """Handler for CancelBooking command"""

    def __init__(self, ledger: AvailabilityLedger | None = None):
        self.ledger = ledger or AvailabilityLedger()

    def handle(self, command: CancelBookingCommand) -> Booking:
        """
        Handle booking cancellation

        Raises:
            NotFoundError: If the booking does not exist
            InvalidStateError: If the booking is already terminal
        """
        logger.info(f"Cancelling booking {command.booking_id}: {command.reason}")

        with DjangoUnitOfWork() as uow:
            try:
                booking = Booking.objects.get(pk=command.booking_id)
            except Booking.DoesNotExist:
                raise NotFoundError(f"Booking {command.booking_id} not found")

            transition_booking(
                booking,
                BookingStatus.CANCELLED,
                cancelled_at=timezone.now(),
                cancellation_reason=command.reason[:255],
            )
            self.ledger.release(booking.property_id)
            uow.add_event(BookingCancelled(
                booking_id=booking.pk,
                tenant_id=booking.tenant_id,
                property_id=booking.property_id,
                reason=booking.cancellation_reason,
                aggregate_id=booking.pk,
            ))

        return booking


def register_handlers(bus) -> None:
    """Wire booking commands into the message bus"""
    handlers = {
        CreateBookingFromDepositCommand: CreateBookingFromDepositHandler().handle,
        CompleteBookingPaymentCommand: CompleteBookingPaymentHandler().handle,
        CancelBookingCommand: CancelBookingHandler().handle,
    }
    for command_type, handler in handlers.items():
        if not bus.has_command_handler(command_type):
            bus.register_command_handler(command_type, handler)
