"""
Payment Event Processor

Turns a payment gateway notification into at most one booking/lease
transition.

Deduplication is insert-or-detect: the notification is inserted under its
unique transaction id and a unique violation means it was seen before. The
earlier result is returned and nothing else happens. The transition itself
runs in a savepoint; when it fails the savepoint is rolled back, the reason
is stored on the event and returned as the outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from django.db import IntegrityError, transaction  # type: ignore

from apps.bookings.application.command_handlers import (
    CompleteBookingPaymentCommand,
    CreateBookingFromDepositCommand,
)
from apps.properties.selectors import find_property, find_user
from shared.application.message_bus import message_bus
from shared.exceptions import DuplicateEventError, InvalidStateError, RentalCoreError

from .models import PaymentEvent

logger = logging.getLogger(__name__)


class OutcomeCode(str, Enum):
    BOOKING_CREATED = "BOOKING_CREATED"
    PAYMENT_COMPLETED = "PAYMENT_COMPLETED"
    LEASE_ACTIVATED = "LEASE_ACTIVATED"
    ALREADY_PROCESSED = "ALREADY_PROCESSED"
    PAYMENT_FAILED = "PAYMENT_FAILED"


SUCCESS_CODES = frozenset({
    OutcomeCode.BOOKING_CREATED.value,
    OutcomeCode.PAYMENT_COMPLETED.value,
    OutcomeCode.LEASE_ACTIVATED.value,
})


@dataclass(frozen=True)
class PaymentNotification:
    """A payment confirmation as delivered by the gateway."""

    transaction_id: str
    tenant_id: int
    property_id: int
    kind: str
    outcome: str
    amount: Decimal = Decimal("0.00")
    currency: str = "KES"
    timestamp: datetime | None = None
    payload: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ProcessingOutcome:
    code: str
    transaction_id: str
    booking_id: int | None = None
    lease_id: int | None = None
    previous_code: str | None = None
    detail: str = ""

    @property
    def is_success(self) -> bool:
        return self.code in SUCCESS_CODES

    def as_dict(self) -> dict:
        return {
            "outcome": self.code,
            "transaction_id": self.transaction_id,
            "booking_id": self.booking_id,
            "lease_id": self.lease_id,
            "previous_outcome": self.previous_code,
            "detail": self.detail,
        }


class PaymentEventProcessor:
    """Records payment notifications and applies them to bookings."""

    def __init__(self, bus=None):
        self.bus = bus or message_bus

    def handle_payment_notification(self, notification: PaymentNotification) -> ProcessingOutcome:
        """
        Process one notification

        Never raises for domain failures: every result, including
        rejections, is returned as an outcome code and stored on the event.
        """
        with transaction.atomic():
            try:
                record = self._record(notification)
            except DuplicateEventError:
                return self._duplicate(notification)

            try:
                with transaction.atomic():
                    outcome = self._dispatch(notification)
            except RentalCoreError as exc:
                logger.warning(
                    f"Payment {notification.transaction_id} ({notification.kind}) rejected: "
                    f"{exc.code} {exc}"
                )
                record.mark_rejected(exc.code, str(exc))
                return ProcessingOutcome(
                    code=exc.code,
                    transaction_id=notification.transaction_id,
                    detail=str(exc),
                )

            record.mark_processed(
                outcome.code,
                booking_id=outcome.booking_id,
                lease_id=outcome.lease_id,
            )

        logger.info(f"Payment {notification.transaction_id} processed: {outcome.code}")
        return outcome

    def _record(self, notification: PaymentNotification) -> PaymentEvent:
        """Insert the notification; a unique violation means it was seen before."""
        try:
            with transaction.atomic():
                return PaymentEvent.objects.create(
                    transaction_id=notification.transaction_id,
                    tenant_id=notification.tenant_id,
                    property_id=notification.property_id,
                    kind=notification.kind,
                    amount=notification.amount,
                    currency=notification.currency,
                    outcome=notification.outcome,
                    provider_timestamp=notification.timestamp,
                    payload=notification.payload,
                )
        except IntegrityError as exc:
            raise DuplicateEventError(
                f"Payment {notification.transaction_id} already recorded"
            ) from exc

    def _duplicate(self, notification: PaymentNotification) -> ProcessingOutcome:
        previous = PaymentEvent.objects.get(transaction_id=notification.transaction_id)
        logger.info(
            f"Duplicate payment notification {notification.transaction_id}, "
            f"previously {previous.result_code or previous.processing_status}"
        )
        return ProcessingOutcome(
            code=OutcomeCode.ALREADY_PROCESSED.value,
            transaction_id=notification.transaction_id,
            booking_id=previous.booking_id,
            lease_id=previous.lease_id,
            previous_code=previous.result_code or None,
        )

    def _dispatch(self, notification: PaymentNotification) -> ProcessingOutcome:
        tenant = find_user(notification.tenant_id)
        property_obj = find_property(notification.property_id)
        transaction_id = notification.transaction_id

        if notification.outcome != PaymentEvent.Outcome.SUCCESS:
            logger.info(f"Payment {transaction_id} reported as failed by the gateway")
            return ProcessingOutcome(OutcomeCode.PAYMENT_FAILED.value, transaction_id)

        if notification.kind == PaymentEvent.Kind.DEPOSIT:
            booking = self.bus.handle_command(
                CreateBookingFromDepositCommand(tenant_id=tenant.pk, property_id=property_obj.pk)
            )
            return ProcessingOutcome(OutcomeCode.BOOKING_CREATED.value, transaction_id, booking_id=booking.pk)

        if notification.kind == PaymentEvent.Kind.FULL_PAYMENT:
            self.bus.handle_command(
                CreateBookingFromDepositCommand(tenant_id=tenant.pk, property_id=property_obj.pk)
            )
            lease = self.bus.handle_command(
                CompleteBookingPaymentCommand(tenant_id=tenant.pk, property_id=property_obj.pk)
            )
            return ProcessingOutcome(
                OutcomeCode.LEASE_ACTIVATED.value,
                transaction_id,
                booking_id=lease.booking_id,
                lease_id=lease.pk,
            )

        if notification.kind == PaymentEvent.Kind.RENT:
            lease = self.bus.handle_command(
                CompleteBookingPaymentCommand(tenant_id=tenant.pk, property_id=property_obj.pk)
            )
            return ProcessingOutcome(
                OutcomeCode.PAYMENT_COMPLETED.value,
                transaction_id,
                booking_id=lease.booking_id,
                lease_id=lease.pk,
            )

        raise InvalidStateError(
            f"Unknown payment kind: {notification.kind}", code="UNSUPPORTED_PAYMENT_KIND"
        )
