"""Financial models for the rental marketplace."""

from __future__ import annotations

from decimal import Decimal

from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class PaymentEvent(models.Model):
    """A payment gateway notification, stored once per transaction id.

    The notification fields never change after the insert; only the
    processing marker (status, result code, references) is filled in.
    """

    class Kind(models.TextChoices):
        DEPOSIT = "DEPOSIT", _("Deposit")
        RENT = "RENT", _("Rent")
        FULL_PAYMENT = "FULL_PAYMENT", _("Deposit and rent")

    class Outcome(models.TextChoices):
        SUCCESS = "SUCCESS", _("Success")
        FAILURE = "FAILURE", _("Failure")

    class ProcessingStatus(models.TextChoices):
        RECEIVED = "received", _("Received")
        PROCESSED = "processed", _("Processed")
        REJECTED = "rejected", _("Rejected")

    transaction_id = models.CharField(max_length=100, unique=True)
    tenant_id = models.BigIntegerField()
    property_id = models.BigIntegerField()
    kind = models.CharField(max_length=16, choices=Kind.choices)
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="KES")
    outcome = models.CharField(max_length=16, choices=Outcome.choices)
    provider_timestamp = models.DateTimeField(null=True, blank=True)
    received_at = models.DateTimeField(auto_now_add=True)
    payload = models.JSONField(default=dict, blank=True)

    processing_status = models.CharField(
        max_length=16,
        choices=ProcessingStatus.choices,
        default=ProcessingStatus.RECEIVED,
    )
    result_code = models.CharField(max_length=32, blank=True)
    failure_reason = models.TextField(blank=True)
    booking = models.ForeignKey(
        "bookings.Booking",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payment_events",
    )
    lease = models.ForeignKey(
        "leases.Lease",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payment_events",
    )
    processed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _("Payment event")
        verbose_name_plural = _("Payment events")
        ordering = ["-received_at"]
        indexes = [
            models.Index(fields=["tenant_id", "kind"], name="payment_event_tenant_kind_idx"),
            models.Index(fields=["processing_status"], name="payment_event_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.transaction_id} {self.kind}/{self.outcome} -> {self.result_code or self.processing_status}"

    def mark_processed(self, result_code: str, *, booking_id=None, lease_id=None) -> None:
        self.processing_status = self.ProcessingStatus.PROCESSED
        self.result_code = result_code
        self.booking_id = booking_id
        self.lease_id = lease_id
        self.processed_at = timezone.now()
        self.save(update_fields=["processing_status", "result_code", "booking", "lease", "processed_at"])

    def mark_rejected(self, result_code: str, reason: str) -> None:
        self.processing_status = self.ProcessingStatus.REJECTED
        self.result_code = result_code
        self.failure_reason = reason
        self.processed_at = timezone.now()
        self.save(update_fields=["processing_status", "result_code", "failure_reason", "processed_at"])
