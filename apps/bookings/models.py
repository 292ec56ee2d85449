"""Booking models for the rental marketplace."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain.entities import OPEN_STATES, BookingStatus


class Booking(models.Model):
    """A tenant's deposit-backed hold on a property.

    Rows are never deleted; terminal bookings stay as history.
    """

    Status = BookingStatus
    OPEN_STATUSES = tuple(OPEN_STATES)

    tenant = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    status = models.CharField(
        max_length=16,
        choices=BookingStatus.choices,
        default=BookingStatus.PENDING,
    )
    deposit_paid = models.BooleanField(default=False)
    rent_paid = models.BooleanField(default=False)
    start_date = models.DateField()
    expiry_date = models.DateField()
    payment_deadline = models.DateField(
        help_text=_("Last day rent is accepted before the booking expires."),
    )
    completed_at = models.DateTimeField(null=True, blank=True)
    expired_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["tenant"],
                condition=models.Q(status="ACTIVE"),
                name="booking_one_active_per_tenant",
            ),
            models.UniqueConstraint(
                fields=["property"],
                condition=models.Q(status="ACTIVE"),
                name="booking_one_active_per_property",
            ),
            models.CheckConstraint(
                condition=models.Q(rent_paid=False) | models.Q(deposit_paid=True),
                name="booking_rent_requires_deposit",
            ),
            models.CheckConstraint(
                condition=models.Q(expiry_date__gt=models.F("start_date")),
                name="booking_expiry_after_start",
            ),
            models.CheckConstraint(
                condition=models.Q(payment_deadline__lte=models.F("expiry_date")),
                name="booking_deadline_before_expiry",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "payment_deadline"], name="booking_status_deadline_idx"),
            models.Index(fields=["tenant", "status"], name="booking_tenant_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} {self.status} (tenant {self.tenant_id}, property {self.property_id})"
