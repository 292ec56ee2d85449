"""Notification model.

An in-app message shown to a user about a booking or lease event. Email
and SMS copies are sent alongside and are not stored.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Notification(models.Model):
    """A message sent to a user about some event."""

    class Kind(models.TextChoices):
        BOOKING_CREATED = "booking_created", _("Booking created")
        BOOKING_EXPIRED = "booking_expired", _("Booking expired")
        BOOKING_CANCELLED = "booking_cancelled", _("Booking cancelled")
        LEASE_ACTIVATED = "lease_activated", _("Lease activated")
        PAYMENT_REMINDER = "payment_reminder", _("Payment reminder")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notifications'
    )
    kind = models.CharField(max_length=32, choices=Kind.choices)
    title = models.CharField(max_length=255)
    message = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"Notification to {self.user_id}: {self.title}"
