"""Property models for the rental marketplace.

The catalog itself is managed elsewhere; the booking core only reads the
rent terms of a property and keeps one availability row per property.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Property(models.Model):
    """A rentable property and its rent terms."""

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="properties",
    )
    title = models.CharField(max_length=255)
    address = models.CharField(max_length=255, blank=True)
    rent_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Monthly rent."),
    )
    deposit_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    currency = models.CharField(max_length=3, default="KES")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.title


class PropertyAvailability(models.Model):
    """Claim flag of a property, mutated only through the availability ledger."""

    class Status(models.TextChoices):
        CLAIMABLE = "claimable", _("Claimable")
        CLAIMED = "claimed", _("Claimed")

    property = models.OneToOneField(
        Property,
        on_delete=models.CASCADE,
        related_name="availability",
    )
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.CLAIMABLE,
    )
    revision = models.PositiveIntegerField(default=0)
    claimed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="claimed_properties",
    )
    claimed_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Property availability")
        verbose_name_plural = _("Property availability")
        indexes = [
            models.Index(fields=["status"], name="availability_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.property_id}: {self.status} (rev {self.revision})"
