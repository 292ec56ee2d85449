"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Booking


class BookingSerializer(serializers.ModelSerializer):
    """Read representation of a booking."""

    property_title = serializers.CharField(source="property.title", read_only=True)
    lease_id = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "tenant",
            "property",
            "property_title",
            "status",
            "deposit_paid",
            "rent_paid",
            "start_date",
            "expiry_date",
            "payment_deadline",
            "completed_at",
            "expired_at",
            "cancelled_at",
            "cancellation_reason",
            "lease_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_lease_id(self, obj: Booking) -> int | None:
        lease = getattr(obj, "lease", None)
        return lease.pk if lease is not None else None


class BookingCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
