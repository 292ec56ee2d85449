"""Admin registrations for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "tenant",
        "property",
        "status",
        "deposit_paid",
        "rent_paid",
        "start_date",
        "payment_deadline",
        "expiry_date",
    )
    list_filter = ("status", "deposit_paid", "rent_paid")
    search_fields = ("tenant__email", "tenant__username", "property__title")
    date_hierarchy = "start_date"
    # Status only changes through the booking commands
    readonly_fields = (
        "tenant",
        "property",
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
        "created_at",
        "updated_at",
    )

    def has_delete_permission(self, request, obj=None):  # type: ignore
        return False
