"""Admin registrations for properties."""

from __future__ import annotations

from django.contrib import admin

from .models import Property, PropertyAvailability


class PropertyAvailabilityInline(admin.StackedInline):
    model = PropertyAvailability
    can_delete = False
    extra = 0
    readonly_fields = ("status", "revision", "claimed_by", "claimed_at", "updated_at")


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("title", "owner", "rent_amount", "deposit_amount", "currency", "created_at")
    list_filter = ("currency",)
    search_fields = ("title", "address", "owner__email", "owner__username")
    inlines = (PropertyAvailabilityInline,)
    readonly_fields = ("created_at", "updated_at")


@admin.register(PropertyAvailability)
class PropertyAvailabilityAdmin(admin.ModelAdmin):
    list_display = ("property", "status", "revision", "claimed_by", "claimed_at")
    list_filter = ("status",)
    search_fields = ("property__title",)
    readonly_fields = ("property", "status", "revision", "claimed_by", "claimed_at", "updated_at")
