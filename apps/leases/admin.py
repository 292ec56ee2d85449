"""Admin registrations for leases."""

from __future__ import annotations

from django.contrib import admin

from .models import Lease


@admin.register(Lease)
class LeaseAdmin(admin.ModelAdmin):
    list_display = ("id", "tenant", "property", "start_date", "end_date", "monthly_rent", "currency", "status")
    list_filter = ("status", "currency")
    search_fields = ("tenant__email", "tenant__username", "property__title")
    readonly_fields = ("booking", "created_at", "updated_at")
