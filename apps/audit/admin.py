"""Admin registrations for the audit trail."""

from __future__ import annotations

from django.contrib import admin

from .models import AuditRecord


@admin.register(AuditRecord)
class AuditRecordAdmin(admin.ModelAdmin):
    list_display = ("event_type", "object_type", "object_id", "occurred_at")
    list_filter = ("event_type", "object_type")
    search_fields = ("object_id", "event_id")
    readonly_fields = [field.name for field in AuditRecord._meta.fields]

    def has_add_permission(self, request):  # type: ignore
        return False

    def has_change_permission(self, request, obj=None):  # type: ignore
        return False
