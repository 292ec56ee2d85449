"""Admin registrations for finances."""

from __future__ import annotations

from django.contrib import admin

from .models import PaymentEvent


@admin.register(PaymentEvent)
class PaymentEventAdmin(admin.ModelAdmin):
    list_display = (
        "transaction_id",
        "kind",
        "outcome",
        "amount",
        "currency",
        "processing_status",
        "result_code",
        "received_at",
    )
    list_filter = ("kind", "outcome", "processing_status", "result_code")
    search_fields = ("transaction_id", "tenant_id", "property_id")
    readonly_fields = [field.name for field in PaymentEvent._meta.fields]

    def has_add_permission(self, request):  # type: ignore
        return False

    def has_delete_permission(self, request, obj=None):  # type: ignore
        return False
