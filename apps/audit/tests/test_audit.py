"""Tests for the audit sink."""

from datetime import date

import pytest

from apps.audit.handlers import record_event
from apps.audit.models import AuditRecord
from apps.bookings.domain.events import BookingCancelled


@pytest.mark.django_db
def test_transitions_leave_an_audit_trail(book, tenant, listing, django_capture_on_commit_callbacks):
    from apps.bookings.application.command_handlers import CancelBookingCommand, CancelBookingHandler

    with django_capture_on_commit_callbacks(execute=True):
        booking = book(tenant, listing, today=date(2026, 3, 2))
        CancelBookingHandler().handle(CancelBookingCommand(booking_id=booking.pk, reason="Moved abroad"))

    records = AuditRecord.objects.filter(object_type="booking", object_id=booking.pk).order_by("occurred_at")
    assert [record.event_type for record in records] == ["BookingCreated", "BookingCancelled"]
    created, cancelled = records
    assert created.details["payment_deadline"] == "2026-03-17"
    assert cancelled.details["reason"] == "Moved abroad"


@pytest.mark.django_db
def test_same_event_is_recorded_once():
    event = BookingCancelled(booking_id=1, tenant_id=2, property_id=3, reason="test", aggregate_id=1)

    record_event(event)
    record_event(event)

    assert AuditRecord.objects.count() == 1
    record = AuditRecord.objects.get()
    assert record.event_id == event.event_id
    assert record.object_id == 1
