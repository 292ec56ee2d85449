"""Tests for notification delivery."""

from datetime import date

import pytest
from django.core import mail

from apps.finances.processor import PaymentEventProcessor, PaymentNotification
from apps.notifications import handlers, services, tasks
from apps.notifications.models import Notification
from apps.notifications.senders import EmailSender

TODAY = date(2026, 3, 2)

sent_sms = []


class RecordingSmsSender:
    def send(self, recipient, subject, message):
        sent_sms.append((recipient, message))
        return {"success": True}


def deposit(tenant, property_obj, transaction_id="QK1"):
    return PaymentNotification(
        transaction_id=transaction_id,
        tenant_id=tenant.pk,
        property_id=property_obj.pk,
        kind="DEPOSIT",
        outcome="SUCCESS",
    )


@pytest.mark.django_db
def test_booking_created_notifies_tenant(tenant, listing, mailoutbox, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        PaymentEventProcessor().handle_payment_notification(deposit(tenant, listing))

    notification = Notification.objects.get(user=tenant)
    assert notification.kind == Notification.Kind.BOOKING_CREATED
    assert "Kilimani 2BR" in notification.message
    assert "KES" in notification.message
    assert len(mailoutbox) == 1
    assert mailoutbox[0].subject == "Booking confirmed"


@pytest.mark.django_db
def test_expiry_and_lease_notices(book, tenant, listing, rival, make_property, django_capture_on_commit_callbacks):
    from apps.bookings.application.command_handlers import (
        CompleteBookingPaymentCommand,
        CompleteBookingPaymentHandler,
    )
    from apps.bookings.services import sweep_expired_bookings

    other = make_property(title="Westlands studio")
    with django_capture_on_commit_callbacks(execute=True):
        book(tenant, listing, today=TODAY)
        book(rival, other, today=TODAY)
        CompleteBookingPaymentHandler().handle(
            CompleteBookingPaymentCommand(tenant_id=rival.pk, property_id=other.pk)
        )
        sweep_expired_bookings(date(2026, 4, 1))

    assert Notification.objects.filter(user=tenant, kind=Notification.Kind.BOOKING_EXPIRED).exists()
    lease_notice = Notification.objects.get(user=rival, kind=Notification.Kind.LEASE_ACTIVATED)
    assert "02.03.2026" in lease_notice.message


@pytest.mark.django_db
def test_email_failure_is_swallowed(tenant, monkeypatch):
    def broken_send(self, recipient, subject, message):
        raise ConnectionRefusedError("smtp down")

    monkeypatch.setattr(EmailSender, "send", broken_send)

    results = services.notify_user_all_channels(tenant, Notification.Kind.BOOKING_CREATED, "Hello", "Body")

    assert results == {"email": False, "sms": False, "in_app": True}
    assert Notification.objects.filter(user=tenant).count() == 1


@pytest.mark.django_db
def test_sms_goes_through_configured_sender(tenant, settings):
    settings.NOTIFICATIONS_SMS_SENDER = f"{__name__}.RecordingSmsSender"
    sent_sms.clear()
    tenant.phone = "+254712345678"

    results = services.notify_user_all_channels(tenant, Notification.Kind.BOOKING_CREATED, "Hello", "Body")

    assert results["sms"] is True
    assert sent_sms == [("+254712345678", "Body")]


@pytest.mark.django_db
def test_user_without_phone_gets_no_sms(tenant, settings):
    settings.NOTIFICATIONS_SMS_SENDER = f"{__name__}.RecordingSmsSender"
    sent_sms.clear()

    results = services.notify_user_all_channels(tenant, Notification.Kind.BOOKING_CREATED, "Hello", "Body")

    assert results["sms"] is False
    assert sent_sms == []


@pytest.mark.django_db
def test_failing_handler_does_not_undo_booking(tenant, listing, monkeypatch, django_capture_on_commit_callbacks):
    from apps.audit.models import AuditRecord

    def broken_delay(*args, **kwargs):
        raise ConnectionError("broker unreachable")

    monkeypatch.setattr(tasks.send_booking_created_notification, "delay", broken_delay)

    with django_capture_on_commit_callbacks(execute=True):
        outcome = PaymentEventProcessor().handle_payment_notification(deposit(tenant, listing))

    assert outcome.code == "BOOKING_CREATED"
    assert not Notification.objects.exists()
    # Other handlers still ran
    assert AuditRecord.objects.filter(event_type="BookingCreated").exists()


@pytest.mark.django_db
def test_task_for_missing_booking_is_dropped():
    assert tasks.send_booking_created_notification(987654) == {}
    assert len(mail.outbox) == 0


def test_handlers_registered_on_bus():
    from apps.bookings.domain.events import BookingCreated
    from shared.application.message_bus import message_bus

    assert handlers.on_booking_created in message_bus._event_handlers[BookingCreated]
