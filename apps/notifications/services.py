"""Notification services for sending emails, SMS and in-app messages.

Every function here returns a success flag and logs failures instead of
raising: a notice that cannot be delivered must never undo or block the
booking change that triggered it.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from shared.domain.value_objects import Money

from .models import Notification
from .senders import EmailSender, get_sms_sender

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Booking
    from apps.leases.models import Lease

logger = logging.getLogger(__name__)


def _display_name(user) -> str:
    return user.get_full_name() or user.get_username()


def _format_amount(amount, currency: str) -> str:
    try:
        return str(Money(amount, currency))
    except ValueError:
        return f"{amount} {currency}"


# ============================================================================
# CHANNELS
# ============================================================================

def send_email_notification(recipient_email: str, subject: str, message: str) -> bool:
    try:
        result = EmailSender().send(recipient_email, subject, message)
    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False

    if result["success"]:
        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
    return result["success"]


def send_sms_notification(phone: str, message: str) -> bool:
    try:
        result = get_sms_sender().send(phone, "", message)
    except Exception as e:
        logger.error(f"Failed to send SMS to {phone}: {e}", exc_info=True)
        return False
    return result["success"]


def create_in_app_notification(user, kind: str, title: str, message: str) -> bool:
    try:
        Notification.objects.create(user=user, kind=kind, title=title, message=message)
    except Exception as e:
        logger.error(f"Failed to create in-app notification for user {user.pk}: {e}", exc_info=True)
        return False

    logger.info(f"In-app notification created for user {user.pk}: {title}")
    return True


def notify_user_all_channels(user, kind: str, title: str, message: str) -> dict[str, bool]:
    """
    Send a notice to a user over every channel they can be reached on.

    The SMS channel needs a ``phone`` attribute on the user model; stock
    users only get email and in-app copies.

    Returns:
        dict: Delivery result per channel
    """
    results = {"email": False, "sms": False, "in_app": False}

    if user.email:
        results["email"] = send_email_notification(user.email, title, message)

    phone = getattr(user, "phone", "")
    if phone:
        results["sms"] = send_sms_notification(phone, message)

    results["in_app"] = create_in_app_notification(user, kind, title, message)
    return results


# ============================================================================
# BOOKING / LEASE NOTICES
# ============================================================================

def notify_booking_created(booking: "Booking") -> dict[str, bool]:
    tenant = booking.tenant
    rent = _format_amount(booking.property.rent_amount, booking.property.currency)
    message = (
        f"Hello {_display_name(tenant)}, your deposit for {booking.property.title} was received "
        f"and the property is reserved for you. Pay the first month's rent ({rent}) "
        f"by {booking.payment_deadline:%d.%m.%Y} to activate your lease."
    )
    return notify_user_all_channels(tenant, Notification.Kind.BOOKING_CREATED, "Booking confirmed", message)


def notify_booking_expired(booking: "Booking") -> dict[str, bool]:
    tenant = booking.tenant
    message = (
        f"Hello {_display_name(tenant)}, rent for {booking.property.title} was not received "
        f"by {booking.payment_deadline:%d.%m.%Y}. Your booking has expired and the property "
        f"has been released."
    )
    return notify_user_all_channels(tenant, Notification.Kind.BOOKING_EXPIRED, "Booking expired", message)


def notify_booking_cancelled(booking: "Booking") -> dict[str, bool]:
    tenant = booking.tenant
    message = f"Your booking for {booking.property.title} was cancelled."
    if booking.cancellation_reason:
        message += f" Reason: {booking.cancellation_reason}"
    return notify_user_all_channels(tenant, Notification.Kind.BOOKING_CANCELLED, "Booking cancelled", message)


def notify_lease_activated(lease: "Lease") -> dict[str, bool]:
    tenant = lease.tenant
    rent = _format_amount(lease.monthly_rent, lease.currency)
    message = (
        f"Congratulations {_display_name(tenant)}! Your lease for {lease.property.title} is active "
        f"from {lease.start_date:%d.%m.%Y} to {lease.end_date:%d.%m.%Y}. Monthly rent: {rent}."
    )
    return notify_user_all_channels(tenant, Notification.Kind.LEASE_ACTIVATED, "Lease activated", message)


def send_payment_reminder(booking: "Booking", today: date) -> bool:
    """Remind a tenant that rent is due. True if at least one channel delivered."""
    try:
        days_left = (booking.payment_deadline - today).days
        rent = _format_amount(booking.property.rent_amount, booking.property.currency)
        when = "today" if days_left == 0 else f"in {days_left} day{'s' if days_left != 1 else ''}"
        message = (
            f"Reminder: rent of {rent} for {booking.property.title} is due {when} "
            f"({booking.payment_deadline:%d.%m.%Y}). Unpaid bookings expire after the deadline."
        )
        results = notify_user_all_channels(
            booking.tenant, Notification.Kind.PAYMENT_REMINDER, "Rent payment reminder", message
        )
    except Exception as e:
        logger.error(f"Failed to send payment reminder for booking {booking.pk}: {e}", exc_info=True)
        return False

    return any(results.values())
