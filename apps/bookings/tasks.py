"""Celery tasks for the booking domain."""

from __future__ import annotations

from celery import shared_task  # type: ignore

from .services import send_payment_deadline_reminders as _send_payment_deadline_reminders
from .services import sweep_expired_bookings


# ============================================================================
# PERIODIC TASKS (scheduled by Celery Beat)
# ============================================================================

@shared_task(name="bookings.expire_overdue_bookings")
def expire_overdue_bookings() -> dict[str, int]:
    """
    Expire ACTIVE bookings whose payment deadline passed without rent.

    Runs every 5 minutes via Celery Beat.

    Returns:
        dict: {"expired": n, "skipped": m, "failed": k}
    """
    return sweep_expired_bookings()


@shared_task(name="bookings.send_payment_deadline_reminders")
def send_payment_deadline_reminders() -> dict[str, int]:
    """
    Remind tenants of an approaching rent deadline.

    Runs daily at 10:00 via Celery Beat.

    Returns:
        dict: {"sent": n, "failed": k}
    """
    return _send_payment_deadline_reminders()

