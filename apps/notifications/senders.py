"""Delivery channels for notifications."""

from abc import ABC, abstractmethod
import logging

from django.conf import settings
from django.core.mail import send_mail
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class BaseSender(ABC):
    """Base class for senders"""

    @abstractmethod
    def send(self, recipient: str, subject: str, message: str) -> dict:
        pass


class EmailSender(BaseSender):
    """Sends through Django's configured email backend"""

    def send(self, recipient, subject, message):
        if not recipient:
            return {"success": False, "error": "No email"}

        send_mail(
            subject=subject,
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient],
            fail_silently=False,
        )
        return {"success": True, "message": "Sent via email"}


class LoggingSmsSender(BaseSender):
    """Writes SMS messages to the log instead of a gateway"""

    def send(self, recipient, subject, message):
        if not recipient:
            return {"success": False, "error": "No phone number"}

        logger.info(f"[SMS] to {recipient}: {message[:160]}")
        return {"success": True, "message": "Logged SMS"}


def get_sms_sender() -> BaseSender:
    return import_string(settings.NOTIFICATIONS_SMS_SENDER)()
