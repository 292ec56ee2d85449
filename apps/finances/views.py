"""API views for payment gateway callbacks.

The gateway delivers at-least-once. Every notification that passes
validation is acknowledged with 200 and its outcome code, rejections and
duplicates included, so that the gateway stops redelivering it.
"""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .processor import PaymentEventProcessor
from .serializers import PaymentNotificationSerializer
from .services import verify_webhook_signature

logger = logging.getLogger(__name__)


class PaymentWebhookView(APIView):
    """Inbound payment notification endpoint."""

    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]
    processor_class = PaymentEventProcessor

    def post(self, request, *args, **kwargs):  # type: ignore
        secret = settings.PAYMENT_WEBHOOK_SECRET
        if secret:
            signature = request.headers.get(settings.PAYMENT_WEBHOOK_SIGNATURE_HEADER)
            if not verify_webhook_signature(request.body, signature, secret):
                logger.error("Payment webhook rejected: invalid signature")
                return Response({"detail": "Invalid signature"}, status=status.HTTP_403_FORBIDDEN)

        serializer = PaymentNotificationSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning(f"Payment webhook rejected: invalid payload {serializer.errors}")
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        payload = request.data if isinstance(request.data, dict) else {}
        notification = serializer.to_notification(dict(payload))
        outcome = self.processor_class().handle_payment_notification(notification)
        return Response(outcome.as_dict(), status=status.HTTP_200_OK)
