"""Serializers for the finance domain."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import serializers  # type: ignore

from shared.domain.value_objects import SUPPORTED_CURRENCIES

from .models import PaymentEvent
from .processor import PaymentNotification

# Upper bound of the BigIntegerField id columns on PaymentEvent
MAX_BIGINT = 2**63 - 1


class PaymentNotificationSerializer(serializers.Serializer):
    """Validates the payment gateway callback body."""

    transaction_id = serializers.CharField(max_length=100)
    tenant_id = serializers.IntegerField(min_value=1, max_value=MAX_BIGINT)
    property_id = serializers.IntegerField(min_value=1, max_value=MAX_BIGINT)
    kind = serializers.ChoiceField(choices=PaymentEvent.Kind.choices)
    outcome = serializers.ChoiceField(choices=PaymentEvent.Outcome.choices)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    currency = serializers.CharField(max_length=3, required=False)
    timestamp = serializers.DateTimeField()

    def validate_transaction_id(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("transaction_id must not be blank.")
        return value

    def validate_currency(self, value: str) -> str:
        value = value.upper()
        if value not in SUPPORTED_CURRENCIES:
            raise serializers.ValidationError(f"Unsupported currency: {value}")
        return value

    def to_notification(self, payload: dict) -> PaymentNotification:
        data = self.validated_data
        return PaymentNotification(
            transaction_id=data["transaction_id"],
            tenant_id=data["tenant_id"],
            property_id=data["property_id"],
            kind=data["kind"],
            outcome=data["outcome"],
            amount=data["amount"],
            currency=data.get("currency") or settings.DEFAULT_CURRENCY,
            timestamp=data["timestamp"],
            payload=payload,
        )
