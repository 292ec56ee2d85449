"""Integration tests for the payment webhook."""

from __future__ import annotations

import json
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.finances.models import PaymentEvent
from apps.finances.services import sign_payload
from apps.properties.models import Property

User = get_user_model()

WEBHOOK_SECRET = "whsec_test"


class PaymentWebhookTests(APITestCase):
    """Covers validation, signatures and outcome acknowledgements."""

    def setUp(self) -> None:
        owner = User.objects.create_user(username="landlord", password="pass")
        self.tenant = User.objects.create_user(username="tenant", password="pass", email="tenant@example.com")
        self.property = Property.objects.create(
            owner=owner,
            title="Kilimani 2BR",
            rent_amount=Decimal("45000.00"),
            deposit_amount=Decimal("45000.00"),
        )
        self.url = reverse("payment-webhook")

    def _body(self, **overrides) -> bytes:
        payload = {
            "transaction_id": "QK7A2B9XYZ",
            "tenant_id": self.tenant.pk,
            "property_id": self.property.pk,
            "kind": "DEPOSIT",
            "outcome": "SUCCESS",
            "amount": "45000.00",
            "currency": "KES",
            "timestamp": "2026-03-02T09:15:00+03:00",
        }
        payload.update(overrides)
        return json.dumps(payload).encode("utf-8")

    def _post(self, body: bytes, **headers):
        return self.client.post(self.url, data=body, content_type="application/json", **headers)

    def test_deposit_is_acknowledged_with_outcome(self) -> None:
        response = self._post(self._body())

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["outcome"], "BOOKING_CREATED")
        self.assertEqual(response.data["transaction_id"], "QK7A2B9XYZ")
        booking = Booking.objects.get(pk=response.data["booking_id"])
        self.assertEqual(booking.tenant, self.tenant)
        event = PaymentEvent.objects.get()
        self.assertEqual(event.payload["transaction_id"], "QK7A2B9XYZ")
        self.assertIsNotNone(event.provider_timestamp)

    def test_duplicate_is_acknowledged(self) -> None:
        self._post(self._body())

        response = self._post(self._body())

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["outcome"], "ALREADY_PROCESSED")
        self.assertEqual(response.data["previous_outcome"], "BOOKING_CREATED")
        self.assertEqual(Booking.objects.count(), 1)

    def test_domain_rejection_is_acknowledged(self) -> None:
        response = self._post(self._body(kind="RENT"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["outcome"], "NO_ACTIVE_BOOKING")

    def test_currency_defaults_when_omitted(self) -> None:
        payload = json.loads(self._body())
        del payload["currency"]

        response = self._post(json.dumps(payload).encode("utf-8"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(PaymentEvent.objects.get().currency, "KES")

    def test_missing_field_is_rejected(self) -> None:
        payload = json.loads(self._body())
        del payload["kind"]

        response = self._post(json.dumps(payload).encode("utf-8"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("kind", response.data)
        self.assertFalse(PaymentEvent.objects.exists())

    def test_unknown_kind_and_currency_are_rejected(self) -> None:
        response = self._post(self._body(kind="REFUND", currency="XYZ"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("kind", response.data)
        self.assertIn("currency", response.data)

    def test_ids_beyond_bigint_range_are_rejected(self) -> None:
        response = self._post(self._body(tenant_id=2**70, property_id=2**63))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("tenant_id", response.data)
        self.assertIn("property_id", response.data)
        self.assertFalse(PaymentEvent.objects.exists())

    def test_malformed_json_is_rejected(self) -> None:
        response = self._post(b"{not json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    @override_settings(PAYMENT_WEBHOOK_SECRET=WEBHOOK_SECRET)
    def test_valid_signature_is_accepted(self) -> None:
        body = self._body()

        response = self._post(body, HTTP_X_SIGNATURE=sign_payload(body, WEBHOOK_SECRET))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["outcome"], "BOOKING_CREATED")

    @override_settings(PAYMENT_WEBHOOK_SECRET=WEBHOOK_SECRET)
    def test_missing_signature_is_forbidden(self) -> None:
        response = self._post(self._body())

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(PaymentEvent.objects.exists())

    @override_settings(PAYMENT_WEBHOOK_SECRET=WEBHOOK_SECRET)
    def test_tampered_body_is_forbidden(self) -> None:
        signature = sign_payload(self._body(), WEBHOOK_SECRET)

        response = self._post(self._body(amount="1.00"), HTTP_X_SIGNATURE=signature)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Booking.objects.exists())
