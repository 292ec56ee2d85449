"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.application.command_handlers import (
    CreateBookingFromDepositCommand,
    CreateBookingFromDepositHandler,
)
from apps.bookings.models import Booking
from apps.properties.ledger import AvailabilityLedger
from apps.properties.models import Property

User = get_user_model()


class BookingAPITests(APITestCase):
    """Covers listing, cancelling and the booking status lookups."""

    def setUp(self) -> None:
        self.owner = User.objects.create_user(username="landlord", password="pass")
        self.tenant = User.objects.create_user(username="tenant", password="pass", email="tenant@example.com")
        self.other_tenant = User.objects.create_user(username="other", password="pass")
        self.staff = User.objects.create_user(username="staff", password="pass", is_staff=True)
        self.property = self._property("Kilimani 2BR")
        self.other_property = self._property("Westlands studio")
        self.booking = self._book(self.tenant, self.property)
        self.other_booking = self._book(self.other_tenant, self.other_property)
        self.list_url = reverse("booking-list")

    def _property(self, title: str) -> Property:
        return Property.objects.create(
            owner=self.owner,
            title=title,
            rent_amount=Decimal("45000.00"),
            deposit_amount=Decimal("45000.00"),
        )

    def _book(self, tenant, property_obj) -> Booking:
        return CreateBookingFromDepositHandler().handle(
            CreateBookingFromDepositCommand(
                tenant_id=tenant.pk,
                property_id=property_obj.pk,
                today=date(2026, 3, 2),
            )
        )

    def _cancel_url(self, booking: Booking) -> str:
        return reverse("booking-cancel", args=[booking.pk])

    def test_authentication_required(self) -> None:
        response = self.client.get(self.list_url)

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_tenant_sees_only_own_bookings(self) -> None:
        self.client.force_authenticate(self.tenant)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        ids = [item["id"] for item in response.data]
        self.assertEqual(ids, [self.booking.pk])
        self.assertEqual(response.data[0]["status"], Booking.Status.ACTIVE)
        self.assertEqual(response.data[0]["payment_deadline"], "2026-03-17")
        self.assertIsNone(response.data[0]["lease_id"])

    def test_staff_sees_all_bookings(self) -> None:
        self.client.force_authenticate(self.staff)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

    def test_tenant_can_cancel_booking(self) -> None:
        self.client.force_authenticate(self.tenant)

        response = self.client.post(self._cancel_url(self.booking), {"reason": "Found another place"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Booking.Status.CANCELLED)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.cancellation_reason, "Found another place")
        self.assertTrue(AvailabilityLedger().is_claimable(self.property.pk))

    def test_cancelling_twice_is_a_conflict(self) -> None:
        self.client.force_authenticate(self.tenant)
        self.client.post(self._cancel_url(self.booking), {}, format="json")

        response = self.client.post(self._cancel_url(self.booking), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "INVALID_TRANSITION")

    def test_me_returns_callers_active_booking(self) -> None:
        self.client.force_authenticate(self.tenant)

        response = self.client.get(reverse("booking-me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["active"])
        self.assertEqual(response.data["booking"]["id"], self.booking.pk)

    def test_me_without_active_booking_returns_null(self) -> None:
        self.client.force_authenticate(self.staff)

        response = self.client.get(reverse("booking-me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["active"])
        self.assertIsNone(response.data["booking"])

    def test_property_status_follows_booking_lifecycle(self) -> None:
        self.client.force_authenticate(self.other_tenant)
        url = reverse("booking-property-status", kwargs={"property_id": self.property.pk})

        booked = self.client.get(url)
        self.client.force_authenticate(self.tenant)
        self.client.post(self._cancel_url(self.booking), {}, format="json")
        released = self.client.get(url)

        self.assertEqual(booked.status_code, status.HTTP_200_OK)
        self.assertEqual(booked.data, {"property_id": self.property.pk, "booked": True})
        self.assertFalse(released.data["booked"])

    def test_property_status_for_unknown_property_is_not_found(self) -> None:
        self.client.force_authenticate(self.tenant)

        response = self.client.get(reverse("booking-property-status", kwargs={"property_id": 999999}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "NOT_FOUND")

    def test_cannot_cancel_someone_elses_booking(self) -> None:
        self.client.force_authenticate(self.tenant)

        response = self.client.post(self._cancel_url(self.other_booking), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.other_booking.refresh_from_db()
        self.assertEqual(self.other_booking.status, Booking.Status.ACTIVE)
