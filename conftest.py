"""Shared pytest fixtures."""

from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from apps.properties.models import Property

TODAY = date(2026, 3, 2)


@pytest.fixture
def make_user(db):
    def _make(username, **extra):
        extra.setdefault("email", f"{username}@example.com")
        return get_user_model().objects.create_user(username=username, password="pass", **extra)

    return _make


@pytest.fixture
def owner(make_user):
    return make_user("landlord")


@pytest.fixture
def tenant(make_user):
    return make_user("tenant", first_name="Wanjiru", last_name="Kamau")


@pytest.fixture
def rival(make_user):
    return make_user("rival")


@pytest.fixture
def make_property(owner):
    def _make(title="Kilimani 2BR", **extra):
        extra.setdefault("rent_amount", Decimal("45000.00"))
        extra.setdefault("deposit_amount", Decimal("45000.00"))
        return Property.objects.create(owner=owner, title=title, address="Argwings Kodhek Rd", **extra)

    return _make


@pytest.fixture
def listing(make_property):
    return make_property()


@pytest.fixture
def book():
    """Open a booking the way a confirmed deposit does."""
    from apps.bookings.application.command_handlers import (
        CreateBookingFromDepositCommand,
        CreateBookingFromDepositHandler,
    )

    def _book(tenant, property_obj, today=TODAY):
        return CreateBookingFromDepositHandler().handle(
            CreateBookingFromDepositCommand(tenant_id=tenant.pk, property_id=property_obj.pk, today=today)
        )

    return _book
