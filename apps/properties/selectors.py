"""Lookups the booking core uses to resolve tenants and properties."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore

from shared.exceptions import NotFoundError

from .models import Property


def find_user(user_id: int):
    User = get_user_model()
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Tenant {user_id} not found")


def find_property(property_id: int) -> Property:
    try:
        return Property.objects.get(pk=property_id)
    except (Property.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Property {property_id} not found")
