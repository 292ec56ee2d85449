"""Model signal handlers for properties."""

from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Property, PropertyAvailability


@receiver(post_save, sender=Property)
def create_availability(sender, instance, created, **kwargs):
    """Every new property starts claimable."""
    if created:
        PropertyAvailability.objects.get_or_create(property=instance)
