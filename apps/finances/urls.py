"""URL routing for the finance domain."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import PaymentWebhookView

urlpatterns = [
    path("webhooks/payments/", PaymentWebhookView.as_view(), name="payment-webhook"),
]
