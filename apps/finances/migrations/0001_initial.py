from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("bookings", "0001_initial"),
        ("leases", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PaymentEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("transaction_id", models.CharField(max_length=100, unique=True)),
                ("tenant_id", models.BigIntegerField()),
                ("property_id", models.BigIntegerField()),
                (
                    "kind",
                    models.CharField(
                        choices=[("DEPOSIT", "Deposit"), ("RENT", "Rent"), ("FULL_PAYMENT", "Deposit and rent")],
                        max_length=16,
                    ),
                ),
                ("amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("currency", models.CharField(default="KES", max_length=3)),
                (
                    "outcome",
                    models.CharField(choices=[("SUCCESS", "Success"), ("FAILURE", "Failure")], max_length=16),
                ),
                ("provider_timestamp", models.DateTimeField(blank=True, null=True)),
                ("received_at", models.DateTimeField(auto_now_add=True)),
                ("payload", models.JSONField(blank=True, default=dict)),
                (
                    "processing_status",
                    models.CharField(
                        choices=[("received", "Received"), ("processed", "Processed"), ("rejected", "Rejected")],
                        default="received",
                        max_length=16,
                    ),
                ),
                ("result_code", models.CharField(blank=True, max_length=32)),
                ("failure_reason", models.TextField(blank=True)),
                ("processed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "booking",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="payment_events",
                        to="bookings.booking",
                    ),
                ),
                (
                    "lease",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="payment_events",
                        to="leases.lease",
                    ),
                ),
            ],
            options={
                "verbose_name": "Payment event",
                "verbose_name_plural": "Payment events",
                "ordering": ["-received_at"],
                "indexes": [
                    models.Index(fields=["tenant_id", "kind"], name="payment_event_tenant_kind_idx"),
                    models.Index(fields=["processing_status"], name="payment_event_status_idx"),
                ],
            },
        ),
    ]
