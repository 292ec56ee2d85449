import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("properties", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("ACTIVE", "Active"),
                            ("COMPLETED", "Completed"),
                            ("EXPIRED", "Expired"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="PENDING",
                        max_length=16,
                    ),
                ),
                ("deposit_paid", models.BooleanField(default=False)),
                ("rent_paid", models.BooleanField(default=False)),
                ("start_date", models.DateField()),
                ("expiry_date", models.DateField()),
                (
                    "payment_deadline",
                    models.DateField(help_text="Last day rent is accepted before the booking expires."),
                ),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("expired_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("cancellation_reason", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "property",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="properties.property",
                    ),
                ),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking",
                "verbose_name_plural": "Bookings",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "payment_deadline"], name="booking_status_deadline_idx"),
                    models.Index(fields=["tenant", "status"], name="booking_tenant_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "ACTIVE")),
                        fields=("tenant",),
                        name="booking_one_active_per_tenant",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("status", "ACTIVE")),
                        fields=("property",),
                        name="booking_one_active_per_property",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("rent_paid", False), ("deposit_paid", True), _connector="OR"),
                        name="booking_rent_requires_deposit",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("expiry_date__gt", models.F("start_date"))),
                        name="booking_expiry_after_start",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("payment_deadline__lte", models.F("expiry_date"))),
                        name="booking_deadline_before_expiry",
                    ),
                ],
            },
        ),
    ]
